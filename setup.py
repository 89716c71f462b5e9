"""
Setup script for the input access flow.
"""

from setuptools import setup, find_packages

setup(
    name="grantflow",
    version="0.1.0",
    description="Accessibility/input access acquisition flow for a remote-control server",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="Grantflow Team",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pydantic>=2.0.0",
        "rich>=13.0.0",
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0.0",
    ],
    extras_require={
        "windows": [
            "comtypes>=1.2.0",
        ],
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "grantflow=grantflow.main:cli",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
