"""
Centralized logging configuration.
"""

import logging
import warnings

from rich.logging import RichHandler

from ..ui import console

NOISY_LIBRARIES = [
    "asyncio",
    "urllib3",
    "comtypes",
]

PACKAGE_LOGGER = "grantflow"


class NullHandler(logging.Handler):
    """Handler that discards all log records."""

    def emit(self, record):
        pass


def setup_logging(verbose: bool = False) -> None:
    """
    Route grantflow logs to the shared console and silence third-party noise.

    Args:
        verbose: If True, log at DEBUG. Otherwise only warnings are shown.
    """
    warnings.filterwarnings("ignore", category=DeprecationWarning)

    for logger_name in NOISY_LIBRARIES:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.CRITICAL)
        logger.propagate = False
        logger.handlers = [NullHandler()]

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False
    package_logger.handlers = [
        RichHandler(
            console=console,
            show_time=verbose,
            show_path=verbose,
            markup=False,
        )
    ]
