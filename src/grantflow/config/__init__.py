"""
Configuration module for persisted server settings and their defaults.
"""

from .settings import ConfigStore, Defaults, default_config_dir

__all__ = ["ConfigStore", "Defaults", "default_config_dir"]
