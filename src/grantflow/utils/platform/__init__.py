"""
Platform detection, permission checks and settings navigation.
"""

from .platform_detector import (
    PlatformCapabilities,
    detect_platform,
    settings_hint,
    supports_start_on_login,
)
from .permissions import AccessibilityStatusProvider, PermissionChecker, PermissionStatus
from .settings_navigator import SettingsNavigator

__all__ = [
    "PlatformCapabilities",
    "detect_platform",
    "settings_hint",
    "supports_start_on_login",
    "AccessibilityStatusProvider",
    "PermissionChecker",
    "PermissionStatus",
    "SettingsNavigator",
]
