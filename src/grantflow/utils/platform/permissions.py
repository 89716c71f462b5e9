"""
Cross-platform accessibility permission checker.
Reports whether input injection is currently allowed for this process.
"""

import importlib.util
import logging
import platform
import subprocess
from typing import Optional

from ...services.flow.protocol import CapabilityStatusProvider

logger = logging.getLogger(__name__)


class PermissionStatus:
    """Permission status constants."""

    GRANTED = "granted"
    DENIED = "denied"
    NOT_DETERMINED = "not_determined"
    UNKNOWN = "unknown"


class PermissionChecker:
    """Cross-platform accessibility permission checker."""

    def __init__(self):
        """Initialize permission checker."""
        self.os_type = platform.system().lower()

    def check_accessibility(self) -> str:
        """Check the accessibility permission for the current platform."""
        if self.os_type == "darwin":
            return self._check_macos_accessibility()
        if self.os_type == "windows":
            return self._check_windows_uiautomation()
        if self.os_type == "linux":
            return self._check_linux_atspi()
        return PermissionStatus.UNKNOWN

    def _check_macos_accessibility(self) -> str:
        """Check macOS Accessibility permission."""
        try:
            script = 'tell application "System Events" to return true'
            result = subprocess.run(
                ["osascript", "-e", script],
                capture_output=True,
                text=True,
                timeout=5,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("osascript check failed: %s", e)
            return PermissionStatus.UNKNOWN
        if result.returncode == 0:
            return PermissionStatus.GRANTED
        if "not allowed" in result.stderr.lower():
            return PermissionStatus.DENIED
        return PermissionStatus.NOT_DETERMINED

    def _check_windows_uiautomation(self) -> str:
        """Check Windows UI Automation availability."""
        if importlib.util.find_spec("comtypes") is not None:
            return PermissionStatus.GRANTED
        return PermissionStatus.DENIED

    def _check_linux_atspi(self) -> str:
        """Check Linux AT-SPI availability."""
        try:
            result = subprocess.run(
                [
                    "gsettings",
                    "get",
                    "org.gnome.desktop.interface",
                    "toolkit-accessibility",
                ],
                capture_output=True,
                text=True,
                timeout=5,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("gsettings check failed: %s", e)
            return PermissionStatus.UNKNOWN
        if result.returncode == 0 and "true" in result.stdout.lower():
            return PermissionStatus.GRANTED
        return PermissionStatus.DENIED


class AccessibilityStatusProvider(CapabilityStatusProvider):
    """Capability status backed by PermissionChecker, queried live each time."""

    def __init__(self, checker: Optional[PermissionChecker] = None):
        self.checker = checker or PermissionChecker()

    def is_active(self) -> bool:
        status = self.checker.check_accessibility()
        logger.debug("Accessibility permission status: %s", status)
        return status == PermissionStatus.GRANTED
