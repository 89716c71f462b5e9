"""
Opens system settings screens on macOS, Windows and Linux.
"""

import logging
import os
import shutil
import subprocess
from typing import Dict, List, Optional

from rich.console import Console

from ...schemas.flow import LaunchResult, SettingsScreen
from ...services.flow.protocol import SettingsNavigatorProtocol
from ..ui import THEME, console as default_console
from .platform_detector import get_os_type

logger = logging.getLogger(__name__)

ENV_SETTINGS_HIGHLIGHT = "GRANTFLOW_SETTINGS_HIGHLIGHT"

# Candidate launchers per OS and screen, tried in order.
SETTINGS_LAUNCHERS: Dict[str, Dict[SettingsScreen, List[List[str]]]] = {
    "macos": {
        SettingsScreen.ACCESSIBILITY: [
            [
                "open",
                "x-apple.systempreferences:com.apple.preference.security?Privacy_Accessibility",
            ],
        ],
        SettingsScreen.GENERAL: [
            ["open", "x-apple.systempreferences:"],
        ],
    },
    "windows": {
        SettingsScreen.ACCESSIBILITY: [
            ["cmd", "/c", "start", "", "ms-settings:easeofaccess"],
        ],
        SettingsScreen.GENERAL: [
            ["cmd", "/c", "start", "", "ms-settings:"],
        ],
    },
    "linux": {
        SettingsScreen.ACCESSIBILITY: [
            ["gnome-control-center", "universal-access"],
            ["unity-control-center", "universal-access"],
        ],
        SettingsScreen.GENERAL: [
            ["gnome-control-center"],
            ["systemsettings"],
            ["unity-control-center"],
        ],
    },
}


def is_stub_handler(path: str) -> bool:
    """Placeholder handlers that exist but do nothing have 'stub' in their name."""
    return "stub" in os.path.basename(path).lower()


class SettingsNavigator(SettingsNavigatorProtocol):
    """
    Launches settings screens and waits for the user to come back.
    """

    def __init__(self, console: Optional[Console] = None, os_type: Optional[str] = None):
        self.console = console or default_console
        self.os_type = os_type or get_os_type()

    def resolve(self, screen: SettingsScreen) -> Optional[List[str]]:
        """
        Find a working launcher command for a screen.

        Returns:
            Command with its executable resolved, or None if there is none
        """
        for candidate in SETTINGS_LAUNCHERS.get(self.os_type, {}).get(screen, []):
            path = shutil.which(candidate[0])
            if path is None:
                continue
            if is_stub_handler(path):
                logger.debug("Skipping stub settings handler %s", path)
                continue
            return [path] + candidate[1:]
        return None

    def open(self, screen: SettingsScreen, hint: Optional[str] = None) -> LaunchResult:
        """
        Open a settings screen.

        Args:
            screen: Which screen to open
            hint: Entry to highlight, exported to the launcher environment

        Returns:
            LaunchResult
        """
        command = self.resolve(screen)
        if command is None:
            logger.info("No launcher for %s settings on %s", screen.value, self.os_type)
            return LaunchResult.UNRESOLVED

        env = dict(os.environ)
        if hint:
            env[ENV_SETTINGS_HIGHLIGHT] = hint

        try:
            subprocess.Popen(
                command,
                env=env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.warning("Could not launch %s: %s", command[0], e)
            return LaunchResult.FAILED

        logger.debug("Opened %s settings with %s", screen.value, command[0])
        return LaunchResult.LAUNCHED

    def wait_for_return(self) -> None:
        """
        Block until the user is back from the settings screen.

        End of input counts as returning. Ctrl-C propagates so the host can
        drop the flow without an outcome.
        """
        self.console.print(
            f"\n  [{THEME['muted']}]Grant access in System Settings, then press Enter...[/]"
        )
        try:
            self.console.input()
        except EOFError:
            pass
