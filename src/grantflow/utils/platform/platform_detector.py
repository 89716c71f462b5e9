"""
Platform detection for the permission flow.
"""

import os
import platform
from typing import Literal, Optional

from pydantic import BaseModel, Field

APP_ID = "io.grantflow"
INPUT_SERVICE_NAME = "grantflow.InputService"


class PlatformCapabilities(BaseModel):
    """
    Detected platform capabilities relevant to input access.
    """

    os_type: Literal["macos", "windows", "linux"] = Field(
        description="Detected operating system type"
    )
    os_version: str = Field(description="Operating system version string")
    accessibility_api_type: Optional[str] = Field(
        default=None,
        description="Type of accessibility API (NSAccessibility, UIA, AT-SPI)",
    )
    supports_start_on_login: bool = Field(
        description="Whether the server can be started on user login"
    )


def get_os_type() -> Literal["macos", "windows", "linux"]:
    """Normalized OS name, unknown systems are treated as linux."""
    system = platform.system().lower()
    if system == "darwin":
        return "macos"
    if system == "windows":
        return "windows"
    return "linux"


def supports_start_on_login() -> bool:
    """
    Whether this platform can start the server on login.

    Linux needs an XDG desktop session for autostart entries.
    """
    os_type = get_os_type()
    if os_type in ("macos", "windows"):
        return True
    return bool(os.environ.get("XDG_CURRENT_DESKTOP"))


def settings_hint() -> str:
    """Deep-link hint identifying our entry on the accessibility screen."""
    return f"{APP_ID}/{INPUT_SERVICE_NAME}"


def detect_platform() -> PlatformCapabilities:
    """
    Detect current platform.

    Returns:
        PlatformCapabilities with detected system information
    """
    os_type = get_os_type()
    api_types = {
        "macos": "NSAccessibility",
        "windows": "UI Automation",
        "linux": "AT-SPI",
    }
    return PlatformCapabilities(
        os_type=os_type,
        os_version=platform.release(),
        accessibility_api_type=api_types[os_type],
        supports_start_on_login=supports_start_on_login(),
    )
