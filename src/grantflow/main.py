"""
Command-line entry point for the input access flow.
"""

import logging
import sys
from typing import List, Optional

from .utils.logging import setup_logging
from .errors import GrantFlowError
from .schemas.flow import FlowRequest
from .services.flow.runner import create_controller, run_flow
from .utils.interaction.consent import ConsoleConsentUI
from .utils.platform.platform_detector import detect_platform
from .utils.platform.settings_navigator import SettingsNavigator
from .utils.ui import ICONS, THEME, console

logger = logging.getLogger(__name__)

EXIT_GRANTED = 0
EXIT_DENIED = 1
EXIT_STALLED = 2
EXIT_ERROR = 3


def main(request: FlowRequest) -> int:
    """
    Run one permission flow.

    Args:
        request: Invocation parameters

    Returns:
        Process exit code
    """
    capabilities = detect_platform()
    logger.debug(
        "Platform %s %s, accessibility API %s, start on login supported: %s",
        capabilities.os_type,
        capabilities.os_version,
        capabilities.accessibility_api_type,
        capabilities.supports_start_on_login,
    )

    controller = create_controller(
        request,
        consent_ui=ConsoleConsentUI(console),
        navigator=SettingsNavigator(console),
    )

    outcome = run_flow(controller)

    if outcome is None:
        return EXIT_STALLED
    if outcome.granted:
        console.print(f"  [{THEME['success']}]{ICONS['success']} Input access granted[/]")
        return EXIT_GRANTED
    console.print(f"  [{THEME['muted']}]{ICONS['error']} Input access not granted[/]")
    return EXIT_DENIED


def cli(argv: Optional[List[str]] = None) -> int:
    """CLI entry point with argument parsing."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Request accessibility access for remote input",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output with detailed logs",
    )
    parser.add_argument(
        "--no-service-start",
        action="store_true",
        help="Do not start the server with the result when done",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--view-only",
        dest="view_only",
        action="store_const",
        const=True,
        default=None,
        help="Input is not needed, ignore the stored setting",
    )
    mode.add_argument(
        "--input",
        dest="view_only",
        action="store_const",
        const=False,
        help="Input is needed, ignore the stored setting",
    )

    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    request = FlowRequest(
        suppress_service_start=args.no_service_start,
        capability_override=args.view_only,
    )

    try:
        return main(request)
    except GrantFlowError as e:
        console.print(f"  [{THEME['error']}]{ICONS['error']} {e}[/]")
        return EXIT_ERROR
    except KeyboardInterrupt:
        console.print(f"\n\n  [{THEME['muted']}]Goodbye[/]")
        return EXIT_STALLED


if __name__ == "__main__":
    sys.exit(cli())
