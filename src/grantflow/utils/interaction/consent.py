"""
Terminal consent prompt for input access.
"""

from typing import Optional

from rich.console import Console
from rich.prompt import Confirm

from ...schemas.flow import PromptVariant
from ...services.flow.protocol import ConsentUI
from ..ui import ICONS, THEME, console as default_console

TITLE = "Input access"

MESSAGES = {
    PromptVariant.INPUT: (
        "Remote control needs accessibility access to inject mouse and keyboard "
        "input. Open System Settings and enable it now?"
    ),
    PromptVariant.BOOT: (
        "Starting the server on login needs accessibility access. "
        "Open System Settings and enable it now?"
    ),
    PromptVariant.INPUT_AND_BOOT: (
        "Remote control and starting the server on login need accessibility "
        "access. Open System Settings and enable it now?"
    ),
}

FALLBACK_NOTICE = (
    "The accessibility settings screen could not be found on this system. "
    "General settings will be opened instead; look for Accessibility there."
)


class ConsoleConsentUI(ConsentUI):
    """
    Yes/no prompt rendered with Rich.

    The prompt has no default: it keeps asking until it gets an answer.
    End of input counts as "no". Ctrl-C propagates so the host can drop
    the flow without an outcome.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or default_console
        self.variant: Optional[PromptVariant] = None

    def present(self, variant: PromptVariant) -> None:
        self.variant = variant
        c_border = THEME["border"]

        self.console.print()
        self.console.print(f"[{c_border}]╭{'─' * 50}╮[/]")
        self.console.print(f"[{c_border}]│[/] [bold {THEME['warning']}]{TITLE}[/]")
        self.console.print(f"[{c_border}]├{'─' * 50}┤[/]")
        self.console.print(f"[{c_border}]│[/] [{THEME['text']}]{MESSAGES[variant]}[/]")
        self.console.print(f"[{c_border}]╰{'─' * 50}╯[/]")

    def wait_for_answer(self) -> bool:
        """Block until the user answers the prompt shown by present()."""
        try:
            return Confirm.ask(
                f"  [{THEME['accent']}]{ICONS['arrow']}[/] Open settings",
                console=self.console,
            )
        except EOFError:
            return False

    def show_fallback_notice(self) -> None:
        self.console.print(
            f"\n  [{THEME['warning']}]{ICONS['warning']}[/] [{THEME['muted']}]{FALLBACK_NOTICE}[/]"
        )
