"""
Collaborator contracts for the permission flow controller.

Concrete implementations live in utils.platform, utils.interaction and
services.notifier. Tests substitute fakes.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ...schemas.flow import (
    LaunchResult,
    OutcomeNotification,
    PromptVariant,
    SettingsScreen,
)


class CapabilityStatusProvider(ABC):
    """Reports whether accessibility/input access is currently active."""

    @abstractmethod
    def is_active(self) -> bool:
        ...


class ConsentUI(ABC):
    """
    Modal yes/no prompt.

    present() only shows the prompt. The answer comes back to the controller
    as a ConsentResponse message; blocking hosts collect it with
    wait_for_answer().
    """

    @abstractmethod
    def present(self, variant: PromptVariant) -> None:
        ...

    @abstractmethod
    def wait_for_answer(self) -> bool:
        """Block until the prompt is answered. True means accepted."""
        ...

    @abstractmethod
    def show_fallback_notice(self) -> None:
        """Tell the user the accessibility screen was not found."""
        ...


class SettingsNavigatorProtocol(ABC):
    """Opens system settings screens."""

    @abstractmethod
    def open(self, screen: SettingsScreen, hint: Optional[str] = None) -> LaunchResult:
        """
        Open a settings screen.

        Args:
            screen: Which screen to open
            hint: Deep-link hint to highlight the relevant entry

        Returns:
            LaunchResult, never raises for a missing screen
        """
        ...

    @abstractmethod
    def wait_for_return(self) -> None:
        """Block until the user is back from the settings screen."""
        ...


class DependentService(ABC):
    """Long-running service that consumes the flow outcome."""

    @abstractmethod
    def notify(self, notification: OutcomeNotification) -> None:
        ...
