"""
Pydantic schemas for a single permission flow invocation.

All models are frozen: they are created at flow start (or when a platform
callback arrives) and never mutated afterwards.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class FlowState(str, Enum):
    """States of the permission flow state machine."""

    INIT = "init"
    DECIDED_NOT_NEEDED = "decided_not_needed"
    DECIDED_ALREADY_GRANTED = "decided_already_granted"
    AWAITING_CONSENT = "awaiting_consent"
    DECLINED = "declined"
    AWAITING_NAVIGATION = "awaiting_navigation"
    RESUMED = "resumed"

    @property
    def is_terminal(self) -> bool:
        return self in (
            FlowState.DECIDED_NOT_NEEDED,
            FlowState.DECIDED_ALREADY_GRANTED,
            FlowState.DECLINED,
            FlowState.RESUMED,
        )


class PromptVariant(str, Enum):
    """Which consent message to show."""

    INPUT = "input"
    BOOT = "boot"
    INPUT_AND_BOOT = "input_and_boot"


class SettingsScreen(str, Enum):
    """System settings screens the navigator can open."""

    ACCESSIBILITY = "accessibility"
    GENERAL = "general"


class LaunchResult(str, Enum):
    """Result of asking the platform to open a settings screen."""

    LAUNCHED = "launched"
    UNRESOLVED = "unresolved"
    FAILED = "failed"


class FlowRequest(BaseModel):
    """
    Parameters of the triggering invocation.
    """

    model_config = ConfigDict(frozen=True)

    suppress_service_start: bool = Field(
        default=False,
        description="Do not notify the dependent service when the flow ends",
    )
    capability_override: Optional[bool] = Field(
        default=None,
        description="Explicit view-only flag; None means read it from config",
    )


class ConfigSnapshot(BaseModel):
    """
    Configuration values the decision depends on, read once at flow start.
    """

    model_config = ConfigDict(frozen=True)

    view_only: bool = Field(description="Server runs without input injection")
    start_on_boot: bool = Field(description="Server starts on user login")
    platform_supports_autostart: bool = Field(
        description="Whether this platform can start the server on login"
    )


class FlowDecision(BaseModel):
    """What the flow needs to obtain."""

    model_config = ConfigDict(frozen=True)

    capability_needed: bool
    auto_start_needed: bool

    @property
    def anything_needed(self) -> bool:
        return self.capability_needed or self.auto_start_needed


class FlowOutcome(BaseModel):
    """Terminal result of a flow."""

    model_config = ConfigDict(frozen=True)

    granted: bool


class OutcomeNotification(BaseModel):
    """One-shot message delivered to the dependent service."""

    model_config = ConfigDict(frozen=True)

    action: Literal["handle_input_result"] = "handle_input_result"
    outcome: FlowOutcome
    access_key: str = Field(description="Shared access credential")


class ConsentResponse(BaseModel):
    """Delivered when the user answers the consent prompt."""

    model_config = ConfigDict(frozen=True)

    accepted: bool


class NavigationFinished(BaseModel):
    """Delivered when the user comes back from the settings screen."""

    model_config = ConfigDict(frozen=True)
