"""
Pydantic schemas for permission flow requests, decisions and messages.
"""

from .flow import (
    ConfigSnapshot,
    ConsentResponse,
    FlowDecision,
    FlowOutcome,
    FlowRequest,
    FlowState,
    LaunchResult,
    NavigationFinished,
    OutcomeNotification,
    PromptVariant,
    SettingsScreen,
)

__all__ = [
    "ConfigSnapshot",
    "ConsentResponse",
    "FlowDecision",
    "FlowOutcome",
    "FlowRequest",
    "FlowState",
    "LaunchResult",
    "NavigationFinished",
    "OutcomeNotification",
    "PromptVariant",
    "SettingsScreen",
]
