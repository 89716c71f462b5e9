"""
Permission flow: decision logic and controller state machine.

The terminal host loop lives in .runner and is imported from there.
"""

from .controller import PermissionFlowController
from .decision import decide, select_prompt_variant
from .protocol import (
    CapabilityStatusProvider,
    ConsentUI,
    DependentService,
    SettingsNavigatorProtocol,
)

__all__ = [
    "PermissionFlowController",
    "decide",
    "select_prompt_variant",
    "CapabilityStatusProvider",
    "ConsentUI",
    "DependentService",
    "SettingsNavigatorProtocol",
]
