"""
Accessibility/input access acquisition flow for a remote-control server.
"""

from .schemas.flow import FlowOutcome, FlowRequest
from .services.flow.controller import PermissionFlowController

__version__ = "0.1.0"

__all__ = ["FlowOutcome", "FlowRequest", "PermissionFlowController"]
