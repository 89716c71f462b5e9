"""
Blocking host loop for running a permission flow from a terminal.
"""

import logging
from typing import Optional

from ...config.settings import ConfigStore
from ...schemas.flow import (
    ConsentResponse,
    FlowOutcome,
    FlowRequest,
    FlowState,
    NavigationFinished,
)
from ...utils.interaction.consent import ConsoleConsentUI
from ...utils.platform.permissions import AccessibilityStatusProvider
from ...utils.platform.platform_detector import settings_hint, supports_start_on_login
from ...utils.platform.settings_navigator import SettingsNavigator
from ..notifier import ProcessServiceNotifier
from .controller import PermissionFlowController
from .protocol import ConsentUI, SettingsNavigatorProtocol

logger = logging.getLogger(__name__)


def create_controller(
    request: FlowRequest,
    config: Optional[ConfigStore] = None,
    consent_ui: Optional[ConsentUI] = None,
    navigator: Optional[SettingsNavigatorProtocol] = None,
) -> PermissionFlowController:
    """
    Wire a controller to the real platform collaborators.

    Args:
        request: Invocation parameters
        config: Config store, default location if not given
        consent_ui: Consent prompt, terminal prompt if not given
        navigator: Settings navigator, system navigator if not given

    Returns:
        PermissionFlowController in INIT state
    """
    config = config or ConfigStore()
    return PermissionFlowController(
        request=request,
        config=config,
        status_provider=AccessibilityStatusProvider(),
        consent_ui=consent_ui or ConsoleConsentUI(),
        navigator=navigator or SettingsNavigator(),
        service=ProcessServiceNotifier(config),
        platform_supports_autostart=supports_start_on_login(),
        settings_hint=settings_hint(),
    )


def run_flow(controller: PermissionFlowController) -> Optional[FlowOutcome]:
    """
    Drive a controller to completion, waiting on the user at each step.

    The waits go through the controller's own consent UI and navigator.
    A KeyboardInterrupt during either wait propagates and leaves the flow
    without an outcome.

    Args:
        controller: Controller in INIT state

    Returns:
        The flow outcome, or None if the settings screen could not be
        opened and the flow stalled
    """
    state = controller.start()

    if state == FlowState.AWAITING_CONSENT:
        accepted = controller.consent_ui.wait_for_answer()
        state = controller.deliver(ConsentResponse(accepted=accepted))

    if state == FlowState.AWAITING_NAVIGATION:
        if controller.is_stalled:
            logger.warning("No settings screen could be opened, abandoning flow")
            return None
        controller.navigator.wait_for_return()
        controller.deliver(NavigationFinished())

    return controller.outcome
