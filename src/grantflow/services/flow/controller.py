"""
Permission flow controller.

Decides whether accessibility/input access is needed, asks the user, sends
them to system settings and reports the result to the dependent service.

The controller is a state machine over FlowState. Platform callbacks arrive
as typed messages through deliver():

    INIT ──start()──┬─> DECIDED_NOT_NEEDED
                    ├─> DECIDED_ALREADY_GRANTED
                    └─> AWAITING_CONSENT ──ConsentResponse──┬─> DECLINED
                                                            └─> AWAITING_NAVIGATION
                        AWAITING_NAVIGATION ──NavigationFinished──> RESUMED

Exactly one FlowOutcome is produced per controller, on entering a
terminal state.
"""

import logging
from typing import Optional, Union

from ...config.settings import ConfigStore
from ...errors import InvalidTransitionError
from ...schemas.flow import (
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
from .decision import decide, select_prompt_variant
from .protocol import (
    CapabilityStatusProvider,
    ConsentUI,
    DependentService,
    SettingsNavigatorProtocol,
)

logger = logging.getLogger(__name__)

FlowMessage = Union[ConsentResponse, NavigationFinished]


class PermissionFlowController:
    """
    Single-use controller for one permission flow invocation.
    """

    def __init__(
        self,
        request: FlowRequest,
        config: ConfigStore,
        status_provider: CapabilityStatusProvider,
        consent_ui: ConsentUI,
        navigator: SettingsNavigatorProtocol,
        service: DependentService,
        platform_supports_autostart: bool,
        settings_hint: Optional[str] = None,
    ):
        self.request = request
        self._config = config
        self._status_provider = status_provider
        self.consent_ui = consent_ui
        self.navigator = navigator
        self._service = service
        self._platform_supports_autostart = platform_supports_autostart
        self._settings_hint = settings_hint

        self.state = FlowState.INIT
        self.decision: Optional[FlowDecision] = None
        self.prompt_variant: Optional[PromptVariant] = None
        self.outcome: Optional[FlowOutcome] = None
        self.navigation_launched = False

    @property
    def is_finished(self) -> bool:
        return self.state.is_terminal

    @property
    def is_stalled(self) -> bool:
        """Waiting for a settings screen that never opened."""
        return self.state == FlowState.AWAITING_NAVIGATION and not self.navigation_launched

    def start(self) -> FlowState:
        """
        Run the decision table and either finish or show the consent prompt.

        Returns:
            The state the controller is in afterwards
        """
        if self.state != FlowState.INIT:
            raise InvalidTransitionError(f"start() called in state {self.state.value}")

        snapshot = self._config.snapshot(self._platform_supports_autostart)
        self.decision = decide(self.request, snapshot)
        logger.debug(
            "Input requested: %s, start on boot requested: %s",
            self.decision.capability_needed,
            self.decision.auto_start_needed,
        )

        if not self.decision.anything_needed:
            self._finish(False, FlowState.DECIDED_NOT_NEEDED)
            return self.state

        if self._status_provider.is_active():
            self._finish(True, FlowState.DECIDED_ALREADY_GRANTED)
            return self.state

        self.prompt_variant = select_prompt_variant(self.decision)
        self.state = FlowState.AWAITING_CONSENT
        self.consent_ui.present(self.prompt_variant)
        return self.state

    def deliver(self, message: FlowMessage) -> FlowState:
        """
        Feed a platform callback into the state machine.

        Args:
            message: ConsentResponse or NavigationFinished

        Returns:
            The state the controller is in afterwards

        Raises:
            InvalidTransitionError: If the current state does not accept the message
        """
        if isinstance(message, ConsentResponse) and self.state == FlowState.AWAITING_CONSENT:
            self._on_consent(message)
        elif (
            isinstance(message, NavigationFinished)
            and self.state == FlowState.AWAITING_NAVIGATION
        ):
            self._on_navigation_finished()
        else:
            raise InvalidTransitionError(
                f"{type(message).__name__} not accepted in state {self.state.value}"
            )
        return self.state

    def _on_consent(self, message: ConsentResponse) -> None:
        if not message.accepted:
            self._finish(False, FlowState.DECLINED)
            return

        self.state = FlowState.AWAITING_NAVIGATION
        self._open_settings()

    def _open_settings(self) -> None:
        result = self.navigator.open(SettingsScreen.ACCESSIBILITY, self._settings_hint)
        if result == LaunchResult.LAUNCHED:
            self.navigation_launched = True
            return

        logger.info("Accessibility settings not available (%s), falling back", result.value)
        self.consent_ui.show_fallback_notice()

        result = self.navigator.open(SettingsScreen.GENERAL)
        if result == LaunchResult.LAUNCHED:
            self.navigation_launched = True
            return

        # Nothing will resume us; the flow stays in AWAITING_NAVIGATION.
        logger.warning("General settings could not be opened either (%s)", result.value)

    def _on_navigation_finished(self) -> None:
        self._finish(self._status_provider.is_active(), FlowState.RESUMED)

    def _finish(self, granted: bool, terminal_state: FlowState) -> None:
        if self.outcome is not None:
            raise InvalidTransitionError("Flow outcome already emitted")

        self.outcome = FlowOutcome(granted=granted)
        self.state = terminal_state

        if granted:
            logger.info("Accessibility enabled")
        else:
            logger.info("Accessibility disabled")

        if not self.request.suppress_service_start:
            notification = OutcomeNotification(
                outcome=self.outcome,
                access_key=self._config.get_access_key(),
            )
            self._service.notify(notification)
