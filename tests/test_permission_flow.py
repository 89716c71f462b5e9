"""
Tests for the permission flow controller state machine.
"""

import pytest

from conftest import FakeStatusProvider, write_settings
from grantflow.errors import InvalidTransitionError
from grantflow.schemas.flow import (
    ConsentResponse,
    FlowOutcome,
    FlowRequest,
    FlowState,
    LaunchResult,
    NavigationFinished,
    PromptVariant,
    SettingsScreen,
)


class TestShortCircuits:
    def test_nothing_needed_reports_denied_without_prompt(
        self, make_controller, config_dir, consent_ui, navigator, service
    ):
        """Scenario A: view-only and no start on boot."""
        write_settings(config_dir, view_only=True, start_on_boot=False)
        status = FakeStatusProvider(True)
        controller = make_controller(status=status)

        assert controller.start() == FlowState.DECIDED_NOT_NEEDED
        assert controller.outcome == FlowOutcome(granted=False)
        assert consent_ui.presented == []
        assert navigator.opened == []
        assert status.calls == 0
        assert len(service.notifications) == 1
        assert service.notifications[0].outcome.granted is False

    def test_unsupported_autostart_counts_as_not_needed(
        self, make_controller, config_dir, consent_ui
    ):
        write_settings(config_dir, view_only=True, start_on_boot=True)
        controller = make_controller(platform_supports_autostart=False)

        assert controller.start() == FlowState.DECIDED_NOT_NEEDED
        assert consent_ui.presented == []

    def test_already_granted_reports_granted_without_prompt(
        self, make_controller, consent_ui, service
    ):
        """Scenario B: input needed, access already active."""
        controller = make_controller(status=FakeStatusProvider(True))

        assert controller.start() == FlowState.DECIDED_ALREADY_GRANTED
        assert controller.outcome == FlowOutcome(granted=True)
        assert consent_ui.presented == []
        assert [n.outcome.granted for n in service.notifications] == [True]


class TestConsent:
    @pytest.mark.parametrize(
        "view_only,start_on_boot,expected",
        [
            (False, True, PromptVariant.INPUT_AND_BOOT),
            (False, False, PromptVariant.INPUT),
            (True, True, PromptVariant.BOOT),
        ],
    )
    def test_prompt_variant_matches_needs(
        self, make_controller, config_dir, consent_ui, view_only, start_on_boot, expected
    ):
        write_settings(config_dir, view_only=view_only, start_on_boot=start_on_boot)
        controller = make_controller()

        assert controller.start() == FlowState.AWAITING_CONSENT
        assert consent_ui.presented == [expected]
        assert controller.outcome is None

    def test_decline_reports_denied(self, make_controller, navigator, service):
        """Scenario C."""
        controller = make_controller(status=FakeStatusProvider(False, True))
        controller.start()

        assert controller.deliver(ConsentResponse(accepted=False)) == FlowState.DECLINED
        assert controller.outcome == FlowOutcome(granted=False)
        assert navigator.opened == []
        assert len(service.notifications) == 1

    def test_accept_opens_accessibility_settings_with_hint(self, make_controller, navigator):
        controller = make_controller()
        controller.start()

        state = controller.deliver(ConsentResponse(accepted=True))

        assert state == FlowState.AWAITING_NAVIGATION
        assert navigator.opened == [
            (SettingsScreen.ACCESSIBILITY, "io.grantflow/grantflow.InputService")
        ]
        assert controller.navigation_launched
        assert not controller.is_stalled


class TestNavigation:
    def test_resume_reads_status_fresh(self, make_controller, service):
        """Scenario D: status flips while the user is in settings."""
        status = FakeStatusProvider(False, True)
        controller = make_controller(status=status)
        controller.start()
        controller.deliver(ConsentResponse(accepted=True))

        assert controller.deliver(NavigationFinished()) == FlowState.RESUMED
        assert status.calls == 2
        assert controller.outcome == FlowOutcome(granted=True)
        assert [n.outcome.granted for n in service.notifications] == [True]

    def test_resume_still_inactive_reports_denied(self, make_controller):
        controller = make_controller(status=FakeStatusProvider(False, False))
        controller.start()
        controller.deliver(ConsentResponse(accepted=True))
        controller.deliver(NavigationFinished())

        assert controller.outcome == FlowOutcome(granted=False)

    @pytest.mark.parametrize("failure", [LaunchResult.UNRESOLVED, LaunchResult.FAILED])
    def test_unavailable_screen_falls_back_to_general(
        self, make_controller, navigator, consent_ui, failure
    ):
        navigator.results[SettingsScreen.ACCESSIBILITY] = failure
        controller = make_controller(status=FakeStatusProvider(False, True))
        controller.start()
        controller.deliver(ConsentResponse(accepted=True))

        assert [screen for screen, _ in navigator.opened] == [
            SettingsScreen.ACCESSIBILITY,
            SettingsScreen.GENERAL,
        ]
        assert consent_ui.fallback_notices == 1
        assert controller.navigation_launched

        controller.deliver(NavigationFinished())
        assert controller.outcome == FlowOutcome(granted=True)

    def test_double_failure_stalls_without_outcome(self, make_controller, navigator, service):
        """Scenario E: no screen opens, nothing is reported and nothing raises."""
        navigator.results[SettingsScreen.ACCESSIBILITY] = LaunchResult.UNRESOLVED
        navigator.results[SettingsScreen.GENERAL] = LaunchResult.FAILED
        controller = make_controller()
        controller.start()

        state = controller.deliver(ConsentResponse(accepted=True))

        assert state == FlowState.AWAITING_NAVIGATION
        assert controller.is_stalled
        assert not controller.is_finished
        assert controller.outcome is None
        assert service.notifications == []


class TestOutcomeEmission:
    @pytest.mark.parametrize(
        "statuses,messages,expected_state,granted",
        [
            ((True,), [], FlowState.DECIDED_ALREADY_GRANTED, True),
            ((False,), [ConsentResponse(accepted=False)], FlowState.DECLINED, False),
            (
                (False, True),
                [ConsentResponse(accepted=True), NavigationFinished()],
                FlowState.RESUMED,
                True,
            ),
        ],
    )
    def test_suppressed_service_start_sends_nothing(
        self, make_controller, service, statuses, messages, expected_state, granted
    ):
        controller = make_controller(
            request=FlowRequest(suppress_service_start=True),
            status=FakeStatusProvider(*statuses),
        )
        controller.start()
        for message in messages:
            controller.deliver(message)

        assert controller.state == expected_state
        assert controller.outcome == FlowOutcome(granted=granted)
        assert service.notifications == []

    def test_suppressed_not_needed_sends_nothing(self, make_controller, config_dir, service):
        write_settings(config_dir, view_only=True, start_on_boot=False)
        controller = make_controller(request=FlowRequest(suppress_service_start=True))
        controller.start()

        assert controller.outcome == FlowOutcome(granted=False)
        assert service.notifications == []

    def test_access_key_is_read_at_emission(self, make_controller, config_dir, service):
        write_settings(config_dir, access_key="before")
        controller = make_controller()
        controller.start()
        write_settings(config_dir, access_key="after")
        controller.deliver(ConsentResponse(accepted=False))

        assert service.notifications[0].access_key == "after"

    def test_override_request_skips_stored_flag(self, make_controller, config_dir, consent_ui):
        write_settings(config_dir, view_only=False, start_on_boot=False)
        controller = make_controller(request=FlowRequest(capability_override=True))

        assert controller.start() == FlowState.DECIDED_NOT_NEEDED
        assert consent_ui.presented == []

    def test_messages_after_termination_are_rejected(self, make_controller, service):
        controller = make_controller()
        controller.start()
        controller.deliver(ConsentResponse(accepted=False))

        with pytest.raises(InvalidTransitionError):
            controller.deliver(ConsentResponse(accepted=True))
        with pytest.raises(InvalidTransitionError):
            controller.deliver(NavigationFinished())
        assert len(service.notifications) == 1

    def test_navigation_before_consent_is_rejected(self, make_controller):
        controller = make_controller()
        controller.start()

        with pytest.raises(InvalidTransitionError):
            controller.deliver(NavigationFinished())
        assert controller.state == FlowState.AWAITING_CONSENT

    def test_start_twice_is_rejected(self, make_controller):
        controller = make_controller(status=FakeStatusProvider(True))
        controller.start()

        with pytest.raises(InvalidTransitionError):
            controller.start()
