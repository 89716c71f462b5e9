"""
Pure decision logic for the permission flow.
"""

from ...schemas.flow import ConfigSnapshot, FlowDecision, FlowRequest, PromptVariant


def decide(request: FlowRequest, snapshot: ConfigSnapshot) -> FlowDecision:
    """
    Work out what the flow needs to obtain.

    An explicit override on the request wins over the stored view-only flag.
    Start-on-login only counts where the platform supports it.

    Args:
        request: Invocation parameters
        snapshot: Configuration values read at flow start

    Returns:
        FlowDecision
    """
    if request.capability_override is not None:
        capability_needed = not request.capability_override
    else:
        capability_needed = not snapshot.view_only

    auto_start_needed = snapshot.platform_supports_autostart and snapshot.start_on_boot

    return FlowDecision(
        capability_needed=capability_needed,
        auto_start_needed=auto_start_needed,
    )


def select_prompt_variant(decision: FlowDecision) -> PromptVariant:
    """Pick the consent message for what is needed."""
    if decision.capability_needed and decision.auto_start_needed:
        return PromptVariant.INPUT_AND_BOOT
    if decision.capability_needed:
        return PromptVariant.INPUT
    if decision.auto_start_needed:
        return PromptVariant.BOOT
    raise ValueError("No prompt for a decision that needs nothing")
