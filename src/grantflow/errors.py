"""
Exception hierarchy for grantflow.
"""


class GrantFlowError(Exception):
    """Base class for all grantflow errors."""


class ConfigError(GrantFlowError):
    """Configuration file exists but cannot be parsed."""


class ServiceStartError(GrantFlowError):
    """The dependent service could not be started."""


class InvalidTransitionError(GrantFlowError):
    """A message arrived in a state that does not accept it."""
