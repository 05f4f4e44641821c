"""Errors raised by the agent reply pipeline."""


class ConfigurationError(ValueError):
    """Action configuration is missing, malformed, or has the wrong shape."""
