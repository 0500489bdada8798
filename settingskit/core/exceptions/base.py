"""
Base exception classes for the settingskit package.
"""


class SettingsSystemError(Exception):
    """Base exception for all settingskit errors."""
    pass


class ConfigurationError(SettingsSystemError):
    """Base exception for configuration errors."""

    def __init__(self, config_key: str = None, config_value=None, reason: str = None):
        self.config_key = config_key
        self.config_value = config_value
        self.reason = reason
        message = "Configuration error"
        if config_key:
            message += f" for '{config_key}'"
        if config_value is not None:
            message += f" with value '{config_value}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
