"""
Settings specific exceptions.

Invalid field values are never raised: validators resolve them to a default
and report a warning. Only API misuse and file access problems surface here.
"""

from .base import SettingsSystemError, ConfigurationError


class MalformedInvocationError(ConfigurationError):
    """A field check was called with an unsupported combination of arguments."""

    def __init__(self, config_key: str = None, config_value=None, reason: str = None):
        super().__init__(config_key, config_value, reason)


class PersistenceIOError(SettingsSystemError):
    """A settings file could not be written or read."""

    def __init__(self, path, operation: str, reason: str = None):
        self.path = str(path)
        self.operation = operation
        self.reason = reason
        message = f"Unable to {operation} settings file '{self.path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
