"""
Core exceptions for the settingskit package.

This module provides all exception classes used by the package,
organized with a clear inheritance hierarchy.
"""

# Base exceptions
from .base import (
    SettingsSystemError,
    ConfigurationError
)

# Settings exceptions
from .settings import (
    MalformedInvocationError,
    PersistenceIOError
)

__all__ = [
    # Base exceptions
    'SettingsSystemError',
    'ConfigurationError',

    # Settings exceptions
    'MalformedInvocationError',
    'PersistenceIOError'
]
