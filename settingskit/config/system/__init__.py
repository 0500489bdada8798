"""
System configuration domain.

Settings used by the package itself.
"""

from .logging_settings import LoggingSettings, LogLevel

__all__ = [
    'LoggingSettings',
    'LogLevel'
]
