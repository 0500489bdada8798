"""
Settings management.

- core: validation, field descriptors, persistence and the Settings base class
- system: the package's own logging settings
"""

from .core import (
    ValidationOutcome, check_logical, check_string, check_number, format_number,
    FieldSpec, logical_field, string_field, numeric_field,
    IniStore, Record, Settings, SelfTestResult, run_round_trip
)

from .system import LoggingSettings, LogLevel


def load_logging_settings(file_path: str = None, logger=None) -> LoggingSettings:
    """Build logging settings, optionally from a settings file, and validate them."""
    settings = LoggingSettings(logger=logger)
    if file_path is not None:
        settings.import_ini_file(file_path)
    settings.check()
    return settings


__all__ = [
    # Core
    'ValidationOutcome',
    'check_logical',
    'check_string',
    'check_number',
    'format_number',
    'FieldSpec',
    'logical_field',
    'string_field',
    'numeric_field',
    'IniStore',
    'Record',
    'Settings',
    'SelfTestResult',
    'run_round_trip',

    # System
    'LoggingSettings',
    'LogLevel',

    # Convenience functions
    'load_logging_settings'
]
