"""
settingskit: validated, persistable settings objects.
"""

from settingskit.config import (
    Settings, FieldSpec, logical_field, string_field, numeric_field,
    ValidationOutcome, check_logical, check_string, check_number,
    IniStore, Record, SelfTestResult, run_round_trip,
    LoggingSettings, load_logging_settings
)
from settingskit.core import MalformedInvocationError, PersistenceIOError, SettingsSystemError
from settingskit.logger import SettingsStructLogger, get_settingskit_logger, init_logger

__version__ = '0.1.0'
