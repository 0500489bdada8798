"""
Logging settings.

The package's own logging configuration, declared with the settings
framework so it can be validated, saved and reloaded like any other
settings object.
"""

from enum import Enum
from typing import List

from settingskit.config.core.fields import logical_field, numeric_field, string_field
from settingskit.config.core.settings import Settings
from settingskit.config.core.validator import ValidationOutcome
from settingskit.logger import DEFAULT_VERBOSITY, MAX_VERBOSITY


class LogLevel(Enum):
    """Levels accepted by the stdlib root logger."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingSettings(Settings):
    """
    Logging configuration.

    verbosity   gates the settings sink (0 silent .. 1000 everything)
    log_level   level of the stdlib root logger
    json_logs   render log lines as JSON instead of the console format
    log_file    optional file receiving a copy of the log, empty for none
    """

    FIELDS = (
        numeric_field('verbosity', DEFAULT_VERBOSITY, limits=(0, MAX_VERBOSITY),
                      description="Verbosity of the settings sink"),
        string_field('log_level', LogLevel.INFO.value,
                     description="Root logger level"),
        logical_field('json_logs', False,
                      description="Emit JSON log lines"),
        string_field('log_file', "", empty_is_valid=True,
                     description="Log file path, empty for console only"),
    )

    def check_log_level(self) -> ValidationOutcome:
        """Check the level is a known level name, else restore the default."""
        outcome = self.check_string_field('log_level')
        if self.log_level in LogLevel.__members__:
            return outcome

        message = (
            f"The settings field log_level is not valid => using default {self.get_default('log_level')}. "
            f"It should be one of: {' '.join(LogLevel.__members__)}"
        )
        self.log_level = self.get_default('log_level')
        self.logger.add_warning(message)
        return ValidationOutcome(self.log_level, was_corrected=True, messages=outcome.messages + [message])

    def check(self) -> List[ValidationOutcome]:
        return [
            self.check_numeric_field('verbosity'),
            self.check_log_level(),
            self.check_logical_field('json_logs'),
            self.check_string_field('log_file'),
        ]
