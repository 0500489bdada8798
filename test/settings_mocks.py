"""
Settings classes and a recording logger shared by the settings tests.
"""

from settingskit.config.core.fields import logical_field, numeric_field, string_field
from settingskit.config.core.settings import Settings
from settingskit.logger import DEFAULT_VERBOSITY


class RecordingLogger:
    """Logging sink that keeps every message instead of emitting it."""

    def __init__(self, verbosity: int = DEFAULT_VERBOSITY):
        self.verbosity = verbosity
        self.verbosity_history = []
        self.warnings = []
        self.errors = []
        self.messages = []

    def add_warning(self, message, **kw):
        self.warnings.append(message)

    def add_error(self, message, **kw):
        self.errors.append(message)

    def add_message(self, message, **kw):
        self.messages.append(message)

    def get_verbosity_level(self):
        return self.verbosity

    def set_verbosity_level(self, level):
        self.verbosity_history.append(level)
        self.verbosity = level


class ProcessingSettings(Settings):
    """Small settings type covering every field kind."""

    FIELDS = (
        logical_field('enabled', True),
        string_field('path', '/tmp/x'),
        string_field('label', '', empty_is_valid=True),
        numeric_field('max_retry', 3, limits=(0, 10)),
        numeric_field('ratio', 0.5, limits=(0.0, 1.0)),
        numeric_field('mode', 0, valid_values=(0, 5, 10)),
        logical_field('dry_run', False, persist=False),
    )


class ExistingPathSettings(Settings):

    FIELDS = (
        string_field('data_dir', '.', require_existence=True),
    )


class CompatibleSettings(Settings):
    """Shares some fields with ProcessingSettings, one with another kind."""

    FIELDS = (
        logical_field('enabled', False),
        numeric_field('max_retry', 7),
        numeric_field('path', 1),
        string_field('extra', 'unused'),
    )
