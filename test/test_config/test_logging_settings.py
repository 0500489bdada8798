import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from settingskit.config import LoggingSettings, load_logging_settings
from settingskit.logger import DEFAULT_VERBOSITY, MAX_VERBOSITY

from settings_mocks import RecordingLogger


class TestLoggingSettings(unittest.TestCase):
    """The package's own settings built on the framework."""

    def setUp(self):
        self.logger = RecordingLogger()
        self.settings = LoggingSettings(logger=self.logger)

    def test_defaults(self):
        self.assertEqual(self.settings.as_dict(), {
            'verbosity': DEFAULT_VERBOSITY,
            'log_level': 'INFO',
            'json_logs': False,
            'log_file': '',
        })

    def test_defaults_pass_check(self):
        outcomes = self.settings.check()

        self.assertEqual(len(outcomes), 4)
        self.assertFalse(any(o.was_corrected for o in outcomes))
        self.assertEqual(self.logger.warnings, [])

    def test_verbosity_is_clamped(self):
        self.settings.verbosity = 5000
        self.settings.check()
        self.assertEqual(self.settings.verbosity, MAX_VERBOSITY)

    def test_unknown_level_restores_default(self):
        self.settings.log_level = 'LOUD'

        outcome = self.settings.check_log_level()

        self.assertEqual(self.settings.log_level, 'INFO')
        self.assertTrue(outcome.was_corrected)
        self.assertIn("It should be one of: DEBUG INFO WARNING ERROR CRITICAL", self.logger.warnings[0])

    def test_known_level_kept(self):
        self.settings.log_level = 'DEBUG'

        outcome = self.settings.check_log_level()

        self.assertEqual(self.settings.log_level, 'DEBUG')
        self.assertFalse(outcome.was_corrected)

    def test_non_string_level(self):
        self.settings.log_level = 10

        self.settings.check_log_level()

        self.assertEqual(self.settings.log_level, 'INFO')
        self.assertEqual(len(self.logger.warnings), 1)

    def test_self_test(self):
        with TemporaryDirectory() as tmp_dir:
            result = self.settings.test_interface_routines(tmp_dir)

        self.assertTrue(result.success, result.message)


class TestLoadLoggingSettings(unittest.TestCase):

    def test_without_file(self):
        settings = load_logging_settings(logger=RecordingLogger())
        self.assertEqual(settings.log_level, 'INFO')

    def test_from_file_is_validated(self):
        logger = RecordingLogger()
        with TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / "logging.ini"
            path.write_text("verbosity = -3\nlog_level = DEBUG\njson_logs = yes\n")

            settings = load_logging_settings(str(path), logger=logger)

        self.assertEqual(settings.verbosity, 0)
        self.assertEqual(settings.log_level, 'DEBUG')
        self.assertIs(settings.json_logs, True)
        self.assertEqual(settings.log_file, '')
        self.assertEqual(len(logger.warnings), 1)
