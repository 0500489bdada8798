"""
Round-trip self-test of settings objects.
"""

from unittest.mock import patch

from settingskit.config.core.fields import string_field
from settingskit.config.core.roundtrip import TEST_FILE_NAME, SelfTestResult, run_round_trip
from settingskit.config.core.settings import Settings
from settingskit.logger import MAX_VERBOSITY

from settings_mocks import ProcessingSettings, RecordingLogger


class PaddedSettings(Settings):

    FIELDS = (string_field('title', 'plain'),)


class TestRoundTripSuccess:

    def setup_method(self):
        self.logger = RecordingLogger(verbosity=2)
        self.settings = ProcessingSettings(logger=self.logger, max_retry=9, ratio=0.125, label='nightly')

    def test_round_trip_succeeds_and_keeps_values(self, tmp_path):
        before = self.settings.as_dict()

        result = self.settings.test_interface_routines(work_dir=tmp_path)

        assert isinstance(result, SelfTestResult)
        assert result.success
        assert result
        assert result.mismatches == []
        assert self.settings.as_dict() == before
        assert self.logger.errors == []

    def test_result_carries_records_and_dump(self, tmp_path):
        result = run_round_trip(self.settings, tmp_path)

        assert result.records == self.settings.export()
        assert result.dump == self.settings.to_string()
        assert result.dump in self.logger.messages

    def test_temporary_file_is_removed(self, tmp_path):
        run_round_trip(self.settings, tmp_path)

        assert not (tmp_path / TEST_FILE_NAME).exists()
        assert list(tmp_path.iterdir()) == []

    def test_default_work_dir(self):
        assert run_round_trip(self.settings).success

    def test_verbosity_raised_then_restored(self, tmp_path):
        run_round_trip(self.settings, tmp_path)

        assert self.logger.verbosity_history == [MAX_VERBOSITY, 2]
        assert self.logger.get_verbosity_level() == 2


class TestRoundTripFailure:

    def setup_method(self):
        self.logger = RecordingLogger(verbosity=2)

    def test_exception_is_reported_not_raised(self, tmp_path):
        settings = ProcessingSettings(logger=self.logger)

        with patch.object(settings, 'export', side_effect=RuntimeError("boom")):
            result = run_round_trip(settings, tmp_path)

        assert not result.success
        assert result.message == "Test failed: boom"
        assert self.logger.errors == ["Test failed: boom"]
        assert self.logger.get_verbosity_level() == 2

    def test_unpersistable_value_fails_the_test(self, tmp_path):
        settings = ProcessingSettings(logger=self.logger, label="two\nlines")

        result = settings.test_interface_routines(tmp_path)

        assert not result
        assert result.message.startswith("Test failed:")
        assert self.logger.get_verbosity_level() == 2
        assert list(tmp_path.iterdir()) == []

    def test_values_changed_by_reload_are_reported(self, tmp_path):
        settings = PaddedSettings(logger=self.logger)
        settings.title = "  padded  "

        result = settings.test_interface_routines(tmp_path)

        assert not result.success
        assert result.mismatches == ['title']
        assert "title" in result.message
        # the original is not overwritten by the altered copy
        assert settings.title == "  padded  "
        assert not (tmp_path / TEST_FILE_NAME).exists()

    def test_missing_temp_dir_is_reported_not_raised(self):
        settings = ProcessingSettings(logger=self.logger)

        with patch('settingskit.config.core.roundtrip.tempfile.mkdtemp', side_effect=OSError("no space")):
            result = run_round_trip(settings)

        assert not result.success
        assert result.message == "Test failed: no space"
        assert self.logger.get_verbosity_level() == 2


class TestRoundTripScope:

    def setup_method(self):
        self.logger = RecordingLogger(verbosity=2)

    def test_non_persisted_field_does_not_fail_the_test(self, tmp_path):
        settings = ProcessingSettings(logger=self.logger, dry_run=True, max_retry=7)

        result = settings.test_interface_routines(tmp_path)

        assert result.success
        assert result.mismatches == []
        assert settings.dry_run is True
        assert settings.max_retry == 7
        assert self.logger.errors == []

    def test_created_work_dir_is_removed(self, tmp_path):
        work_dir = tmp_path / "nested" / "work"
        settings = ProcessingSettings(logger=self.logger)

        assert settings.test_interface_routines(work_dir).success

        assert not (tmp_path / "nested").exists()
        assert list(tmp_path.iterdir()) == []

    def test_existing_work_dir_is_kept(self, tmp_path):
        work_dir = tmp_path / "work"
        work_dir.mkdir()

        assert ProcessingSettings(logger=self.logger).test_interface_routines(work_dir).success

        assert work_dir.is_dir()
        assert list(work_dir.iterdir()) == []
