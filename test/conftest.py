"""
Shared pytest configuration and fixtures for the settings tests.
"""

import pytest

from settings_mocks import RecordingLogger, ProcessingSettings


@pytest.fixture
def recording_logger():
    """Logging sink collecting warnings, errors and messages."""
    return RecordingLogger()


@pytest.fixture
def processing_settings(recording_logger):
    """A ProcessingSettings instance with all defaults."""
    return ProcessingSettings(logger=recording_logger)


@pytest.fixture
def settings_file(tmp_path):
    """Path of a settings file inside a temporary directory."""
    return tmp_path / "settings.ini"


# Pytest marks for categorizing tests
pytestmark = pytest.mark.unit
