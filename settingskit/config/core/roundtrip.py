"""
Round-trip self-test for settings objects.

Exports a settings object, writes it to a temporary file, reads it back into
a fresh instance, compares the two, imports the copy back into the tested
object and dumps the result. Failures are returned, never raised.
"""

import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from settingskit.logger import MAX_VERBOSITY, verbosity
from .ini_store import IniStore, Record


TEST_FILE_NAME = "test__.ini"


@dataclass
class SelfTestResult:
    """Outcome of a settings round trip."""
    success: bool
    message: str = ""
    dump: str = ""
    mismatches: List[str] = field(default_factory=list)
    records: List[Record] = field(default_factory=list)

    def __bool__(self):
        return self.success


def _missing_root(path: Path) -> Optional[Path]:
    """Topmost directory of ``path`` that does not exist yet, if any."""
    missing = None
    for candidate in (path, *path.parents):
        if candidate.exists():
            break
        missing = candidate
    return missing


def run_round_trip(settings, work_dir: Optional[Union[str, Path]] = None) -> SelfTestResult:
    """
    Exercise export, save, reload, import and copy on ``settings``.

    Only persisted fields take part in the comparison and in the import back.
    The logger verbosity is raised to the maximum for the duration of the
    test and restored afterwards. The temporary file is always removed, and
    so is any directory the test had to create.
    """
    logger = settings.logger
    result = SelfTestResult(success=False)

    test_file = None
    created_dir = None

    with verbosity(logger, MAX_VERBOSITY):
        try:
            if work_dir is None:
                created_dir = Path(tempfile.mkdtemp(prefix="settingskit_"))
                test_file = created_dir / TEST_FILE_NAME
            else:
                test_file = Path(work_dir) / TEST_FILE_NAME
                created_dir = _missing_root(test_file.parent)

            result.records = settings.export()

            store = IniStore(test_file, result.records, logger=logger)
            store.show_data()

            reloaded = IniStore(test_file, logger=logger)
            test_copy = type(settings)(logger=logger)
            test_copy.import_from(reloaded)

            result.mismatches = settings.diff(test_copy, persisted_only=True)
            if result.mismatches:
                result.message = f"Test failed: fields changed after reload: {', '.join(result.mismatches)}"
                logger.add_error(result.message)
                return result

            settings.import_from(test_copy.as_dict(persisted_only=True))
            result.dump = settings.to_string()
            logger.add_message(result.dump)

            result.success = True
            result.message = f"{type(settings).__name__} round trip completed"
            logger.add_message(result.message)

        except Exception as e:
            result.message = f"Test failed: {e}"
            logger.add_error(result.message)

        finally:
            try:
                if test_file is not None and test_file.exists():
                    test_file.unlink()
            except OSError as e:
                logger.add_warning(f"Unable to remove {test_file}: {e}")
            if created_dir is not None:
                shutil.rmtree(created_dir, ignore_errors=True)

    return result
