"""
Flat-file key/value store.

Settings are persisted as one ``key = value`` line per record, in insertion
order. Reading is lenient: comments, blank lines and ``[section]`` headers
are accepted, sections are flattened and a repeated key keeps its last value.
"""

import configparser
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Union

from settingskit.core.exceptions import PersistenceIOError
from settingskit.logger import get_settingskit_logger


_ROOT_SECTION = "__root__"
_DEFAULT_SECTION = "__defaults__"


class Record(NamedTuple):
    """One serialized settings field."""
    key: str
    value: str

    def line(self) -> str:
        return f"{self.key} = {self.value}"


class IniStore:
    """
    Key/value records bound to a file.

    ``IniStore(path)`` reads the file; ``IniStore(path, records)`` writes the
    records to the file, replacing it atomically.
    """

    def __init__(self, path: Union[str, Path], records: Optional[Iterable] = None, logger=None):
        self.path = Path(path)
        self.logger = logger or get_settingskit_logger()
        self._data: Dict[str, str] = {}

        if records is None:
            self._read()
        else:
            for key, value in records:
                self._data[str(key)] = str(value)
            self._write()

    # Access

    @property
    def records(self) -> List[Record]:
        return [Record(key, value) for key, value in self._data.items()]

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._data.get(key, default)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._data)

    def __contains__(self, key) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def show_data(self) -> str:
        """Human readable listing of the records, also sent to the logger."""
        lines = [f"[{self.path}]"] + [record.line() for record in self.records]
        text = "\n".join(lines)
        self.logger.add_message(text)
        return text

    # File I/O

    def _read(self):
        try:
            text = self.path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            self.logger.add_error(f"Unable to read settings file {self.path}: {e}")
            raise PersistenceIOError(self.path, "load", str(e)) from e

        parser = configparser.ConfigParser(
            interpolation=None,
            strict=False,
            delimiters=('=',),
            comment_prefixes=('#', ';'),
            default_section=_DEFAULT_SECTION,
        )
        parser.optionxform = str  # keep key case

        try:
            parser.read_string(f"[{_ROOT_SECTION}]\n{text}", source=str(self.path))
        except configparser.Error as e:
            self.logger.add_error(f"Malformed settings file {self.path}: {e}")
            raise PersistenceIOError(self.path, "load", f"malformed record file: {e}") from e

        for section in parser.sections():
            for key, value in parser.items(section, raw=True):
                self._data[key] = value

    def _write(self):
        # nothing touches the filesystem until the content is known to be writable
        for key, value in self._data.items():
            if '\n' in key or '\n' in value or '\r' in value:
                self._refuse(f"value of '{key}' spans multiple lines")

        content = "".join(f"{record.line()}\n" for record in self.records)
        try:
            data = content.encode('utf-8')
        except UnicodeEncodeError as e:
            self._refuse(f"content is not encodable as UTF-8: {e}")

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                'wb', dir=self.path.parent,
                prefix=f".{self.path.name}.", suffix='.tmp', delete=False
            ) as tmp_file:
                tmp_name = tmp_file.name
                tmp_file.write(data)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            self.logger.add_error(f"Unable to write settings file {self.path}: {e}")
            raise PersistenceIOError(self.path, "save", str(e)) from e

    def _refuse(self, reason: str):
        self.logger.add_error(f"Unable to write settings file {self.path}: {reason}")
        raise PersistenceIOError(self.path, "save", reason)
