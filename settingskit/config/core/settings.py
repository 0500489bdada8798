"""
Base class for settings objects.

A concrete settings class declares its fields in ``FIELDS`` and inherits:
- field checks that fall back to the declared default with a warning,
- export to / import from flat key-value records,
- import from another settings instance,
- save / load through an IniStore,
- a round-trip self-test.
"""

import math
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

import yaml

from settingskit.core.enums import FieldKind
from settingskit.core.exceptions import MalformedInvocationError
from settingskit.logger import get_settingskit_logger
from .fields import FieldSpec, index_fields
from .ini_store import IniStore, Record
from .roundtrip import SelfTestResult, run_round_trip
from .validator import (
    ValidationOutcome, check_logical, check_number, check_string, is_number
)


TRUE_STRINGS = frozenset({'1', 'true', 'yes', 'on'})
FALSE_STRINGS = frozenset({'0', 'false', 'no', 'off'})

RESERVED_NAMES = frozenset({'logger'})


def _same_value(a, b) -> bool:
    if is_number(a) and is_number(b):
        return a == b or (math.isnan(a) and math.isnan(b))
    return type(a) is type(b) and a == b


class Settings:
    """
    Settings object with validated, persistable fields.

    Subclasses set ``FIELDS`` to a tuple of FieldSpec; its order is the
    export order. Field values are plain attributes initialized to their
    defaults.
    """

    FIELDS: ClassVar[Tuple[FieldSpec, ...]] = ()
    _catalog: ClassVar[Dict[str, FieldSpec]] = {}

    # filesystem check used by string fields requiring existence
    path_exists = staticmethod(os.path.exists)

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._catalog = index_fields(cls.FIELDS, cls.__name__)
        for name in cls._catalog:
            if name.startswith('_') or name in RESERVED_NAMES or hasattr(Settings, name):
                raise MalformedInvocationError(name, None, f"field name clashes with a {Settings.__name__} attribute")

    def __init__(self, logger=None, **overrides: Any):
        self.logger = logger or get_settingskit_logger()

        for spec in self.FIELDS:
            setattr(self, spec.name, spec.default)

        for name, value in overrides.items():
            if name not in self._catalog:
                self._malformed(name, value, f"unknown field for {type(self).__name__}")
            setattr(self, name, value)

    # =========================================================================
    #  Field catalog
    # =========================================================================

    @classmethod
    def field_names(cls) -> List[str]:
        return [spec.name for spec in cls.FIELDS]

    @classmethod
    def get_field_spec(cls, name: str) -> Optional[FieldSpec]:
        return cls._catalog.get(name)

    @classmethod
    def get_default(cls, name: str):
        spec = cls._catalog.get(name)
        if spec is None:
            raise MalformedInvocationError(name, None, f"unknown field for {cls.__name__}")
        return spec.default

    def as_dict(self, persisted_only: bool = False) -> Dict[str, Any]:
        return {
            spec.name: getattr(self, spec.name)
            for spec in self.FIELDS if spec.persist or not persisted_only
        }

    def diff(self, other: 'Settings', persisted_only: bool = False) -> List[str]:
        """
        Names of the fields whose values differ from ``other``.

        With ``persisted_only`` fields declared with ``persist=False`` are skipped.
        """
        return [
            spec.name for spec in self.FIELDS
            if (spec.persist or not persisted_only)
            and (spec.name not in other._catalog
                 or not _same_value(getattr(self, spec.name), getattr(other, spec.name)))
        ]

    def copy(self) -> 'Settings':
        duplicate = type(self)(logger=self.logger)
        duplicate.import_from(self)
        return duplicate

    def __eq__(self, other):
        if not isinstance(other, Settings):
            return NotImplemented
        return self.field_names() == other.field_names() and not self.diff(other)

    __hash__ = None

    def __repr__(self):
        values = ", ".join(f"{name}={value!r}" for name, value in self.as_dict().items())
        return f"{type(self).__name__}({values})"

    def to_string(self) -> str:
        """Human readable dump of the settings."""
        values = {}
        for name, value in self.as_dict().items():
            values[name] = value if value is None or isinstance(value, (bool, int, float, str)) else str(value)
        return yaml.safe_dump({type(self).__name__: values}, sort_keys=False, default_flow_style=False)

    def __str__(self):
        return self.to_string()

    # =========================================================================
    #  Test parameters validity
    # =========================================================================

    def check_logical_field(self, field_name: str) -> ValidationOutcome:
        """Check that a logical field holds a usable boolean, else restore its default."""
        spec = self._resolve(field_name, FieldKind.BOOLEAN)
        outcome = check_logical(getattr(self, field_name), spec.default, field_name=field_name)
        return self._apply(spec, outcome)

    def check_string_field(self, field_name: str, empty_is_valid: Optional[bool] = None,
                           require_existence: Optional[bool] = None) -> ValidationOutcome:
        """
        Check that a string field holds a valid string, else restore its default.

        Options left to None use the field's declared constraint.
        """
        spec = self._resolve(field_name, FieldKind.STRING)
        outcome = check_string(
            getattr(self, field_name),
            spec.default,
            empty_is_valid=spec.empty_is_valid if empty_is_valid is None else empty_is_valid,
            require_existence=spec.require_existence if require_existence is None else require_existence,
            field_name=field_name,
            exists=self.path_exists,
        )
        return self._apply(spec, outcome)

    def check_numeric_field(self, field_name: str, limits=None, valid_values=None) -> ValidationOutcome:
        """
        Check that a numeric field is a finite number within its limits and
        valid values. Out of range values are clamped; values outside the
        valid set restore the default.

        Options left to None use the field's declared constraint.
        """
        spec = self._resolve(field_name, FieldKind.NUMBER)
        try:
            outcome = check_number(
                getattr(self, field_name),
                spec.default,
                limits=spec.limits if limits is None else limits,
                valid_values=spec.valid_values if valid_values is None else valid_values,
                field_name=field_name,
            )
        except MalformedInvocationError as e:
            self.logger.add_error(str(e))
            raise
        return self._apply(spec, outcome)

    def check_field(self, field_name: str) -> ValidationOutcome:
        spec = self._catalog.get(field_name)
        if spec is None:
            self._malformed(field_name, None, f"unknown field for {type(self).__name__}")
        if spec.kind is FieldKind.BOOLEAN:
            return self.check_logical_field(field_name)
        if spec.kind is FieldKind.STRING:
            return self.check_string_field(field_name)
        return self.check_numeric_field(field_name)

    def check(self) -> List[ValidationOutcome]:
        """Check every declared field, in declaration order."""
        return [self.check_field(spec.name) for spec in self.FIELDS]

    def _resolve(self, field_name: str, kind: FieldKind) -> FieldSpec:
        spec = self._catalog.get(field_name)
        if spec is None:
            self._malformed(field_name, None, f"unknown field for {type(self).__name__}")
        if spec.kind is not kind:
            self._malformed(field_name, None, f"field is {spec.kind.value}, not {kind.value}")
        return spec

    def _apply(self, spec: FieldSpec, outcome: ValidationOutcome) -> ValidationOutcome:
        setattr(self, spec.name, outcome.accepted_value)
        for message in outcome.messages:
            self.logger.add_warning(message)
        return outcome

    def _malformed(self, field_name, value, reason):
        error = MalformedInvocationError(field_name, value, reason)
        self.logger.add_error(str(error))
        raise error

    # =========================================================================
    #  Export / import
    # =========================================================================

    def export(self) -> List[Record]:
        """One record per persisted field, in declaration order."""
        return [
            Record(spec.name, self._to_text(spec, getattr(self, spec.name)))
            for spec in self.FIELDS if spec.persist
        ]

    def import_from(self, source: Union['Settings', IniStore, Mapping, Iterable]) -> 'Settings':
        """
        Copy field values from ``source``, without validating them.

        ``source`` can be another settings instance (values copied directly),
        an IniStore, a mapping of field name to text, or an iterable of
        (key, value) records. Unknown keys are ignored and missing keys leave
        the current values untouched.
        """
        if isinstance(source, Settings):
            self._import_settings(source)
        elif isinstance(source, IniStore):
            self._import_records(source.as_dict())
        elif isinstance(source, Mapping):
            self._import_records(source)
        elif isinstance(source, (str, bytes, Path)):
            self._malformed(None, source, "paths are imported with import_ini_file")
        elif isinstance(source, Iterable):
            try:
                records = dict(source)
            except (TypeError, ValueError) as e:
                self._malformed(None, None, f"records must be (key, value) pairs: {e}")
            self._import_records(records)
        else:
            self._malformed(None, source, f"cannot import settings from {type(source).__name__}")
        return self

    def _import_settings(self, other: 'Settings'):
        for spec in self.FIELDS:
            other_spec = other._catalog.get(spec.name)
            if other_spec is not None and other_spec.kind is spec.kind:
                setattr(self, spec.name, getattr(other, spec.name))

    def _import_records(self, records: Mapping):
        for key, value in records.items():
            spec = self._catalog.get(key)
            if spec is None:
                continue
            setattr(self, key, self._from_text(spec, value) if isinstance(value, str) else value)

    @staticmethod
    def _to_text(spec: FieldSpec, value) -> str:
        if value is None:
            return ""
        if spec.kind is FieldKind.BOOLEAN and isinstance(value, (bool, int, float)):
            return "1" if value else "0"
        if spec.kind is FieldKind.NUMBER and is_number(value):
            # repr gives the shortest text that parses back to the same float
            return repr(value) if isinstance(value, float) else str(value)
        return str(value)

    @staticmethod
    def _from_text(spec: FieldSpec, text: str):
        if spec.kind is FieldKind.BOOLEAN:
            token = text.strip().lower()
            if token in TRUE_STRINGS:
                return True
            if token in FALSE_STRINGS:
                return False
            return None
        if spec.kind is FieldKind.NUMBER:
            token = text.strip()
            try:
                return int(token)
            except ValueError:
                pass
            try:
                return float(token)
            except ValueError:
                return math.nan
        return text

    # =========================================================================
    #  Persistence
    # =========================================================================

    def save(self, file_path: Union[str, Path]) -> IniStore:
        """Save the settings to ``file_path``; returns the store used to write it."""
        return IniStore(file_path, self.export(), logger=self.logger)

    def import_ini_file(self, file_path: Union[str, Path]) -> IniStore:
        """Import the settings stored in ``file_path``."""
        store = IniStore(file_path, logger=self.logger)
        self.import_from(store)
        return store

    load = import_ini_file

    # =========================================================================
    #  Test
    # =========================================================================

    def test_interface_routines(self, work_dir: Optional[Union[str, Path]] = None) -> SelfTestResult:
        """Run the export / save / reload / import round trip on this object."""
        return run_round_trip(self, work_dir)
