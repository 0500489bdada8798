"""
Declarative field descriptors.

A concrete settings class lists its fields once, in export order:

    class ProcessingSettings(Settings):
        FIELDS = (
            logical_field('enabled', True),
            string_field('out_dir', './out', require_existence=True),
            numeric_field('max_retry', 3, limits=(0, 10)),
        )

Each descriptor carries the field's default and the constraints used by
``Settings.check()``.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from settingskit.core.enums import FieldKind
from settingskit.core.exceptions import MalformedInvocationError
from .validator import Limits, is_number, normalize_limits, normalize_valid_values


@dataclass(frozen=True)
class FieldSpec:
    """Name, kind, default and constraints of one settings field."""
    name: str
    kind: FieldKind
    default: Any
    limits: Optional[Limits] = None
    valid_values: Optional[Tuple] = None
    empty_is_valid: bool = False
    require_existence: bool = False
    persist: bool = True
    description: str = ""

    def __post_init__(self):
        if not self.name or not self.name.isidentifier():
            raise MalformedInvocationError(self.name, None, "field name must be a valid identifier")

        if self.kind is not FieldKind.NUMBER and (self.limits is not None or self.valid_values is not None):
            raise MalformedInvocationError(self.name, None, f"limits and valid values only apply to numeric fields, not {self.kind.value}")
        if self.kind is not FieldKind.STRING and (self.empty_is_valid or self.require_existence):
            raise MalformedInvocationError(self.name, None, f"string options do not apply to {self.kind.value} fields")

        if self.kind is FieldKind.NUMBER:
            # frozen dataclass: normalized values go through object.__setattr__
            object.__setattr__(self, 'limits', normalize_limits(self.limits, self.name))
            object.__setattr__(self, 'valid_values', normalize_valid_values(self.valid_values, self.name))
            if not is_number(self.default):
                raise MalformedInvocationError(self.name, self.default, "numeric default must be a number")
        elif self.kind is FieldKind.BOOLEAN and not isinstance(self.default, bool):
            raise MalformedInvocationError(self.name, self.default, "logical default must be a bool")
        elif self.kind is FieldKind.STRING and not isinstance(self.default, str):
            raise MalformedInvocationError(self.name, self.default, "string default must be a str")


def logical_field(name: str, default: bool, **kwargs) -> FieldSpec:
    return FieldSpec(name, FieldKind.BOOLEAN, default, **kwargs)


def string_field(name: str, default: str, empty_is_valid: bool = False,
                 require_existence: bool = False, **kwargs) -> FieldSpec:
    return FieldSpec(name, FieldKind.STRING, default,
                     empty_is_valid=empty_is_valid, require_existence=require_existence, **kwargs)


def numeric_field(name: str, default, limits: Optional[Sequence] = None,
                  valid_values: Optional[Sequence] = None, **kwargs) -> FieldSpec:
    return FieldSpec(name, FieldKind.NUMBER, default, limits=limits, valid_values=valid_values, **kwargs)


def index_fields(fields: Sequence[FieldSpec], owner: str = "settings"):
    """Map field names to descriptors, rejecting duplicates."""
    catalog = {}
    for spec in fields:
        if spec.name in catalog:
            raise MalformedInvocationError(spec.name, None, f"field declared twice in {owner}")
        catalog[spec.name] = spec
    return catalog
