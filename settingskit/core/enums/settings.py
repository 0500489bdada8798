"""
Settings related enums.
"""

from enum import Enum


class FieldKind(Enum):
    """Value kinds a settings field can hold."""
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"


class ValidationLevel(Enum):
    """Severity of a validation message."""
    VALID = "valid"
    WARNING = "warning"
