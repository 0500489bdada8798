"""
Core settings components.

This module provides the foundational components for settings objects:
- Validator: pure checks for logical, string and numeric values
- FieldSpec: declarative field descriptors
- IniStore: flat-file key/value persistence
- Settings: base class tying validation, export/import and persistence together
- run_round_trip: self-test of the persistence round trip
"""

from .validator import (
    ValidationOutcome, check_logical, check_string, check_number, format_number
)
from .fields import FieldSpec, logical_field, string_field, numeric_field
from .ini_store import IniStore, Record
from .roundtrip import SelfTestResult, run_round_trip
from .settings import Settings

__all__ = [
    # Validator
    'ValidationOutcome',
    'check_logical',
    'check_string',
    'check_number',
    'format_number',

    # Fields
    'FieldSpec',
    'logical_field',
    'string_field',
    'numeric_field',

    # Persistence
    'IniStore',
    'Record',

    # Settings
    'Settings',
    'SelfTestResult',
    'run_round_trip'
]
