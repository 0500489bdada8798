"""
Core enums for the settingskit package.
"""

from .settings import FieldKind, ValidationLevel

__all__ = [
    'FieldKind',
    'ValidationLevel'
]
