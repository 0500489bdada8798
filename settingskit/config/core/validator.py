"""
Field validation functions.

Each check takes a candidate value and its declared default and returns a
ValidationOutcome. Invalid values never raise: they are replaced by the
default (or clamped into range for numbers) and a warning message is attached
to the outcome. Only malformed constraints raise MalformedInvocationError.
"""

import math
import os
import numbers
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from settingskit.core.enums import ValidationLevel
from settingskit.core.exceptions import MalformedInvocationError


Limits = Tuple[float, float]


@dataclass
class ValidationOutcome:
    """Result of a single field check."""
    accepted_value: Any
    was_corrected: bool = False
    messages: List[str] = field(default_factory=list)

    @property
    def message(self) -> Optional[str]:
        return "; ".join(self.messages) if self.messages else None

    @property
    def level(self) -> ValidationLevel:
        return ValidationLevel.WARNING if self.messages else ValidationLevel.VALID

    def __bool__(self):
        return not self.was_corrected


def format_number(value) -> str:
    """Compact text for numbers in messages, like printf %g."""
    if isinstance(value, numbers.Integral):
        return str(int(value))
    return f"{value:g}"


def is_number(value) -> bool:
    """True for real numbers; booleans are not numbers here."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_finite_number(value) -> bool:
    return is_number(value) and math.isfinite(value)


def normalize_limits(limits, field_name: str = "value") -> Optional[Limits]:
    """
    Return limits as a (low, high) tuple, or None when no limits are given.

    Raises:
        MalformedInvocationError: limits are not a pair of finite numbers
            or low is greater than high
    """
    if limits is None:
        return None
    try:
        low, high = limits
    except (TypeError, ValueError):
        raise MalformedInvocationError(field_name, limits, "limits must be a (low, high) pair")
    if not (is_number(low) and is_number(high)) or math.isnan(low) or math.isnan(high):
        raise MalformedInvocationError(field_name, limits, "limits must be numeric")
    if low > high:
        raise MalformedInvocationError(field_name, limits, "lower limit is greater than upper limit")
    return low, high


def normalize_valid_values(valid_values, field_name: str = "value") -> Optional[Tuple]:
    """Return the permitted numeric values as a tuple, or None when unrestricted."""
    if valid_values is None:
        return None
    if isinstance(valid_values, (str, bytes)) or not isinstance(valid_values, Iterable):
        raise MalformedInvocationError(field_name, valid_values, "valid values must be a collection of numbers")
    values = tuple(valid_values)
    if not values:
        raise MalformedInvocationError(field_name, valid_values, "valid values set is empty")
    if not all(is_number(v) for v in values):
        raise MalformedInvocationError(field_name, valid_values, "valid values must be numeric")
    return values


def _fallback(field_name: str, default, rendered_default: str) -> ValidationOutcome:
    return ValidationOutcome(
        accepted_value=default,
        was_corrected=True,
        messages=[f"The settings field {field_name} is not valid => using default {rendered_default}"]
    )


def check_logical(value, default, field_name: str = "value") -> ValidationOutcome:
    """
    Check that ``value`` can be used as a boolean.

    Booleans and finite numbers are converted with ``bool``; anything else
    (None, NaN, strings, containers) falls back to ``default``.
    """
    if isinstance(value, bool):
        return ValidationOutcome(value)
    if is_number(value) and not math.isnan(value):
        return ValidationOutcome(bool(value))
    return _fallback(field_name, default, str(int(default)) if isinstance(default, bool) else str(default))


def check_string(
    value,
    default,
    empty_is_valid: bool = False,
    require_existence: bool = False,
    field_name: str = "value",
    exists: Callable[[str], bool] = os.path.exists,
) -> ValidationOutcome:
    """
    Check that ``value`` is a usable string.

    The value is accepted when it is a str, it is non-empty (unless
    ``empty_is_valid``) and, when ``require_existence`` is set, ``exists``
    reports the path as present.
    """
    accepted = (
        isinstance(value, str)
        and (len(value) > 0 or empty_is_valid)
        and (not require_existence or exists(value))
    )
    if accepted:
        return ValidationOutcome(value)
    return _fallback(field_name, default, str(default))


def check_number(
    value,
    default,
    limits=None,
    valid_values=None,
    field_name: str = "value",
) -> ValidationOutcome:
    """
    Check that ``value`` is a finite number within the given constraints.

    Out of range values are clamped to the nearest limit. The clamped value
    is then tested against ``valid_values``; a value outside that set falls
    back to ``default`` even if the clamp brought it close to a member.

    Raises:
        MalformedInvocationError: malformed ``limits`` or ``valid_values``
    """
    limits = normalize_limits(limits, field_name)
    valid_values = normalize_valid_values(valid_values, field_name)

    if not is_finite_number(value):
        return _fallback(field_name, default, format_number(default) if is_number(default) else str(default))

    outcome = ValidationOutcome(value)

    if limits is not None:
        low, high = limits
        if value < low or value > high:
            clamped = max(low, min(high, value))
            outcome.accepted_value = clamped
            outcome.was_corrected = True
            outcome.messages.append(
                f"The value {format_number(value)} of the settings field {field_name} is not within "
                f"the valid limits ({format_number(low)} .. {format_number(high)}) => "
                f"updating it to {format_number(clamped)}"
            )

    if valid_values is not None and outcome.accepted_value not in valid_values:
        outcome.accepted_value = default
        outcome.was_corrected = True
        outcome.messages.append(
            f"The value {format_number(value)} for the settings field {field_name} is not valid => "
            f"using default {format_number(default) if is_number(default) else default}. "
            f"It should be one of: {' '.join(format_number(v) for v in valid_values)}"
        )

    return outcome
