"""Typed extraction of values from decoded JSON objects."""

from enum import Enum
from typing import Any, Callable

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


class _Invalid(Enum):
    INVALID = "INVALID"

    def __repr__(self) -> str:
        return "INVALID"


INVALID = _Invalid.INVALID
"""Returned by get_nullable_json_value when the value is missing or malformed."""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def convert_enum(value: Any, enum_type: type[Enum]):
    """Return the member of enum_type named by value, or None."""
    if not isinstance(value, str):
        return None
    return enum_type.__members__.get(value)


def convert_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def convert_bool(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def convert_int(value: Any, minimum: int = INT_MIN, maximum: int = INT_MAX) -> int | None:
    """Return value as an int within [minimum, maximum], or None.

    A number that is not a whole value within the 32-bit range reads as 0.
    """
    if not _is_number(value):
        return None
    if float(value).is_integer() and INT_MIN <= value <= INT_MAX:
        number = int(value)
    else:
        number = 0
    if minimum <= number <= maximum:
        return number
    return None


def convert_uint(value: Any, minimum: int = 0, maximum: int = INT_MAX) -> int | None:
    """Return value as a non-negative int within [minimum, maximum], or None."""
    minimum = max(0, minimum)
    if minimum <= INT_MAX and maximum <= INT_MAX:
        return convert_int(value, minimum, maximum)
    return None


def get_json_value(obj: dict, field: str, converter: Callable, *args):
    """Convert obj[field]; None when missing or of the wrong type."""
    return converter(obj.get(field), *args)


def get_nullable_json_value(obj: dict, field: str, converter: Callable, *args):
    """Convert obj[field], allowing null.

    Returns None for an explicit null, the converted value when valid and
    INVALID when the field is missing or cannot be converted.
    """
    if field in obj and obj[field] is None:
        return None
    result = converter(obj.get(field), *args)
    return INVALID if result is None else result