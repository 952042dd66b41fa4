"""
Helpers for pulling typed values out of tool ``arguments`` objects.
"""
import math
from typing import Dict, Any, List, Optional

from ..core.errors import InvalidParamsError, ValidationError
from .limits import Limits


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_finite(value: Any, label: str) -> None:
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # JSON integers wider than a float
        raise ValidationError(f"Invalid argument: {label} is out of range")
    if not finite:
        raise ValidationError(f"Invalid argument: {label} must be a finite number")


def get_number(arguments: Dict[str, Any], key: str) -> float:
    """
    Extract a required finite number.

    Raises:
        InvalidParamsError: if the key is missing or not a number.
        ValidationError: if the number is NaN, infinite or too large for a float.
    """
    value = arguments.get(key)
    if not _is_number(value):
        raise InvalidParamsError(f"Invalid argument: {key} must be a number")
    _check_finite(value, key)
    return value


def get_number_opt(arguments: Dict[str, Any], key: str) -> Optional[float]:
    """Return the number under ``key``, or None if it is missing or null."""
    if arguments.get(key) is None:
        return None
    return get_number(arguments, key)


def get_number_array(arguments: Dict[str, Any], key: str, limits: Limits) -> List[float]:
    """
    Extract a required array of finite numbers.

    The array length is checked against ``limits`` before any element is
    inspected.
    """
    values = arguments.get(key)
    if not isinstance(values, list):
        raise InvalidParamsError(f"Invalid arguments: {key} must be an array")

    limits.check_array_size(len(values))

    for idx, value in enumerate(values):
        if not _is_number(value):
            raise InvalidParamsError(
                f"Invalid arguments: {key} must be an array of numbers"
            )
        _check_finite(value, f"{key}[{idx}]")
    return values


def get_bool_opt(arguments: Dict[str, Any], key: str) -> Optional[bool]:
    value = arguments.get(key)
    return value if isinstance(value, bool) else None


def result_json(value: float) -> Dict[str, Any]:
    """Wrap a scalar result."""
    return {"result": value}
