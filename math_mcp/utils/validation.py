"""
Numeric validators shared by the tool modules.
"""
import math
from typing import Iterable

from ..core.errors import ResourceLimitError, ValidationError

# Largest magnitude a float can hold while every integer up to it is exact
MAX_SAFE_INTEGER = 2 ** 53


def validate_array_size(size: int, max_size: int) -> None:
    """Reject arrays larger than the configured limit."""
    if size > max_size:
        raise ResourceLimitError(
            f"Array size {size} exceeds maximum allowed size of {max_size}"
        )


def validate_decimal_places(places: int, max_places: int) -> None:
    """Validate decimal places for rounding operations."""
    if places < 0:
        raise ValidationError("Decimal places must be non-negative")
    if places > max_places:
        raise ValidationError(
            f"Decimal places {places} exceeds maximum of {max_places}"
        )


def validate_positive(value: float, name: str) -> None:
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got: {value}")


def validate_non_negative(value: float, name: str) -> None:
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got: {value}")


def validate_integer(value: float, name: str) -> int:
    """Return ``value`` as an int, rejecting fractions and unsafe magnitudes."""
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{name} must be an integer, got: {value}")
    if abs(value) > MAX_SAFE_INTEGER:
        raise ValidationError(f"{name} is out of range for integer operations")
    return int(value)


def finite_result(value: float) -> float:
    """Guard against overflow to inf/nan in a computed result."""
    if not math.isfinite(value):
        raise ValidationError("Result is not a finite number")
    return value


def finite_sum(values: Iterable[float]) -> float:
    """Exact float sum, rejecting totals beyond the float range."""
    try:
        return finite_result(math.fsum(values))
    except OverflowError:
        raise ValidationError("Result is not a finite number")
