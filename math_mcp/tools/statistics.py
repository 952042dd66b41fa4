"""
Descriptive statistics over arrays of numbers.
"""
import math
from collections import Counter
from typing import Dict, Any, List, Optional

from ..core.errors import ToolError, ValidationError
from ..utils.args import get_bool_opt, get_number_array, result_json
from ..utils.limits import Limits
from ..utils.validation import finite_result, finite_sum


def _numbers_schema(description: str, with_sample: bool = False) -> Dict[str, Any]:
    schema = {
        "type": "object",
        "properties": {
            "numbers": {
                "type": "array",
                "items": {"type": "number"},
                "description": description
            }
        },
        "required": ["numbers"]
    }
    if with_sample:
        schema["properties"]["sample"] = {
            "type": "boolean",
            "description": "Use sample (n-1) instead of population (n) divisor (default: false)"
        }
    return schema


def get_tool_definitions() -> List[Dict[str, Any]]:
    return [
        {
            "name": "mean",
            "description": "Calculate the arithmetic mean (average) of numbers",
            "inputSchema": _numbers_schema("Array of numbers")
        },
        {
            "name": "median",
            "description": "Calculate the median (middle value) of numbers",
            "inputSchema": _numbers_schema("Array of numbers")
        },
        {
            "name": "mode",
            "description": "Find the most frequent value(s) in an array of numbers",
            "inputSchema": _numbers_schema("Array of numbers")
        },
        {
            "name": "std_dev",
            "description": "Calculate the standard deviation of numbers",
            "inputSchema": _numbers_schema("Array of numbers", with_sample=True)
        },
        {
            "name": "variance",
            "description": "Calculate the variance of numbers",
            "inputSchema": _numbers_schema("Array of numbers", with_sample=True)
        },
        {
            "name": "min",
            "description": "Find the minimum value",
            "inputSchema": _numbers_schema("Array of numbers")
        },
        {
            "name": "max",
            "description": "Find the maximum value",
            "inputSchema": _numbers_schema("Array of numbers")
        },
        {
            "name": "sum",
            "description": "Calculate the sum of numbers",
            "inputSchema": _numbers_schema("Array of numbers")
        },
        {
            "name": "product",
            "description": "Calculate the product of numbers",
            "inputSchema": _numbers_schema("Array of numbers")
        },
    ]


def _non_empty(args: Dict[str, Any], limits: Limits, what: str) -> List[float]:
    numbers = get_number_array(args, "numbers", limits)
    if not numbers:
        raise ValidationError(f"Cannot calculate {what} of empty array")
    return numbers


def _mean_of(numbers: List[float]) -> float:
    return finite_result(finite_sum(numbers) / len(numbers))


def _variance_of(numbers: List[float], sample: Optional[bool]) -> float:
    mean = _mean_of(numbers)
    n = len(numbers)
    divisor = n - 1 if sample and n > 1 else n
    return finite_result(finite_sum((x - mean) * (x - mean) for x in numbers) / divisor)


def _mean(args: Dict[str, Any], limits: Limits) -> Dict[str, Any]:
    return result_json(_mean_of(_non_empty(args, limits, "mean")))


def _median(args: Dict[str, Any], limits: Limits) -> Dict[str, Any]:
    ordered = sorted(_non_empty(args, limits, "median"))
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return result_json(finite_result(ordered[mid - 1] / 2.0 + ordered[mid] / 2.0))
    return result_json(float(ordered[mid]))


def _mode(args: Dict[str, Any], limits: Limits) -> Dict[str, Any]:
    numbers = _non_empty(args, limits, "mode")
    frequency = Counter(float(n) for n in numbers)
    max_freq = max(frequency.values())
    if max_freq == 1:
        return {"mode": None, "message": "No mode - all values are unique"}
    modes = sorted(value for value, count in frequency.items() if count == max_freq)
    return {"mode": modes, "frequency": max_freq}


def _variance(args: Dict[str, Any], limits: Limits) -> Dict[str, Any]:
    numbers = _non_empty(args, limits, "variance")
    return result_json(_variance_of(numbers, get_bool_opt(args, "sample")))


def _std_dev(args: Dict[str, Any], limits: Limits) -> Dict[str, Any]:
    numbers = _non_empty(args, limits, "standard deviation")
    return result_json(math.sqrt(_variance_of(numbers, get_bool_opt(args, "sample"))))


def _min(args: Dict[str, Any], limits: Limits) -> Dict[str, Any]:
    return result_json(float(min(_non_empty(args, limits, "min"))))


def _max(args: Dict[str, Any], limits: Limits) -> Dict[str, Any]:
    return result_json(float(max(_non_empty(args, limits, "max"))))


def _sum(args: Dict[str, Any], limits: Limits) -> Dict[str, Any]:
    return result_json(finite_sum(get_number_array(args, "numbers", limits)))


def _product(args: Dict[str, Any], limits: Limits) -> Dict[str, Any]:
    product = 1.0
    for number in get_number_array(args, "numbers", limits):
        product *= number
    return result_json(finite_result(product))


_HANDLERS = {
    "mean": _mean,
    "median": _median,
    "mode": _mode,
    "variance": _variance,
    "std_dev": _std_dev,
    "min": _min,
    "max": _max,
    "sum": _sum,
    "product": _product,
}


def execute(name: str, arguments: Dict[str, Any], registry) -> Dict[str, Any]:
    handler = _HANDLERS.get(name)
    if handler is None:
        raise ToolError(f"Unknown statistics tool: {name}")
    return handler(arguments, registry.limits)
