"""
Exponential growth and logarithms.
"""
import math
from typing import Dict, Any, List

from ..core.errors import ToolError, ValidationError
from ..utils.args import get_bool_opt, get_number, get_number_opt, result_json
from ..utils.validation import finite_result


def get_tool_definitions() -> List[Dict[str, Any]]:
    return [
        {
            "name": "exponential_growth",
            "description": "Calculate exponential growth: initial * (1 + rate)^time, "
                           "or initial * e^(rate * time) when continuous",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "initial": {"type": "number", "description": "Initial value"},
                    "rate": {"type": "number", "description": "Growth rate per period as a decimal"},
                    "time": {"type": "number", "description": "Number of periods"},
                    "continuous": {"type": "boolean", "description": "Use continuous compounding (default: false)"}
                },
                "required": ["initial", "rate", "time"]
            }
        },
        {
            "name": "logarithm",
            "description": "Calculate a logarithm (base 10 by default)",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "value": {"type": "number", "description": "Positive value"},
                    "base": {"type": "number", "description": "Logarithm base (default: 10)"},
                    "natural": {"type": "boolean", "description": "Use natural logarithm (default: false)"}
                },
                "required": ["value"]
            }
        },
    ]


def _exponential_growth(args: Dict[str, Any]) -> float:
    initial = get_number(args, "initial")
    rate = get_number(args, "rate")
    time = get_number(args, "time")
    try:
        if get_bool_opt(args, "continuous"):
            return finite_result(initial * math.exp(rate * time))
        if 1.0 + rate < 0 and not float(time).is_integer():
            raise ValidationError("Growth factor must be non-negative for fractional time")
        return finite_result(initial * math.pow(1.0 + rate, time))
    except OverflowError:
        raise ValidationError("Result is not a finite number")


def _logarithm(args: Dict[str, Any]) -> float:
    value = get_number(args, "value")
    base = get_number_opt(args, "base")
    if value <= 0:
        raise ValidationError("Logarithm is undefined for non-positive values")
    if get_bool_opt(args, "natural"):
        return math.log(value)
    if base is None:
        return math.log10(value)
    if base <= 0 or base == 1:
        raise ValidationError("Invalid base for logarithm")
    return math.log(value, base)


_HANDLERS = {
    "exponential_growth": _exponential_growth,
    "logarithm": _logarithm,
}


def execute(name: str, arguments: Dict[str, Any], registry) -> Dict[str, Any]:
    handler = _HANDLERS.get(name)
    if handler is None:
        raise ToolError(f"Unknown advanced tool: {name}")
    return result_json(handler(arguments))
