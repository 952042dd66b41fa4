"""
Integer algebra tools: gcd, lcm and factorial.
"""
import math
from typing import Dict, Any, List

from ..core.errors import ToolError, ValidationError
from ..utils.args import get_number, result_json
from ..utils.limits import Limits
from ..utils.validation import validate_integer

MAX_FACTORIAL = 170


def get_tool_definitions() -> List[Dict[str, Any]]:
    return [
        {
            "name": "gcd",
            "description": "Calculate the greatest common divisor of two integers",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "a": {"type": "number", "description": "First integer"},
                    "b": {"type": "number", "description": "Second integer"}
                },
                "required": ["a", "b"]
            }
        },
        {
            "name": "lcm",
            "description": "Calculate the least common multiple of two integers",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "a": {"type": "number", "description": "First integer"},
                    "b": {"type": "number", "description": "Second integer"}
                },
                "required": ["a", "b"]
            }
        },
        {
            "name": "factorial",
            "description": "Calculate the factorial of a non-negative integer (n <= 170)",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "n": {"type": "number", "description": "Non-negative integer"}
                },
                "required": ["n"]
            }
        },
    ]


def _gcd(args: Dict[str, Any], limits: Limits) -> float:
    a = validate_integer(get_number(args, "a"), "a")
    b = validate_integer(get_number(args, "b"), "b")
    return float(math.gcd(a, b))


def _lcm(args: Dict[str, Any], limits: Limits) -> float:
    a = abs(validate_integer(get_number(args, "a"), "a"))
    b = abs(validate_integer(get_number(args, "b"), "b"))
    if a == 0 or b == 0:
        return 0.0
    result = a // math.gcd(a, b) * b
    if result > 2 ** 63 - 1:
        raise ValidationError("LCM calculation would overflow")
    return float(result)


def _factorial(args: Dict[str, Any], limits: Limits) -> float:
    n = validate_integer(get_number(args, "n"), "n")
    if n < 0:
        raise ValidationError("Factorial is not defined for negative numbers")
    if n > MAX_FACTORIAL:
        raise ValidationError(
            f"Factorial overflow: n must be <= {MAX_FACTORIAL} to prevent overflow"
        )
    return float(math.factorial(n))


_HANDLERS = {
    "gcd": _gcd,
    "lcm": _lcm,
    "factorial": _factorial,
}


def execute(name: str, arguments: Dict[str, Any], registry) -> Dict[str, Any]:
    handler = _HANDLERS.get(name)
    if handler is None:
        raise ToolError(f"Unknown algebra tool: {name}")
    return result_json(handler(arguments, registry.limits))
