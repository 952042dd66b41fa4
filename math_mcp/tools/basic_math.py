"""
Basic arithmetic tools.
"""
import math
from typing import Dict, Any, List

from ..core.errors import ToolError, ValidationError
from ..utils.args import get_number, get_number_array, get_number_opt, result_json
from ..utils.limits import Limits
from ..utils.validation import finite_result, finite_sum, validate_integer

TOOL_ADD = "add"
TOOL_SUBTRACT = "subtract"
TOOL_MULTIPLY = "multiply"
TOOL_DIVIDE = "divide"
TOOL_POWER = "power"
TOOL_SQRT = "sqrt"
TOOL_ABS = "abs"
TOOL_ROUND = "round"
TOOL_FLOOR = "floor"
TOOL_CEIL = "ceil"
TOOL_MODULO = "modulo"


def _numbers_schema(description: str) -> Dict[str, Any]:
    return {
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


def _pair_schema(a_desc: str, b_desc: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "a": {"type": "number", "description": a_desc},
            "b": {"type": "number", "description": b_desc}
        },
        "required": ["a", "b"]
    }


def _single_schema(description: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "number": {"type": "number", "description": description}
        },
        "required": ["number"]
    }


def get_tool_definitions() -> List[Dict[str, Any]]:
    return [
        {
            "name": TOOL_ADD,
            "description": "Add two or more numbers together",
            "inputSchema": _numbers_schema("Array of numbers to add")
        },
        {
            "name": TOOL_SUBTRACT,
            "description": "Subtract b from a",
            "inputSchema": _pair_schema("First number", "Number to subtract")
        },
        {
            "name": TOOL_MULTIPLY,
            "description": "Multiply two or more numbers together",
            "inputSchema": _numbers_schema("Array of numbers to multiply")
        },
        {
            "name": TOOL_DIVIDE,
            "description": "Divide two numbers",
            "inputSchema": _pair_schema("Dividend", "Divisor")
        },
        {
            "name": TOOL_POWER,
            "description": "Raise a number to a power",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "base": {"type": "number", "description": "Base number"},
                    "exponent": {"type": "number", "description": "Exponent"}
                },
                "required": ["base", "exponent"]
            }
        },
        {
            "name": TOOL_SQRT,
            "description": "Calculate the square root of a number",
            "inputSchema": _single_schema("Number to take square root of")
        },
        {
            "name": TOOL_ABS,
            "description": "Get the absolute value of a number",
            "inputSchema": _single_schema("Number")
        },
        {
            "name": TOOL_ROUND,
            "description": "Round a number to a given number of decimal places",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "number": {"type": "number", "description": "Number to round"},
                    "decimals": {"type": "number", "description": "Number of decimal places (default: 0)"}
                },
                "required": ["number"]
            }
        },
        {
            "name": TOOL_FLOOR,
            "description": "Round down to the nearest integer",
            "inputSchema": _single_schema("Number")
        },
        {
            "name": TOOL_CEIL,
            "description": "Round up to the nearest integer",
            "inputSchema": _single_schema("Number")
        },
        {
            "name": TOOL_MODULO,
            "description": "Calculate the remainder of division",
            "inputSchema": _pair_schema("Dividend", "Divisor")
        },
    ]


def _add(args: Dict[str, Any], limits: Limits) -> float:
    return finite_sum(get_number_array(args, "numbers", limits))


def _subtract(args: Dict[str, Any], limits: Limits) -> float:
    return finite_result(get_number(args, "a") - get_number(args, "b"))


def _multiply(args: Dict[str, Any], limits: Limits) -> float:
    product = 1.0
    for number in get_number_array(args, "numbers", limits):
        product *= number
    return finite_result(product)


def _divide(args: Dict[str, Any], limits: Limits) -> float:
    a = get_number(args, "a")
    b = get_number(args, "b")
    if b == 0:
        raise ValidationError("Division by zero")
    return finite_result(a / b)


def _power(args: Dict[str, Any], limits: Limits) -> float:
    base = get_number(args, "base")
    exponent = get_number(args, "exponent")
    if base == 0 and exponent < 0:
        raise ValidationError("Zero cannot be raised to a negative power")
    if base < 0 and not float(exponent).is_integer():
        raise ValidationError("Negative base with fractional exponent has no real result")
    try:
        return finite_result(math.pow(base, exponent))
    except OverflowError:
        raise ValidationError("Result is not a finite number")


def _sqrt(args: Dict[str, Any], limits: Limits) -> float:
    number = get_number(args, "number")
    if number < 0:
        raise ValidationError("Cannot take square root of negative number")
    return math.sqrt(number)


def _abs(args: Dict[str, Any], limits: Limits) -> float:
    return abs(get_number(args, "number"))


def _round(args: Dict[str, Any], limits: Limits) -> float:
    number = get_number(args, "number")
    decimals = get_number_opt(args, "decimals")
    places = validate_integer(decimals, "decimals") if decimals is not None else 0
    limits.check_decimal_places(places)
    multiplier = 10.0 ** places
    scaled = abs(number) * multiplier
    if not math.isfinite(scaled):
        # already coarser than the requested precision
        return number
    # half away from zero, like the usual calculator rounding
    return math.copysign(math.floor(scaled + 0.5), number) / multiplier


def _floor(args: Dict[str, Any], limits: Limits) -> float:
    return float(math.floor(get_number(args, "number")))


def _ceil(args: Dict[str, Any], limits: Limits) -> float:
    return float(math.ceil(get_number(args, "number")))


def _modulo(args: Dict[str, Any], limits: Limits) -> float:
    a = get_number(args, "a")
    b = get_number(args, "b")
    if b == 0:
        raise ValidationError("Modulo by zero")
    # remainder takes the sign of the dividend
    return math.fmod(a, b)


_HANDLERS = {
    TOOL_ADD: _add,
    TOOL_SUBTRACT: _subtract,
    TOOL_MULTIPLY: _multiply,
    TOOL_DIVIDE: _divide,
    TOOL_POWER: _power,
    TOOL_SQRT: _sqrt,
    TOOL_ABS: _abs,
    TOOL_ROUND: _round,
    TOOL_FLOOR: _floor,
    TOOL_CEIL: _ceil,
    TOOL_MODULO: _modulo,
}


def execute(name: str, arguments: Dict[str, Any], registry) -> Dict[str, Any]:
    handler = _HANDLERS.get(name)
    if handler is None:
        raise ToolError(f"Unknown basic math tool: {name}")
    return result_json(handler(arguments, registry.limits))
