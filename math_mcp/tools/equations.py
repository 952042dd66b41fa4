"""
Equation and coordinate-geometry tools.
"""
import math
from typing import Dict, Any, List

from ..core.errors import ToolError, ValidationError
from ..utils.args import get_number, get_number_opt, result_json
from ..utils.validation import finite_result

_POINTS_SCHEMA = {
    "type": "object",
    "properties": {
        "x1": {"type": "number", "description": "X coordinate of the first point"},
        "y1": {"type": "number", "description": "Y coordinate of the first point"},
        "x2": {"type": "number", "description": "X coordinate of the second point"},
        "y2": {"type": "number", "description": "Y coordinate of the second point"}
    },
    "required": ["x1", "y1", "x2", "y2"]
}


def get_tool_definitions() -> List[Dict[str, Any]]:
    return [
        {
            "name": "quadratic_formula",
            "description": "Solve ax^2 + bx + c = 0 for real roots",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "a": {"type": "number", "description": "Coefficient of x^2 (non-zero)"},
                    "b": {"type": "number", "description": "Coefficient of x"},
                    "c": {"type": "number", "description": "Constant term"}
                },
                "required": ["a", "b", "c"]
            }
        },
        {
            "name": "distance_formula",
            "description": "Calculate the distance between two points",
            "inputSchema": _POINTS_SCHEMA
        },
        {
            "name": "pythagorean_theorem",
            "description": "Find a side of a right triangle. Pass the unknown side as 0, "
                           "or omit c to compute the hypotenuse.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "a": {"type": "number", "description": "First leg (0 if unknown)"},
                    "b": {"type": "number", "description": "Second leg (0 if unknown)"},
                    "c": {"type": "number", "description": "Hypotenuse (0 or omitted if unknown)"}
                },
                "required": ["a", "b"]
            }
        },
        {
            "name": "slope",
            "description": "Calculate the slope of the line through two points",
            "inputSchema": _POINTS_SCHEMA
        },
        {
            "name": "midpoint",
            "description": "Calculate the midpoint between two points",
            "inputSchema": _POINTS_SCHEMA
        },
    ]


def _points(args: Dict[str, Any]):
    return (
        get_number(args, "x1"),
        get_number(args, "y1"),
        get_number(args, "x2"),
        get_number(args, "y2"),
    )


def _quadratic_formula(args: Dict[str, Any]) -> Dict[str, Any]:
    a = get_number(args, "a")
    b = get_number(args, "b")
    c = get_number(args, "c")
    if a == 0:
        raise ValidationError("Coefficient 'a' cannot be zero for quadratic equation")

    discriminant = finite_result(b * b - 4.0 * a * c)
    if discriminant < 0:
        return {
            "roots": None,
            "discriminant": discriminant,
            "message": "No real roots (complex roots exist)"
        }
    if discriminant == 0:
        root = -b / (2.0 * a)
        return {"roots": [root, root], "discriminant": discriminant, "type": "repeated"}

    sqrt_disc = math.sqrt(discriminant)
    return {
        "roots": [(-b + sqrt_disc) / (2.0 * a), (-b - sqrt_disc) / (2.0 * a)],
        "discriminant": discriminant,
        "type": "distinct"
    }


def _distance_formula(args: Dict[str, Any]) -> Dict[str, Any]:
    x1, y1, x2, y2 = _points(args)
    return result_json(finite_result(math.hypot(x2 - x1, y2 - y1)))


def _pythagorean_theorem(args: Dict[str, Any]) -> Dict[str, Any]:
    a = get_number(args, "a")
    b = get_number(args, "b")
    c = get_number_opt(args, "c")

    if c is None or c == 0:
        return result_json(finite_result(math.hypot(a, b)))
    if a == 0 or b == 0:
        leg = b if a == 0 else a
        if abs(leg) > abs(c):
            raise ValidationError("Hypotenuse must be the longest side")
        return result_json(math.sqrt(c * c - leg * leg))
    raise ValidationError("Cannot determine which side to calculate")


def _slope(args: Dict[str, Any]) -> Dict[str, Any]:
    x1, y1, x2, y2 = _points(args)
    if abs(x2 - x1) < 1e-10:
        raise ValidationError("Slope is undefined (vertical line)")
    return result_json(finite_result((y2 - y1) / (x2 - x1)))


def _midpoint(args: Dict[str, Any]) -> Dict[str, Any]:
    x1, y1, x2, y2 = _points(args)
    return {"x": (x1 + x2) / 2.0, "y": (y1 + y2) / 2.0}


_HANDLERS = {
    "quadratic_formula": _quadratic_formula,
    "distance_formula": _distance_formula,
    "pythagorean_theorem": _pythagorean_theorem,
    "slope": _slope,
    "midpoint": _midpoint,
}


def execute(name: str, arguments: Dict[str, Any], registry) -> Dict[str, Any]:
    handler = _HANDLERS.get(name)
    if handler is None:
        raise ToolError(f"Unknown equations tool: {name}")
    return handler(arguments)
