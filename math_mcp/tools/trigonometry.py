"""
Trigonometric tools. Angles are in radians unless a tool says otherwise.
"""
import math
from typing import Dict, Any, List

from ..core.errors import ToolError, ValidationError
from ..utils.args import get_number, get_number_opt, result_json
from ..utils.validation import finite_result


def _single(key: str, description: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {key: {"type": "number", "description": description}},
        "required": [key]
    }


def get_tool_definitions() -> List[Dict[str, Any]]:
    return [
        {"name": "sin", "description": "Calculate the sine of an angle in radians",
         "inputSchema": _single("angle", "Angle in radians")},
        {"name": "cos", "description": "Calculate the cosine of an angle in radians",
         "inputSchema": _single("angle", "Angle in radians")},
        {"name": "tan", "description": "Calculate the tangent of an angle in radians",
         "inputSchema": _single("angle", "Angle in radians")},
        {"name": "asin", "description": "Calculate the arcsine (result in radians)",
         "inputSchema": _single("value", "Value between -1 and 1")},
        {"name": "acos", "description": "Calculate the arccosine (result in radians)",
         "inputSchema": _single("value", "Value between -1 and 1")},
        {"name": "atan", "description": "Calculate the arctangent (result in radians)",
         "inputSchema": _single("value", "Any real value")},
        {
            "name": "law_of_cosines",
            "description": "Law of cosines. Set c to 0 and give angle_c to find side c, "
                           "or give c to find angle C.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "a": {"type": "number", "description": "Side a"},
                    "b": {"type": "number", "description": "Side b"},
                    "c": {"type": "number", "description": "Side c (0 to calculate it)"},
                    "angle_c": {"type": "number", "description": "Angle C in radians"}
                },
                "required": ["a", "b"]
            }
        },
        {
            "name": "law_of_sines",
            "description": "Law of sines. Give one side to find the other, or both to check the ratio.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "side_a": {"type": "number", "description": "Side a"},
                    "angle_a": {"type": "number", "description": "Angle A in radians"},
                    "side_b": {"type": "number", "description": "Side b"},
                    "angle_b": {"type": "number", "description": "Angle B in radians"}
                },
                "required": ["angle_a", "angle_b"]
            }
        },
        {"name": "degrees_to_radians", "description": "Convert degrees to radians",
         "inputSchema": _single("degrees", "Angle in degrees")},
        {"name": "radians_to_degrees", "description": "Convert radians to degrees",
         "inputSchema": _single("radians", "Angle in radians")},
    ]


def _unit_interval(args: Dict[str, Any], label: str) -> float:
    value = get_number(args, "value")
    if not -1.0 <= value <= 1.0:
        raise ValidationError(f"Value must be between -1 and 1 for {label}")
    return value


def _law_of_cosines(args: Dict[str, Any]) -> Dict[str, Any]:
    a = get_number(args, "a")
    b = get_number(args, "b")
    c = get_number_opt(args, "c")
    angle_c = get_number_opt(args, "angle_c")

    if c is None:
        raise ValidationError("Must provide side c or set it to 0 to calculate")
    if c == 0:
        if angle_c is None:
            raise ValidationError("Angle C is required to calculate side c")
        return {"side_c": math.sqrt(max(a * a + b * b - 2.0 * a * b * math.cos(angle_c), 0.0))}
    if a == 0 or b == 0:
        raise ValidationError("Sides a and b must be non-zero to calculate angle C")

    cos_c = (a * a + b * b - c * c) / (2.0 * a * b)
    if abs(cos_c) > 1.0:
        raise ValidationError("Invalid triangle: sides do not satisfy triangle inequality")
    return {"angle_c": math.acos(cos_c)}


def _law_of_sines(args: Dict[str, Any]) -> Dict[str, Any]:
    side_a = get_number_opt(args, "side_a")
    side_b = get_number_opt(args, "side_b")
    angle_a = get_number(args, "angle_a")
    angle_b = get_number(args, "angle_b")
    sin_a = math.sin(angle_a)
    sin_b = math.sin(angle_b)

    if side_a is None and side_b is None:
        raise ValidationError("Must provide at least one side")
    if side_b is None:
        if sin_a == 0:
            raise ValidationError("Angle A must not be a multiple of pi")
        return {"side_b": finite_result(side_a * sin_b / sin_a)}
    if side_a is None:
        if sin_b == 0:
            raise ValidationError("Angle B must not be a multiple of pi")
        return {"side_a": finite_result(side_b * sin_a / sin_b)}

    if sin_a == 0 or sin_b == 0:
        raise ValidationError("Angles must not be multiples of pi")
    ratio_a = side_a / sin_a
    ratio_b = side_b / sin_b
    return {"ratio_a": ratio_a, "ratio_b": ratio_b, "match": abs(ratio_a - ratio_b) < 1e-10}


_HANDLERS = {
    "sin": lambda args: result_json(math.sin(get_number(args, "angle"))),
    "cos": lambda args: result_json(math.cos(get_number(args, "angle"))),
    "tan": lambda args: result_json(math.tan(get_number(args, "angle"))),
    "asin": lambda args: result_json(math.asin(_unit_interval(args, "arcsine"))),
    "acos": lambda args: result_json(math.acos(_unit_interval(args, "arccosine"))),
    "atan": lambda args: result_json(math.atan(get_number(args, "value"))),
    "law_of_cosines": _law_of_cosines,
    "law_of_sines": _law_of_sines,
    "degrees_to_radians": lambda args: result_json(math.radians(get_number(args, "degrees"))),
    "radians_to_degrees": lambda args: result_json(finite_result(math.degrees(get_number(args, "radians")))),
}


def execute(name: str, arguments: Dict[str, Any], registry) -> Dict[str, Any]:
    handler = _HANDLERS.get(name)
    if handler is None:
        raise ToolError(f"Unknown trigonometry tool: {name}")
    return handler(arguments)
