"""
Area and volume tools.
"""
import math
from typing import Dict, Any, List

from ..core.errors import ToolError, ValidationError
from ..utils.args import get_number, result_json
from ..utils.validation import finite_result, validate_non_negative


def _schema(**fields: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            name: {"type": "number", "description": description}
            for name, description in fields.items()
        },
        "required": list(fields)
    }


def get_tool_definitions() -> List[Dict[str, Any]]:
    return [
        {
            "name": "area_circle",
            "description": "Calculate the area of a circle",
            "inputSchema": _schema(radius="Radius of the circle")
        },
        {
            "name": "area_rectangle",
            "description": "Calculate the area of a rectangle",
            "inputSchema": _schema(length="Length", width="Width")
        },
        {
            "name": "area_triangle",
            "description": "Calculate the area of a triangle from base and height",
            "inputSchema": _schema(base="Base length", height="Height")
        },
        {
            "name": "area_trapezoid",
            "description": "Calculate the area of a trapezoid",
            "inputSchema": _schema(base1="First parallel side", base2="Second parallel side", height="Height")
        },
        {
            "name": "volume_sphere",
            "description": "Calculate the volume of a sphere",
            "inputSchema": _schema(radius="Radius of the sphere")
        },
        {
            "name": "volume_cylinder",
            "description": "Calculate the volume of a cylinder",
            "inputSchema": _schema(radius="Radius of the base", height="Height")
        },
        {
            "name": "volume_cone",
            "description": "Calculate the volume of a cone",
            "inputSchema": _schema(radius="Radius of the base", height="Height")
        },
        {
            "name": "volume_rectangular_prism",
            "description": "Calculate the volume of a rectangular prism",
            "inputSchema": _schema(length="Length", width="Width", height="Height")
        },
    ]


def _dimensions(args: Dict[str, Any], *names: str) -> List[float]:
    values = []
    for name in names:
        value = get_number(args, name)
        validate_non_negative(value, name)
        values.append(value)
    return values


def _area_circle(args):
    (radius,) = _dimensions(args, "radius")
    return math.pi * radius * radius


def _area_rectangle(args):
    length, width = _dimensions(args, "length", "width")
    return length * width


def _area_triangle(args):
    base, height = _dimensions(args, "base", "height")
    return 0.5 * base * height


def _area_trapezoid(args):
    base1, base2, height = _dimensions(args, "base1", "base2", "height")
    return 0.5 * (base1 + base2) * height


def _volume_sphere(args):
    (radius,) = _dimensions(args, "radius")
    return (4.0 / 3.0) * math.pi * radius ** 3


def _volume_cylinder(args):
    radius, height = _dimensions(args, "radius", "height")
    return math.pi * radius * radius * height


def _volume_cone(args):
    radius, height = _dimensions(args, "radius", "height")
    return (1.0 / 3.0) * math.pi * radius * radius * height


def _volume_rectangular_prism(args):
    length, width, height = _dimensions(args, "length", "width", "height")
    return length * width * height


_HANDLERS = {
    "area_circle": _area_circle,
    "area_rectangle": _area_rectangle,
    "area_triangle": _area_triangle,
    "area_trapezoid": _area_trapezoid,
    "volume_sphere": _volume_sphere,
    "volume_cylinder": _volume_cylinder,
    "volume_cone": _volume_cone,
    "volume_rectangular_prism": _volume_rectangular_prism,
}


def execute(name: str, arguments: Dict[str, Any], registry) -> Dict[str, Any]:
    handler = _HANDLERS.get(name)
    if handler is None:
        raise ToolError(f"Unknown geometry tool: {name}")
    try:
        return result_json(finite_result(handler(arguments)))
    except OverflowError:
        raise ValidationError("Result is not a finite number")
