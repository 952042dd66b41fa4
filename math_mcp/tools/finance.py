"""
Interest and percentage tools.
"""
from typing import Dict, Any, List

from ..core.errors import ToolError, ValidationError
from ..utils.args import get_number, get_number_opt, result_json
from ..utils.validation import finite_result, validate_positive


def get_tool_definitions() -> List[Dict[str, Any]]:
    return [
        {
            "name": "compound_interest",
            "description": "Calculate the final amount with compound interest: P(1 + r/n)^(nt)",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "principal": {"type": "number", "description": "Initial amount"},
                    "rate": {"type": "number", "description": "Annual interest rate as a decimal (0.05 = 5%)"},
                    "time": {"type": "number", "description": "Time in years"},
                    "compounds_per_year": {"type": "number", "description": "Compounding periods per year (default: 1)"}
                },
                "required": ["principal", "rate", "time"]
            }
        },
        {
            "name": "simple_interest",
            "description": "Calculate simple interest: P * r * t",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "principal": {"type": "number", "description": "Initial amount"},
                    "rate": {"type": "number", "description": "Annual interest rate as a decimal"},
                    "time": {"type": "number", "description": "Time in years"}
                },
                "required": ["principal", "rate", "time"]
            }
        },
        {
            "name": "percentage",
            "description": "Percentage helper. Give part to get the percentage of whole, "
                           "percent to get the part, or both to check them against each other.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "part": {"type": "number", "description": "Part of the whole"},
                    "whole": {"type": "number", "description": "The whole amount"},
                    "percent": {"type": "number", "description": "Percentage (e.g. 25 for 25%)"}
                },
                "required": ["whole"]
            }
        },
    ]


def _compound_interest(args: Dict[str, Any]) -> Dict[str, Any]:
    principal = get_number(args, "principal")
    rate = get_number(args, "rate")
    time = get_number(args, "time")
    n = get_number_opt(args, "compounds_per_year")
    n = 1.0 if n is None else n
    validate_positive(n, "compounds_per_year")
    growth = 1.0 + rate / n
    if growth < 0:
        raise ValidationError("Rate per period must be greater than -100%")
    try:
        return result_json(finite_result(principal * growth ** (n * time)))
    except OverflowError:
        raise ValidationError("Result is not a finite number")


def _simple_interest(args: Dict[str, Any]) -> Dict[str, Any]:
    principal = get_number(args, "principal")
    rate = get_number(args, "rate")
    time = get_number(args, "time")
    return result_json(finite_result(principal * rate * time))


def _percentage(args: Dict[str, Any]) -> Dict[str, Any]:
    part = get_number_opt(args, "part")
    whole = get_number(args, "whole")
    percent = get_number_opt(args, "percent")

    if part is None and percent is None:
        raise ValidationError("Must provide either 'part' or 'percent'")
    if percent is None:
        if whole == 0:
            raise ValidationError("Whole cannot be zero when calculating a percentage")
        return {"percentage": finite_result(part / whole * 100.0)}
    if part is None:
        return {"part": finite_result(percent / 100.0 * whole)}

    if whole == 0:
        raise ValidationError("Whole cannot be zero when calculating a percentage")
    calculated = finite_result(part / whole * 100.0)
    return {
        "calculated_percentage": calculated,
        "given_percentage": percent,
        "match": abs(calculated - percent) < 0.0001
    }


_HANDLERS = {
    "compound_interest": _compound_interest,
    "simple_interest": _simple_interest,
    "percentage": _percentage,
}


def execute(name: str, arguments: Dict[str, Any], registry) -> Dict[str, Any]:
    handler = _HANDLERS.get(name)
    if handler is None:
        raise ToolError(f"Unknown finance tool: {name}")
    return handler(arguments)
