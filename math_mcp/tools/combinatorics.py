"""
Permutations and combinations.
"""
import math
from typing import Dict, Any, List, Tuple

from ..core.errors import ToolError, ValidationError
from ..utils.args import get_number, result_json
from ..utils.validation import validate_integer

MAX_N = 170

_NR_SCHEMA = {
    "type": "object",
    "properties": {
        "n": {"type": "number", "description": "Total number of items"},
        "r": {"type": "number", "description": "Number of items chosen"}
    },
    "required": ["n", "r"]
}


def get_tool_definitions() -> List[Dict[str, Any]]:
    return [
        {
            "name": "permutation",
            "description": "Number of ordered arrangements of r items from n: n! / (n-r)!",
            "inputSchema": _NR_SCHEMA
        },
        {
            "name": "combination",
            "description": "Number of unordered selections of r items from n: n! / (r!(n-r)!)",
            "inputSchema": _NR_SCHEMA
        },
    ]


def _n_r(args: Dict[str, Any], label: str) -> Tuple[int, int]:
    n = validate_integer(get_number(args, "n"), "n")
    r = validate_integer(get_number(args, "r"), "r")
    if n < 0 or r < 0:
        raise ValidationError(f"{label}: n and r must be non-negative")
    if r > n:
        raise ValidationError(f"{label}: r must be <= n")
    if n > MAX_N:
        raise ValidationError(f"{label} overflow: n must be <= {MAX_N}")
    return n, r


def _permutation(args: Dict[str, Any]) -> float:
    n, r = _n_r(args, "Permutation")
    return float(math.perm(n, r))


def _combination(args: Dict[str, Any]) -> float:
    n, r = _n_r(args, "Combination")
    return float(math.comb(n, r))


_HANDLERS = {
    "permutation": _permutation,
    "combination": _combination,
}


def execute(name: str, arguments: Dict[str, Any], registry) -> Dict[str, Any]:
    handler = _HANDLERS.get(name)
    if handler is None:
        raise ToolError(f"Unknown combinatorics tool: {name}")
    return result_json(handler(arguments))
