"""
Batch meta-tool: run several tool calls in one request.

The whole batch is validated before anything runs. Individual operation
failures are recorded in the results and do not stop the rest.
"""
import logging
from typing import Dict, Any, List

from ..core.errors import InvalidParamsError, McpError, ToolError

logger = logging.getLogger(__name__)

TOOL_BATCH = "batch_operations"
MAX_BATCH_SIZE = 50


def get_tool_definitions() -> List[Dict[str, Any]]:
    return [
        {
            "name": TOOL_BATCH,
            "description": f"Execute up to {MAX_BATCH_SIZE} tool operations in one request. "
                           "Each operation succeeds or fails independently.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "operations": {
                        "type": "array",
                        "description": "Operations to run, in order",
                        "items": {
                            "type": "object",
                            "properties": {
                                "id": {"type": "string", "description": "Caller-chosen unique id"},
                                "tool": {"type": "string", "description": "Tool name"},
                                "arguments": {"type": "object", "description": "Tool arguments"}
                            },
                            "required": ["id", "tool", "arguments"]
                        },
                        "minItems": 1,
                        "maxItems": MAX_BATCH_SIZE
                    }
                },
                "required": ["operations"]
            }
        }
    ]


def _validate_operations(arguments: Dict[str, Any]) -> List[Dict[str, Any]]:
    operations = arguments.get("operations")
    if not isinstance(operations, list):
        raise InvalidParamsError("Invalid arguments: operations must be an array")
    if not operations:
        raise InvalidParamsError("Batch must contain at least one operation")
    if len(operations) > MAX_BATCH_SIZE:
        raise InvalidParamsError(
            f"Batch size {len(operations)} exceeds maximum of {MAX_BATCH_SIZE}"
        )

    seen = set()
    for idx, op in enumerate(operations):
        if not isinstance(op, dict):
            raise InvalidParamsError(f"Operation {idx} must be an object")
        op_id = op.get("id")
        if not isinstance(op_id, str):
            raise InvalidParamsError(f"Operation {idx}: id must be a string")
        if not isinstance(op.get("tool"), str):
            raise InvalidParamsError(f"Operation {op_id}: tool must be a string")
        if not isinstance(op.get("arguments"), dict):
            raise InvalidParamsError(f"Operation {op_id}: arguments must be an object")
        if op_id in seen:
            raise InvalidParamsError(f"Duplicate operation id: {op_id}")
        seen.add(op_id)
    return operations


def _run_operation(op: Dict[str, Any], registry) -> Dict[str, Any]:
    try:
        if op["tool"] == TOOL_BATCH:
            raise ToolError("Nested batch operations are not allowed")
        result = registry.execute_tool(op["tool"], op["arguments"])
    except McpError as e:
        logger.debug(f"Batch operation {op['id']} failed: {e}")
        return {"id": op["id"], "success": False, "error": e.message}
    except Exception as e:
        logger.error(f"Batch operation {op['id']} raised unexpectedly: {e}")
        return {"id": op["id"], "success": False, "error": f"Internal error: {e}"}
    return {"id": op["id"], "success": True, "result": result}


def execute(name: str, arguments: Dict[str, Any], registry) -> Dict[str, Any]:
    if name != TOOL_BATCH:
        raise ToolError(f"Unknown batch tool: {name}")

    operations = _validate_operations(arguments)
    results = [_run_operation(op, registry) for op in operations]
    successful = sum(1 for r in results if r["success"])

    return {
        "results": results,
        "summary": {
            "total": len(results),
            "successful": successful,
            "failed": len(results) - successful
        }
    }
