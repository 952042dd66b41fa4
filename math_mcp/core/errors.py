"""
Error types for the MCP server.

Every error maps onto one JSON-RPC error code. Transport code attaches the
request id and wire encoding when they are known so the server can decide
whether an answer is possible.
"""
from typing import Any, Optional

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
TOOL_ERROR = -32000
VALIDATION_ERROR = -32001
RESOURCE_LIMIT = -32002


class McpError(Exception):
    """Base exception carrying a JSON-RPC error code.

    Attributes:
        code: JSON-RPC error code.
        message: Human-readable description.
        data: Optional structured detail.
        request_id: Id of the originating request, when it was decoded.
        encoding: Wire encoding of the originating request, when known.
    """

    code = INTERNAL_ERROR

    def __init__(self, message: str, data: Any = None, code: Optional[int] = None):
        super().__init__(message)
        if code is not None:
            self.code = code
        self.message = message
        self.data = data
        self.request_id: Any = None
        self.encoding = None

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    @property
    def answerable(self) -> bool:
        """True when the originating request's id and framing are known."""
        return self.request_id is not None and self.encoding is not None


class ParseError(McpError):
    code = PARSE_ERROR


class InvalidRequestError(McpError):
    code = INVALID_REQUEST


class MethodNotFoundError(McpError):
    code = METHOD_NOT_FOUND

    def __init__(self, method: str):
        super().__init__(f"Method not found: {method}")
        self.method = method


class InvalidParamsError(McpError):
    code = INVALID_PARAMS


class InternalError(McpError):
    code = INTERNAL_ERROR


class ToolError(McpError):
    code = TOOL_ERROR


class ValidationError(McpError):
    code = VALIDATION_ERROR


class ResourceLimitError(McpError):
    code = RESOURCE_LIMIT
