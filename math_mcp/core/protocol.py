"""
JSON-RPC 2.0 data contracts used on the MCP stdio transport.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Optional

from .errors import InvalidRequestError, McpError

JSON_RPC_VERSION = "2.0"
MCP_PROTOCOL_VERSION = "2024-11-05"

METHOD_INITIALIZE = "initialize"
METHOD_TOOLS_LIST = "tools/list"
METHOD_TOOLS_CALL = "tools/call"


class EncodingTag(Enum):
    """Wire framing a request arrived in; its response is written the same way."""
    LENGTH_PREFIXED = "length_prefixed"
    BARE_JSON = "bare_json"


def _is_valid_id(value: Any) -> bool:
    # bool is an int subclass but not a valid JSON-RPC id
    if isinstance(value, bool):
        return False
    return value is None or isinstance(value, (int, float, str))


@dataclass
class JsonRpcRequest:
    """Incoming request from an MCP client."""
    jsonrpc: str
    method: str
    id: Any = None
    params: Any = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "JsonRpcRequest":
        """
        Validate a decoded JSON object and build a request from it.

        Raises:
            InvalidRequestError: if the object is not a JSON-RPC 2.0 request.
        """
        request_id = payload.get("id")
        if not _is_valid_id(request_id):
            raise InvalidRequestError(
                f"Invalid request id: expected number or string, got {type(request_id).__name__}"
            )

        try:
            jsonrpc = payload.get("jsonrpc")
            if jsonrpc != JSON_RPC_VERSION:
                raise InvalidRequestError(
                    f"Invalid JSON-RPC version: expected '{JSON_RPC_VERSION}', got '{jsonrpc}'"
                )

            method = payload.get("method")
            if not isinstance(method, str):
                raise InvalidRequestError("Invalid request: method must be a string")
        except McpError as e:
            e.request_id = request_id
            raise

        return cls(
            jsonrpc=jsonrpc,
            method=method,
            id=request_id,
            params=payload.get("params"),
        )


@dataclass
class JsonRpcError:
    """Error object carried in the top-level ``error`` field."""
    code: int
    message: str
    data: Any = None

    @classmethod
    def from_exception(cls, error: McpError) -> "JsonRpcError":
        return cls(code=error.code, message=error.message, data=error.data)

    def to_dict(self) -> Dict[str, Any]:
        error = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


@dataclass
class JsonRpcResponse:
    """
    Outgoing response.

    ``id`` is the request's id object, unchanged. It is serialized as
    ``null`` when the request carried none.
    """
    id: Any = None
    result: Optional[Any] = None
    error: Optional[JsonRpcError] = None

    @classmethod
    def success(cls, request_id: Any, result: Any) -> "JsonRpcResponse":
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: Any, error: McpError) -> "JsonRpcResponse":
        return cls(id=request_id, error=JsonRpcError.from_exception(error))

    def to_dict(self) -> Dict[str, Any]:
        response: Dict[str, Any] = {"jsonrpc": JSON_RPC_VERSION, "id": self.id}
        if self.error is not None:
            response["error"] = self.error.to_dict()
        else:
            response["result"] = self.result
        return response


@dataclass
class ParsedMessage:
    """A validated request together with the framing it arrived in."""
    request: JsonRpcRequest
    encoding: EncodingTag


def tool_result(text: str, is_error: bool = False) -> Dict[str, Any]:
    """Build the ``content`` envelope for tools/call results."""
    result: Dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result
