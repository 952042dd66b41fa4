"""
MCP server exposing the math tool registry over stdio.
"""
import json
import sys
import logging
from typing import Dict, Any, Optional, BinaryIO

from ..config import ServerConfig
from ..tools.registry import ToolRegistry, build_default_registry
from ..utils.rate_limiter import RateLimiter
from .errors import InternalError, InvalidParamsError, McpError, ResourceLimitError
from .protocol import (
    MCP_PROTOCOL_VERSION,
    METHOD_INITIALIZE,
    METHOD_TOOLS_CALL,
    METHOD_TOOLS_LIST,
    JsonRpcRequest,
    JsonRpcResponse,
    tool_result,
)
from .transport import MessageReader, ResponseWriter

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

SERVER_INSTRUCTIONS = (
    "A mathematical operations server providing basic arithmetic, algebra, "
    "statistics, geometry, trigonometry, finance, combinatorics and advanced "
    "functions. Use batch_operations to run several calculations in one call."
)


class MathMCPServer:
    """
    Routes JSON-RPC requests to the tool registry.

    The server holds no per-client state. Each request is answered from the
    registry and configuration it was built with.
    """

    def __init__(
        self,
        config: ServerConfig,
        registry: ToolRegistry,
        rate_limiter: Optional[RateLimiter] = None
    ):
        self.config = config
        self.registry = registry

        if rate_limiter is None and config.enable_rate_limit:
            if config.max_requests_per_second > 0:
                rate_limiter = RateLimiter(config.max_requests_per_second)
            else:
                logger.warning(
                    f"Rate limiting disabled: invalid max_requests_per_second "
                    f"{config.max_requests_per_second}"
                )
        self.rate_limiter = rate_limiter

    def handle_request(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """
        Main MCP request handler.

        Args:
            request: Validated JSON-RPC request

        Returns:
            Response carrying the request's id, never None
        """
        method = request.method
        logger.debug(f"Handling {method} (id={request.id!r})")

        try:
            if method == METHOD_INITIALIZE:
                result = self._handle_initialize(request.params)
            elif method == METHOD_TOOLS_LIST:
                result = self._list_tools()
            elif method == METHOD_TOOLS_CALL:
                result = self._call_tool(request.params)
            else:
                logger.error(f"Method not found: {method}")
                result = tool_result(f"Method not found: {method}", is_error=True)
        except McpError as e:
            return self._error_response(request.id, e)
        except Exception as e:
            logger.exception(f"Error handling request: {method}")
            return self._error_response(request.id, InternalError(f"Internal error: {e}"))

        return JsonRpcResponse.success(request.id, result)

    def _handle_initialize(self, params: Any) -> Dict[str, Any]:
        """Handle initialization request."""
        if params is None:
            raise InvalidParamsError("Missing params")
        if not isinstance(params, dict):
            raise InvalidParamsError("Invalid params: initialize params must be an object")

        client_info = params.get("clientInfo") or {}
        if isinstance(client_info, dict):
            logger.info(f"Client connected: {client_info.get('name', 'unknown')}")

        protocol_version = params.get("protocolVersion")
        if not isinstance(protocol_version, str):
            protocol_version = MCP_PROTOCOL_VERSION

        return {
            "protocolVersion": protocol_version,
            "capabilities": {
                "tools": {}
            },
            "serverInfo": {
                "name": self.config.server_name,
                "version": self.config.server_version
            },
            "instructions": SERVER_INSTRUCTIONS
        }

    def _list_tools(self) -> Dict[str, Any]:
        """Return available tools."""
        return {"tools": self.registry.tool_definitions()}

    def _call_tool(self, params: Any) -> Dict[str, Any]:
        """Execute tool and wrap the outcome in MCP content."""
        if params is None:
            raise InvalidParamsError("Missing params")
        if not isinstance(params, dict):
            raise InvalidParamsError("Invalid params: tools/call params must be an object")

        tool_name = params.get("name")
        if not isinstance(tool_name, str):
            raise InvalidParamsError("Invalid params: name must be a string")

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        elif not isinstance(arguments, dict):
            raise InvalidParamsError("Invalid params: arguments must be an object")

        if self.rate_limiter is not None and not self.rate_limiter.check_rate_limit():
            raise ResourceLimitError("Rate limit exceeded. Please slow down your requests.")

        try:
            result = self.registry.execute_tool(tool_name, arguments)
        except McpError as e:
            logger.error(f"Tool execution error in {tool_name}: {e}")
            return tool_result(f"Error: {e.message}", is_error=True)

        return tool_result(json.dumps(result))

    def _error_response(self, request_id: Any, error: McpError) -> JsonRpcResponse:
        """Create error response."""
        return JsonRpcResponse.failure(request_id, error)


def setup_logging(config: ServerConfig) -> None:
    """
    Configure the package logger. Output goes to stderr and, when configured,
    a log file; stdout carries protocol frames only.
    """
    level = getattr(logging, config.log_level.upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING

    package_logger = logging.getLogger("math_mcp")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    package_logger.addHandler(stream_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.setLevel(level)


def run_mcp_server(
    config: Optional[ServerConfig] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None
) -> None:
    """Run the MCP server until end of input."""
    config = config or ServerConfig.from_env()
    server = MathMCPServer(config, build_default_registry(config))
    reader = MessageReader(
        stdin if stdin is not None else sys.stdin.buffer,
        max_message_size=config.max_message_size
    )
    writer = ResponseWriter(stdout if stdout is not None else sys.stdout.buffer)

    logger.info(f"Starting {config.server_name} {config.server_version}")

    while True:
        try:
            message = reader.read_message()
        except McpError as e:
            if e.answerable:
                writer.write(JsonRpcResponse.failure(e.request_id, e), e.encoding)
            else:
                # no id to answer with; clients reject null-id error responses
                logger.error(f"Failed to read message (cannot respond to client): {e}")
            continue

        if message is None:
            logger.info("End of input, shutting down")
            break

        response = server.handle_request(message.request)
        try:
            writer.write(response, message.encoding)
        except BrokenPipeError:
            logger.warning("Output stream closed, shutting down")
            break


def main():
    """Main entry point."""
    config = ServerConfig.from_env()
    setup_logging(config)
    try:
        run_mcp_server(config)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
