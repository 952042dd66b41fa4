"""
Math MCP: arithmetic, statistics, geometry and more over the Model Context
Protocol stdio transport.
"""

__version__ = "0.1.0"

from .config import ServerConfig
from .core.mcp_server import MathMCPServer, run_mcp_server
from .tools.registry import ToolRegistry, build_default_registry

__all__ = [
    "ServerConfig",
    "MathMCPServer",
    "run_mcp_server",
    "ToolRegistry",
    "build_default_registry",
]
