"""
Immutable tool registry.

The registry maps a tool name to its executor and descriptor. It is built
once at startup and passed by reference to everything that dispatches tool
calls; nothing mutates it afterwards, so concurrent readers need no locking.
"""
import copy
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..config import ServerConfig
from ..core.errors import InvalidParamsError, ToolError
from ..utils.limits import Limits

logger = logging.getLogger(__name__)

# execute(tool_name, arguments, registry) -> result object
Executor = Callable[[str, Dict[str, Any], "ToolRegistry"], Dict[str, Any]]


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and JSON schema advertised by ``tools/list``."""
    name: str
    description: str
    input_schema: Dict[str, Any]

    @classmethod
    def from_definition(cls, definition: Dict[str, Any]) -> "ToolDescriptor":
        return cls(
            name=definition["name"],
            description=definition["description"],
            input_schema=copy.deepcopy(definition["inputSchema"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema),
        }


@dataclass(frozen=True)
class RegisteredTool:
    executor: Executor
    descriptor: ToolDescriptor


class ToolRegistry:
    """
    Read-only mapping from tool name to (executor, descriptor).

    Args:
        tools: (executor, descriptor) pairs in advertisement order.
        limits: Resource limits handed to executors.
    """

    def __init__(self, tools: Iterable[Tuple[Executor, ToolDescriptor]], limits: Limits):
        entries: Dict[str, RegisteredTool] = {}
        ordered: List[ToolDescriptor] = []
        for executor, descriptor in tools:
            if descriptor.name in entries:
                raise ValueError(f"Duplicate tool name: {descriptor.name}")
            entries[descriptor.name] = RegisteredTool(executor, descriptor)
            ordered.append(descriptor)

        self._entries = MappingProxyType(entries)
        self._descriptors = tuple(ordered)
        self.limits = limits

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, name: str) -> Optional[Executor]:
        entry = self._entries.get(name)
        return entry.executor if entry else None

    def all_descriptors(self) -> Tuple[ToolDescriptor, ...]:
        return self._descriptors

    def tool_definitions(self) -> List[Dict[str, Any]]:
        """Descriptors serialized for ``tools/list``."""
        return [descriptor.to_dict() for descriptor in self._descriptors]

    def execute_tool(self, name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run a tool by name.

        Raises:
            ToolError: if no tool is registered under ``name``.
            McpError: whatever the executor raises for bad input.
        """
        executor = self.lookup(name)
        if executor is None:
            raise ToolError(f"Unknown tool: {name}")
        if not isinstance(arguments, dict):
            raise InvalidParamsError("Tool arguments must be an object")
        return executor(name, arguments, self)


def build_default_registry(config: Optional[ServerConfig] = None) -> ToolRegistry:
    """Register every built-in tool family."""
    from . import (
        advanced,
        algebra,
        basic_math,
        batch,
        combinatorics,
        equations,
        finance,
        geometry,
        statistics,
        trigonometry,
    )

    modules = [
        basic_math,
        batch,
        algebra,
        statistics,
        geometry,
        equations,
        trigonometry,
        finance,
        combinatorics,
        advanced,
    ]

    tools = []
    for module in modules:
        for definition in module.get_tool_definitions():
            tools.append((module.execute, ToolDescriptor.from_definition(definition)))

    registry = ToolRegistry(tools, Limits(config))
    logger.debug(f"Registered {len(registry)} tools")
    return registry
