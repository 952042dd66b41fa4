"""
Server configuration, read once from the environment at startup.
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_SERVER_NAME = "math-mcp"
DEFAULT_SERVER_VERSION = "0.1.0"
DEFAULT_MAX_ARRAY_SIZE = 10_000
DEFAULT_MAX_DECIMAL_PLACES = 15
DEFAULT_MAX_REQUESTS_PER_SECOND = 1000
DEFAULT_MAX_MESSAGE_SIZE = 10_000_000


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring invalid value for {name}: {raw!r}")
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    logger.warning(f"Ignoring invalid value for {name}: {raw!r}")
    return default


@dataclass(frozen=True)
class ServerConfig:
    """
    Settings for the MCP server.

    Defaults can be overridden through ``MCP_*`` environment variables via
    :meth:`from_env`. Instances are immutable and shared by reference.
    """
    server_name: str = DEFAULT_SERVER_NAME
    server_version: str = DEFAULT_SERVER_VERSION
    max_array_size: int = DEFAULT_MAX_ARRAY_SIZE
    max_decimal_places: int = DEFAULT_MAX_DECIMAL_PLACES
    enable_rate_limit: bool = True
    max_requests_per_second: int = DEFAULT_MAX_REQUESTS_PER_SECOND
    max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Build a configuration from the process environment."""
        return cls(
            server_name=os.environ.get("MCP_SERVER_NAME") or DEFAULT_SERVER_NAME,
            server_version=os.environ.get("MCP_SERVER_VERSION") or DEFAULT_SERVER_VERSION,
            max_array_size=_env_int("MCP_MAX_ARRAY_SIZE", DEFAULT_MAX_ARRAY_SIZE),
            max_decimal_places=_env_int("MCP_MAX_DECIMAL_PLACES", DEFAULT_MAX_DECIMAL_PLACES),
            enable_rate_limit=_env_bool("MCP_ENABLE_RATE_LIMIT", True),
            max_requests_per_second=_env_int(
                "MCP_MAX_REQUESTS_PER_SECOND", DEFAULT_MAX_REQUESTS_PER_SECOND
            ),
            max_message_size=_env_int("MCP_MAX_MESSAGE_SIZE", DEFAULT_MAX_MESSAGE_SIZE),
            log_level=(os.environ.get("MCP_LOG_LEVEL") or "WARNING").upper(),
            log_file=os.environ.get("MCP_LOG_FILE") or None,
        )
