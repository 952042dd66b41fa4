"""
Resource limits applied while executing tools.
"""
import time
from typing import Optional

from ..config import ServerConfig
from ..core.errors import ResourceLimitError
from .validation import validate_array_size, validate_decimal_places


class Limits:
    """
    Central view of the resource limits from the server configuration.

    Tools receive this through the registry instead of re-reading the
    environment on every call.
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()

    def check_array_size(self, size: int) -> None:
        validate_array_size(size, self.config.max_array_size)

    def check_decimal_places(self, places: int) -> None:
        validate_decimal_places(places, self.config.max_decimal_places)

    def check_timeout(self, start: float, max_duration: float) -> None:
        """
        Raise if more than ``max_duration`` seconds passed since ``start``.

        ``start`` is a ``time.monotonic()`` reading. This is a cooperative
        check only; nothing interrupts a tool that is already running.
        """
        elapsed = time.monotonic() - start
        if elapsed > max_duration:
            raise ResourceLimitError(
                f"Operation exceeded timeout of {max_duration:.3f}s"
            )
