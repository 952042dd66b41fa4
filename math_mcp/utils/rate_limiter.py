"""
Token bucket rate limiter used for admission control on tool calls.
"""
import threading
import time


class RateLimiter:
    """
    Simple token bucket.

    Tokens refill continuously at ``max_tokens / refill_interval`` per second,
    computed lazily from elapsed monotonic time on each check. Every admitted
    operation consumes one token. All state sits behind one lock so a single
    instance may be shared between threads.
    """

    def __init__(self, max_tokens: int, refill_interval: float = 1.0):
        if max_tokens <= 0:
            raise ValueError("max_tokens must be positive")
        if refill_interval <= 0:
            raise ValueError("refill_interval must be positive")

        self._lock = threading.Lock()
        self.max_tokens = float(max_tokens)
        self.refill_rate = max_tokens / refill_interval
        self._tokens = float(max_tokens)
        self._last_refill = time.monotonic()

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last_refill
        self._tokens = min(self._tokens + elapsed * self.refill_rate, self.max_tokens)
        self._last_refill = now

    def check_rate_limit(self) -> bool:
        """Consume a token if one is available. Returns False when limited."""
        with self._lock:
            self._refill()
            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return True
            return False

    def available_tokens(self) -> float:
        with self._lock:
            self._refill()
            return self._tokens
