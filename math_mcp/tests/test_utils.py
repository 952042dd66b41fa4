"""
Configuration, limits and rate limiter tests.
"""
import time

import pytest

from ..config import DEFAULT_MAX_ARRAY_SIZE, ServerConfig
from ..core.errors import (
    InvalidParamsError,
    McpError,
    MethodNotFoundError,
    ResourceLimitError,
    ValidationError,
)
from ..core.protocol import JsonRpcError
from ..utils.args import get_bool_opt, get_number, get_number_array, get_number_opt
from ..utils.limits import Limits
from ..utils.rate_limiter import RateLimiter
from ..utils.validation import finite_result, validate_integer


class TestServerConfig:
    """Test environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is set."""
        for name in ("MCP_SERVER_NAME", "MCP_MAX_ARRAY_SIZE", "MCP_ENABLE_RATE_LIMIT", "MCP_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        config = ServerConfig.from_env()

        assert config.server_name == "math-mcp"
        assert config.max_array_size == DEFAULT_MAX_ARRAY_SIZE
        assert config.enable_rate_limit is True
        assert config.log_level == "WARNING"

    def test_overrides(self, monkeypatch):
        """Test MCP_* variables override defaults."""
        monkeypatch.setenv("MCP_SERVER_NAME", "calc")
        monkeypatch.setenv("MCP_MAX_ARRAY_SIZE", "50")
        monkeypatch.setenv("MCP_ENABLE_RATE_LIMIT", "false")
        monkeypatch.setenv("MCP_LOG_LEVEL", "debug")
        monkeypatch.setenv("MCP_LOG_FILE", "/tmp/math.log")
        config = ServerConfig.from_env()

        assert config.server_name == "calc"
        assert config.max_array_size == 50
        assert config.enable_rate_limit is False
        assert config.log_level == "DEBUG"
        assert config.log_file == "/tmp/math.log"

    def test_invalid_values_fall_back(self, monkeypatch, caplog):
        """Test unparseable values keep the default and warn."""
        monkeypatch.setenv("MCP_MAX_ARRAY_SIZE", "lots")
        monkeypatch.setenv("MCP_ENABLE_RATE_LIMIT", "maybe")
        config = ServerConfig.from_env()

        assert config.max_array_size == DEFAULT_MAX_ARRAY_SIZE
        assert config.enable_rate_limit is True
        assert "MCP_MAX_ARRAY_SIZE" in caplog.text

    def test_frozen(self):
        """Test configuration cannot be changed after construction."""
        with pytest.raises(AttributeError):
            ServerConfig().max_array_size = 1


class TestErrors:
    """Test the error hierarchy."""

    def test_codes_and_str(self):
        """Test each error renders its code."""
        assert str(ValidationError("bad")) == "[-32001] bad"
        assert MethodNotFoundError("x/y").message == "Method not found: x/y"
        assert McpError("custom", code=-32099).code == -32099

    def test_to_json_rpc_error(self):
        """Test conversion to the wire error object."""
        error = JsonRpcError.from_exception(InvalidParamsError("missing", data={"field": "a"}))
        assert error.to_dict() == {"code": -32602, "message": "missing", "data": {"field": "a"}}

    def test_answerable(self):
        """Test only errors with id and framing can be answered."""
        error = ValidationError("bad")
        assert not error.answerable
        error.request_id = 1
        error.encoding = "bare"
        assert error.answerable


class TestArgs:
    """Test argument extraction helpers."""

    def test_get_number(self):
        """Test required numbers."""
        assert get_number({"a": 3}, "a") == 3
        with pytest.raises(InvalidParamsError):
            get_number({}, "a")
        with pytest.raises(InvalidParamsError):
            get_number({"a": "3"}, "a")
        with pytest.raises(ValidationError):
            get_number({"a": float("inf")}, "a")

    def test_integer_too_large_for_float(self):
        """Test integers beyond the float range are out of range, not a crash."""
        huge = int("9" * 400)
        with pytest.raises(ValidationError, match="a is out of range"):
            get_number({"a": huge}, "a")
        with pytest.raises(ValidationError, match=r"n\[1\] is out of range"):
            get_number_array({"n": [1, huge]}, "n", Limits())

    def test_optional_values(self):
        """Test optional numbers and booleans."""
        assert get_number_opt({}, "a") is None
        assert get_number_opt({"a": None}, "a") is None
        assert get_number_opt({"a": 1.5}, "a") == 1.5
        assert get_bool_opt({"flag": True}, "flag") is True
        assert get_bool_opt({"flag": 1}, "flag") is None

    @pytest.mark.parametrize("value", ["2", False, [1]])
    def test_optional_number_must_be_numeric(self, value):
        """Test a present but non-numeric optional value is invalid."""
        with pytest.raises(InvalidParamsError):
            get_number_opt({"a": value}, "a")

    def test_number_array(self):
        """Test arrays are size checked and element checked."""
        limits = Limits(ServerConfig(max_array_size=3))
        assert get_number_array({"n": [1, 2.5]}, "n", limits) == [1, 2.5]
        with pytest.raises(ResourceLimitError):
            get_number_array({"n": [1, 2, 3, 4]}, "n", limits)
        with pytest.raises(ValidationError, match=r"n\[1\]"):
            get_number_array({"n": [1, float("nan")]}, "n", limits)


class TestValidation:
    """Test numeric validators."""

    def test_validate_integer(self):
        """Test integers, fractions and unsafe magnitudes."""
        assert validate_integer(4.0, "n") == 4
        with pytest.raises(ValidationError):
            validate_integer(4.5, "n")
        with pytest.raises(ValidationError, match="out of range"):
            validate_integer(2.0 ** 60, "n")

    def test_finite_result(self):
        """Test overflowed results are rejected."""
        assert finite_result(1.0) == 1.0
        with pytest.raises(ValidationError):
            finite_result(float("inf"))


class TestLimits:
    """Test resource limits."""

    def test_defaults(self):
        """Test defaults come from the default configuration."""
        limits = Limits()
        limits.check_array_size(DEFAULT_MAX_ARRAY_SIZE)
        limits.check_decimal_places(15)
        with pytest.raises(ResourceLimitError):
            limits.check_array_size(DEFAULT_MAX_ARRAY_SIZE + 1)

    def test_checks(self):
        """Test array and decimal checks against configured limits."""
        limits = Limits(ServerConfig(max_array_size=2, max_decimal_places=3))
        limits.check_array_size(2)
        limits.check_decimal_places(3)
        with pytest.raises(ResourceLimitError):
            limits.check_array_size(3)
        with pytest.raises(ValidationError):
            limits.check_decimal_places(4)

    def test_timeout(self):
        """Test the cooperative timeout check."""
        limits = Limits()
        limits.check_timeout(time.monotonic(), 60.0)
        with pytest.raises(ResourceLimitError, match="timeout"):
            limits.check_timeout(time.monotonic() - 5.0, 1.0)


class TestRateLimiter:
    """Test the token bucket."""

    def test_bucket_exhausts(self):
        """Test tokens run out after max_tokens calls."""
        limiter = RateLimiter(3, refill_interval=3600.0)
        assert [limiter.check_rate_limit() for _ in range(4)] == [True, True, True, False]
        assert limiter.available_tokens() < 1.0

    def test_refills_over_time(self, monkeypatch):
        """Test tokens come back as time passes."""
        now = [1000.0]
        monkeypatch.setattr(time, "monotonic", lambda: now[0])
        limiter = RateLimiter(2, refill_interval=1.0)

        assert limiter.check_rate_limit()
        assert limiter.check_rate_limit()
        assert not limiter.check_rate_limit()

        now[0] += 0.5
        assert limiter.check_rate_limit()
        assert not limiter.check_rate_limit()

        now[0] += 10.0
        assert limiter.available_tokens() == 2.0

    @pytest.mark.parametrize("max_tokens,interval", [(0, 1.0), (5, 0.0)])
    def test_invalid_arguments(self, max_tokens, interval):
        """Test non-positive settings are refused."""
        with pytest.raises(ValueError):
            RateLimiter(max_tokens, refill_interval=interval)
