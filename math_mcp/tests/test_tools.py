"""
Tool family tests, run through the registry the way tools/call does.
"""
import math

import pytest

from ..config import ServerConfig
from ..core.errors import InvalidParamsError, ResourceLimitError, ValidationError
from ..tools.registry import build_default_registry


@pytest.fixture(scope="module")
def registry():
    return build_default_registry(ServerConfig())


def run(registry, tool, **arguments):
    return registry.execute_tool(tool, arguments)


def scalar(registry, tool, **arguments):
    return run(registry, tool, **arguments)["result"]


class TestBasicMath:
    """Test arithmetic tools."""

    @pytest.mark.parametrize("tool,arguments,expected", [
        ("add", {"numbers": [1, 2, 3]}, 6),
        ("add", {"numbers": []}, 0),
        ("subtract", {"a": 10, "b": 4}, 6),
        ("multiply", {"numbers": [2, 3, 4]}, 24),
        ("divide", {"a": 10, "b": 4}, 2.5),
        ("power", {"base": 2, "exponent": 10}, 1024),
        ("power", {"base": -2, "exponent": 3}, -8),
        ("sqrt", {"number": 16}, 4),
        ("abs", {"number": -5}, 5),
        ("round", {"number": 2.5}, 3),
        ("round", {"number": -2.5}, -3),
        ("round", {"number": 3.14159, "decimals": 2}, 3.14),
        ("floor", {"number": -1.5}, -2),
        ("ceil", {"number": 1.2}, 2),
        ("modulo", {"a": 7, "b": 3}, 1),
        ("modulo", {"a": -7, "b": 3}, -1),
    ])
    def test_results(self, registry, tool, arguments, expected):
        """Test representative inputs."""
        assert registry.execute_tool(tool, arguments)["result"] == pytest.approx(expected)

    @pytest.mark.parametrize("tool,arguments,message", [
        ("divide", {"a": 1, "b": 0}, "Division by zero"),
        ("modulo", {"a": 1, "b": 0}, "Modulo by zero"),
        ("sqrt", {"number": -1}, "negative"),
        ("power", {"base": 0, "exponent": -1}, "negative power"),
        ("power", {"base": -8, "exponent": 0.5}, "fractional exponent"),
        ("power", {"base": 10, "exponent": 400}, "not a finite number"),
        ("round", {"number": 1.5, "decimals": 16}, "exceeds maximum"),
        ("round", {"number": 1.5, "decimals": -1}, "non-negative"),
        ("round", {"number": 1.5, "decimals": 1.5}, "integer"),
        ("multiply", {"numbers": [1e200, 1e200]}, "not a finite number"),
        ("add", {"numbers": [1e308, 1e308]}, "not a finite number"),
        ("add", {"numbers": [int("9" * 400), 1]}, "out of range"),
        ("sqrt", {"number": int("9" * 400)}, "out of range"),
    ])
    def test_validation_errors(self, registry, tool, arguments, message):
        """Test domain errors are validation errors."""
        with pytest.raises(ValidationError, match=message):
            registry.execute_tool(tool, arguments)

    @pytest.mark.parametrize("arguments", [
        {},
        {"numbers": "1,2"},
        {"numbers": [1, "2"]},
        {"numbers": [1, True]},
    ])
    def test_bad_arrays(self, registry, arguments):
        """Test arrays must be present and numeric."""
        with pytest.raises(InvalidParamsError):
            registry.execute_tool("add", arguments)

    def test_booleans_are_not_numbers(self, registry):
        """Test true is not accepted as 1."""
        with pytest.raises(InvalidParamsError):
            registry.execute_tool("abs", {"number": True})

    def test_non_numeric_decimals(self, registry):
        """Test a string decimals value is rejected rather than defaulted."""
        with pytest.raises(InvalidParamsError, match="decimals"):
            registry.execute_tool("round", {"number": 1.25, "decimals": "2"})

    def test_non_finite_argument(self, registry):
        """Test NaN arguments are rejected."""
        with pytest.raises(ValidationError, match="finite"):
            registry.execute_tool("abs", {"number": float("nan")})

    def test_array_size_checked_first(self):
        """Test oversized arrays fail on size before element checks."""
        registry = build_default_registry(ServerConfig(max_array_size=2))
        with pytest.raises(ResourceLimitError):
            registry.execute_tool("add", {"numbers": ["a", "b", "c"]})


class TestAlgebra:
    """Test integer tools."""

    def test_gcd_lcm(self, registry):
        """Test gcd and lcm."""
        assert scalar(registry, "gcd", a=48, b=18) == 6
        assert scalar(registry, "lcm", a=4, b=6) == 12
        assert scalar(registry, "lcm", a=0, b=5) == 0

    def test_factorial(self, registry):
        """Test factorial bounds."""
        assert scalar(registry, "factorial", n=5) == 120
        assert scalar(registry, "factorial", n=0) == 1
        assert scalar(registry, "factorial", n=170) == pytest.approx(7.257415615307994e306)

    @pytest.mark.parametrize("tool,arguments", [
        ("factorial", {"n": 171}),
        ("factorial", {"n": -1}),
        ("factorial", {"n": 2.5}),
        ("gcd", {"a": 1.5, "b": 3}),
        ("lcm", {"a": 2 ** 40 + 1, "b": 2 ** 40 - 1}),
    ])
    def test_invalid(self, registry, tool, arguments):
        """Test out of range or fractional integers."""
        with pytest.raises(ValidationError):
            registry.execute_tool(tool, arguments)


class TestStatistics:
    """Test statistics tools."""

    def test_central_tendency(self, registry):
        """Test mean and median."""
        assert scalar(registry, "mean", numbers=[1, 2, 3, 4]) == 2.5
        assert scalar(registry, "median", numbers=[3, 1, 2]) == 2
        assert scalar(registry, "median", numbers=[4, 1, 3, 2]) == 2.5

    def test_large_values(self, registry):
        """Test values near the float limit do not overflow in averages."""
        assert scalar(registry, "median", numbers=[1e308, 1.7e308]) == pytest.approx(1.35e308)
        with pytest.raises(ValidationError, match="not a finite number"):
            registry.execute_tool("mean", {"numbers": [1.7e308, 1.7e308]})
        with pytest.raises(ValidationError, match="not a finite number"):
            registry.execute_tool("sum", {"numbers": [1.7e308, 1.7e308]})

    def test_mode(self, registry):
        """Test mode with a clear winner and with all values unique."""
        assert run(registry, "mode", numbers=[1, 2, 2, 3]) == {"mode": [2.0], "frequency": 2}
        assert run(registry, "mode", numbers=[1, 1, 2, 2]) == {"mode": [1.0, 2.0], "frequency": 2}
        unique = run(registry, "mode", numbers=[1, 2, 3])
        assert unique["mode"] is None
        assert "unique" in unique["message"]

    def test_spread(self, registry):
        """Test population and sample variance."""
        data = [2, 4, 4, 4, 5, 5, 7, 9]
        assert scalar(registry, "variance", numbers=data) == pytest.approx(4.0)
        assert scalar(registry, "std_dev", numbers=data) == pytest.approx(2.0)
        assert scalar(registry, "variance", numbers=[1, 2, 3, 4], sample=True) == pytest.approx(5 / 3)

    def test_aggregates(self, registry):
        """Test min, max, sum and product."""
        numbers = [3, -1, 4]
        assert scalar(registry, "min", numbers=numbers) == -1
        assert scalar(registry, "max", numbers=numbers) == 4
        assert scalar(registry, "sum", numbers=numbers) == 6
        assert scalar(registry, "product", numbers=numbers) == -12

    @pytest.mark.parametrize("tool", ["mean", "median", "mode", "variance", "std_dev", "min", "max"])
    def test_empty(self, registry, tool):
        """Test empty arrays are rejected."""
        with pytest.raises(ValidationError, match="empty"):
            registry.execute_tool(tool, {"numbers": []})


class TestGeometry:
    """Test area and volume tools."""

    @pytest.mark.parametrize("tool,arguments,expected", [
        ("area_circle", {"radius": 1}, math.pi),
        ("area_rectangle", {"length": 3, "width": 4}, 12),
        ("area_triangle", {"base": 6, "height": 2}, 6),
        ("area_trapezoid", {"base1": 2, "base2": 4, "height": 3}, 9),
        ("volume_sphere", {"radius": 3}, 36 * math.pi),
        ("volume_cylinder", {"radius": 2, "height": 5}, 20 * math.pi),
        ("volume_cone", {"radius": 3, "height": 4}, 12 * math.pi),
        ("volume_rectangular_prism", {"length": 2, "width": 3, "height": 4}, 24),
    ])
    def test_results(self, registry, tool, arguments, expected):
        """Test known shapes."""
        assert registry.execute_tool(tool, arguments)["result"] == pytest.approx(expected)

    def test_negative_dimension(self, registry):
        """Test negative lengths are rejected."""
        with pytest.raises(ValidationError, match="non-negative"):
            registry.execute_tool("area_rectangle", {"length": -1, "width": 2})

    def test_overflow(self, registry):
        """Test results that overflow are rejected."""
        with pytest.raises(ValidationError, match="not a finite number"):
            registry.execute_tool("volume_sphere", {"radius": 1e200})


class TestEquations:
    """Test equation tools."""

    def test_quadratic(self, registry):
        """Test distinct, repeated and complex roots."""
        distinct = run(registry, "quadratic_formula", a=1, b=-3, c=2)
        assert distinct["roots"] == [2.0, 1.0]
        assert distinct["type"] == "distinct"

        repeated = run(registry, "quadratic_formula", a=1, b=2, c=1)
        assert repeated["roots"] == [-1.0, -1.0]

        complex_roots = run(registry, "quadratic_formula", a=1, b=0, c=1)
        assert complex_roots["roots"] is None
        assert complex_roots["discriminant"] == -4

    def test_quadratic_requires_a(self, registry):
        """Test a linear equation is rejected."""
        with pytest.raises(ValidationError):
            registry.execute_tool("quadratic_formula", {"a": 0, "b": 1, "c": 1})

    def test_points(self, registry):
        """Test distance, slope and midpoint."""
        points = {"x1": 0, "y1": 0, "x2": 3, "y2": 4}
        assert scalar(registry, "distance_formula", **points) == 5
        assert scalar(registry, "slope", **points) == pytest.approx(4 / 3)
        assert run(registry, "midpoint", **points) == {"x": 1.5, "y": 2.0}

    def test_vertical_slope(self, registry):
        """Test vertical lines have no slope."""
        with pytest.raises(ValidationError, match="vertical"):
            registry.execute_tool("slope", {"x1": 1, "y1": 0, "x2": 1, "y2": 5})

    def test_pythagorean(self, registry):
        """Test hypotenuse and leg calculations."""
        assert scalar(registry, "pythagorean_theorem", a=3, b=4) == 5
        assert scalar(registry, "pythagorean_theorem", a=3, b=0, c=5) == 4
        with pytest.raises(ValidationError, match="longest"):
            registry.execute_tool("pythagorean_theorem", {"a": 6, "b": 0, "c": 5})


class TestTrigonometry:
    """Test trigonometric tools."""

    def test_basic_functions(self, registry):
        """Test sin, cos, atan and conversions."""
        assert scalar(registry, "sin", angle=0) == 0
        assert scalar(registry, "cos", angle=0) == 1
        assert scalar(registry, "atan", value=1) == pytest.approx(math.pi / 4)
        assert scalar(registry, "degrees_to_radians", degrees=180) == pytest.approx(math.pi)
        assert scalar(registry, "radians_to_degrees", radians=math.pi) == pytest.approx(180)

    @pytest.mark.parametrize("tool", ["asin", "acos"])
    def test_inverse_domain(self, registry, tool):
        """Test inverse functions need values in [-1, 1]."""
        assert registry.execute_tool(tool, {"value": 1})["result"] == pytest.approx(
            math.pi / 2 if tool == "asin" else 0
        )
        with pytest.raises(ValidationError):
            registry.execute_tool(tool, {"value": 2})

    def test_law_of_cosines(self, registry):
        """Test solving for a side and for an angle."""
        side = run(registry, "law_of_cosines", a=3, b=4, c=0, angle_c=math.pi / 2)
        assert side["side_c"] == pytest.approx(5)
        angle = run(registry, "law_of_cosines", a=3, b=4, c=5)
        assert angle["angle_c"] == pytest.approx(math.pi / 2)
        with pytest.raises(ValidationError, match="triangle inequality"):
            registry.execute_tool("law_of_cosines", {"a": 1, "b": 1, "c": 5})

    def test_law_of_sines(self, registry):
        """Test solving for the missing side."""
        result = run(registry, "law_of_sines", side_a=1, angle_a=math.pi / 6, angle_b=math.pi / 2)
        assert result["side_b"] == pytest.approx(2)
        with pytest.raises(ValidationError, match="at least one side"):
            registry.execute_tool("law_of_sines", {"angle_a": 1, "angle_b": 1})


class TestFinance:
    """Test finance tools."""

    def test_interest(self, registry):
        """Test simple and compound interest."""
        assert scalar(registry, "simple_interest", principal=1000, rate=0.05, time=2) == pytest.approx(100)
        assert scalar(registry, "compound_interest", principal=1000, rate=0.1, time=2) == pytest.approx(1210)
        monthly = scalar(registry, "compound_interest", principal=1000, rate=0.12, time=1, compounds_per_year=12)
        assert monthly == pytest.approx(1000 * 1.01 ** 12)

    def test_percentage(self, registry):
        """Test each percentage mode."""
        assert run(registry, "percentage", part=25, whole=200) == {"percentage": 12.5}
        assert run(registry, "percentage", percent=10, whole=50) == {"part": 5.0}
        check = run(registry, "percentage", part=25, whole=200, percent=12.5)
        assert check["match"] is True
        with pytest.raises(ValidationError):
            registry.execute_tool("percentage", {"part": 1, "whole": 0})
        with pytest.raises(ValidationError):
            registry.execute_tool("percentage", {"whole": 10})


class TestCombinatorics:
    """Test permutations and combinations."""

    def test_counts(self, registry):
        """Test known counts."""
        assert scalar(registry, "permutation", n=5, r=2) == 20
        assert scalar(registry, "combination", n=5, r=2) == 10
        assert scalar(registry, "combination", n=170, r=0) == 1

    @pytest.mark.parametrize("arguments", [
        {"n": 2, "r": 3},
        {"n": 171, "r": 1},
        {"n": -1, "r": 0},
        {"n": 5.5, "r": 2},
    ])
    def test_invalid(self, registry, arguments):
        """Test invalid n and r."""
        with pytest.raises(ValidationError):
            registry.execute_tool("permutation", arguments)


class TestAdvanced:
    """Test growth and logarithms."""

    def test_exponential_growth(self, registry):
        """Test discrete and continuous growth."""
        assert scalar(registry, "exponential_growth", initial=100, rate=0.1, time=2) == pytest.approx(121)
        assert scalar(registry, "exponential_growth", initial=1, rate=1, time=1, continuous=True) == pytest.approx(math.e)
        with pytest.raises(ValidationError, match="not a finite number"):
            registry.execute_tool("exponential_growth", {"initial": 1, "rate": 1, "time": 5000, "continuous": True})

    def test_logarithm(self, registry):
        """Test common, natural and arbitrary bases."""
        assert scalar(registry, "logarithm", value=100) == pytest.approx(2)
        assert scalar(registry, "logarithm", value=math.e, natural=True) == pytest.approx(1)
        assert scalar(registry, "logarithm", value=8, base=2) == pytest.approx(3)

    @pytest.mark.parametrize("arguments", [
        {"value": 0},
        {"value": -1},
        {"value": 10, "base": 1},
        {"value": 10, "base": -2},
    ])
    def test_logarithm_invalid(self, registry, arguments):
        """Test undefined logarithms."""
        with pytest.raises(ValidationError):
            registry.execute_tool("logarithm", arguments)
