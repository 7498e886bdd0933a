"""Tests for plot intent detection and function sampling."""

import math
import threading

import pytest

from onbuch.services.plotting import (
    DEFAULT_DOMAIN,
    RegexPlotIntentDetector,
    SamplingDomain,
    parse_expression,
    sample_function,
)


class TestIntentDetector:
    """The keyword + regex detector."""

    @pytest.fixture
    def detector(self):
        return RegexPlotIntentDetector()

    @pytest.mark.parametrize("message, expected", [
        ("dessine x^2", "x^2"),
        ("DESSINE X^2", "x^2"),
        ("Trace f(x) = 2x + 1", "2x + 1"),
        ("trace-moi (x+1)*(x-1)", "(x+1)*(x-1)"),
        ("Montre-moi le graphique de x^3 - 2", "x^3 - 2"),
    ])
    def test_extracts_expression(self, detector, message, expected):
        assert detector.detect(message) == expected

    def test_no_keyword_means_no_plot(self, detector):
        assert detector.detect("Combien font 2 + 2 ?") is None
        assert detector.detect("x^2 + 1") is None

    def test_keyword_without_expression(self, detector):
        assert detector.detect("dessine-moi un mouton") is None

    def test_empty_message(self, detector):
        assert detector.detect("") is None

    def test_greedy_capture_picks_up_prose_digits(self, detector):
        """Current behaviour: the first run of allowed characters wins, even in prose."""
        assert detector.detect("dessine 2 courbes : x^2") == "2"


class TestSamplingDomain:
    def test_default_domain(self):
        xs = DEFAULT_DOMAIN.abscissas()
        assert len(xs) == 101
        assert xs[0] == -10
        assert xs[-1] == pytest.approx(10)

    def test_steps_must_be_positive(self):
        with pytest.raises(ValueError):
            SamplingDomain(steps=0)

    def test_custom_domain(self):
        xs = SamplingDomain(minimum=0, maximum=1, steps=4).abscissas()
        assert xs == [0, 0.25, 0.5, 0.75, 1]


class TestSampleFunction:
    def test_defined_everywhere_gives_101_points(self):
        result = sample_function("x^2")
        assert result["function"] == "f(x) = x^2"
        assert len(result["points"]) == 101
        for p in result["points"]:
            assert p["x"] == round(p["x"], 3)
            assert p["y"] == round(p["y"], 3)
            assert p["y"] == pytest.approx(p["x"] ** 2, abs=1e-3)

    def test_points_are_ordered_by_x(self):
        xs = [p["x"] for p in sample_function("2x + 1")["points"]]
        assert xs == sorted(xs)

    def test_undefined_points_are_skipped(self):
        result = sample_function("1/x")
        points = result["points"]
        assert 0 < len(points) < 101
        assert len(points) == 100
        assert all(p["x"] != 0 for p in points)

    def test_complex_values_are_skipped(self):
        result = sample_function("sqrt(x)")
        assert len(result["points"]) == 51
        assert all(p["x"] >= 0 for p in result["points"])

    def test_implicit_multiplication(self):
        points = {p["x"]: p["y"] for p in sample_function("2x+1")["points"]}
        assert points[0] == 1
        assert points[1] == 3

    @pytest.mark.parametrize("expression", ["bonjour tout le monde", "1/(x-x)", "", "(x+", "x +* 3"])
    def test_invalid_everywhere_returns_none(self, expression):
        assert sample_function(expression) is None

    def test_unsafe_input_is_not_parsed(self):
        assert parse_expression("__import__('os').getcwd()") is None
        assert parse_expression("x.func") is None

    def test_custom_domain(self):
        result = sample_function("x", SamplingDomain(minimum=0, maximum=1, steps=4))
        assert result["points"] == [
            {"x": 0, "y": 0},
            {"x": 0.25, "y": 0.25},
            {"x": 0.5, "y": 0.5},
            {"x": 0.75, "y": 0.75},
            {"x": 1, "y": 1},
        ]


class TestHugeExpressions:
    """Exponent towers must overflow as floats, not be computed as exact integers."""

    def _sample_in_thread(self, expression, timeout=10):
        result = {}
        worker = threading.Thread(target=lambda: result.update(value=sample_function(expression)), daemon=True)
        worker.start()
        worker.join(timeout)
        assert not worker.is_alive(), f"sample_function({expression!r}) still running after {timeout}s"
        return result["value"]

    @pytest.mark.parametrize("message", ["dessine 9^9^9", "dessine 10^10^10"])
    def test_power_tower_returns_promptly(self, message):
        expression = RegexPlotIntentDetector().detect(message)
        assert self._sample_in_thread(expression) is None

    def test_overflow_is_dropped_per_point(self):
        result = self._sample_in_thread("10^(x^3)")
        points = result["points"]
        assert 0 < len(points) < 101
        assert all(math.isfinite(p["y"]) for p in points)
