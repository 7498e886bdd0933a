"""Function plotting for the AI tutor.

Two pieces live here:

* ``PlotIntentDetector`` finds "please plot this" requests in free text and
  pulls out the expression. The default implementation is keyword + regex
  based; anything with the same ``detect`` signature can replace it.
* ``sample_function`` evaluates an expression of ``x`` over a fixed domain
  and returns the points the frontend draws.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import sympy as sp
from sympy.parsing.sympy_parser import (
    parse_expr,
    standard_transformations,
    implicit_multiplication_application,
    convert_xor,
)

logger = logging.getLogger("onbuch.plotting")


# ==============================================================================
# Intent detection
# ==============================================================================

PLOT_KEYWORDS: Sequence[str] = ("trace", "trace-moi", "dessine", "dessine-moi", "graphique de")

# Optional "f(x) =" prefix, then a run of >= 2 chars from the arithmetic alphabet.
# Greedy and unanchored: digits in surrounding prose can end up in the capture.
PLOT_EXPRESSION_RE = re.compile(r"(?:f\(x\)\s*=\s*)?([x\d\s\.\+\-\*\/\^\(\)]{2,})")


class PlotIntentDetector:
    """Extracts an expression to plot from a user message, or returns None."""

    def detect(self, text: str) -> Optional[str]:
        raise NotImplementedError


class RegexPlotIntentDetector(PlotIntentDetector):
    def __init__(self, keywords: Sequence[str] = PLOT_KEYWORDS, pattern: re.Pattern = PLOT_EXPRESSION_RE):
        self.keywords = tuple(keywords)
        self.pattern = pattern

    def detect(self, text: str) -> Optional[str]:
        lower_text = (text or "").lower()
        if not any(keyword in lower_text for keyword in self.keywords):
            return None
        match = self.pattern.search(lower_text)
        if match and match.group(1):
            expression = match.group(1).strip()
            return expression or None
        return None


# ==============================================================================
# Sampling
# ==============================================================================

@dataclass(frozen=True)
class SamplingDomain:
    minimum: float = -10.0
    maximum: float = 10.0
    steps: int = 100

    def __post_init__(self):
        if self.steps <= 0:
            raise ValueError("steps must be > 0")

    def abscissas(self) -> List[float]:
        step_size = (self.maximum - self.minimum) / self.steps
        return [self.minimum + i * step_size for i in range(self.steps + 1)]


DEFAULT_DOMAIN = SamplingDomain()

X = sp.Symbol("x")

_TRANSFORMATIONS = standard_transformations + (implicit_multiplication_application, convert_xor)

# Arithmetic plus function names; no quotes, brackets, underscores or commas.
_SAFE_EXPRESSION_RE = re.compile(r"^[0-9A-Za-z\s\.\+\-\*\/\^\(\)]+$")
_ATTRIBUTE_ACCESS_RE = re.compile(r"\.\s*[A-Za-z]")


def parse_expression(expression: str) -> Optional[sp.Expr]:
    """Parse ``expression`` into an unevaluated sympy expression of ``x``; None if it can't be parsed."""
    text = (expression or "").strip()
    if not text or not _SAFE_EXPRESSION_RE.match(text) or _ATTRIBUTE_ACCESS_RE.search(text):
        return None
    try:
        expr = parse_expr(
            text,
            local_dict={"x": X, "e": sp.E, "pi": sp.pi},
            transformations=_TRANSFORMATIONS,
            evaluate=False,
        )
    except Exception as e:  # sympy raises SyntaxError, TokenError, TypeError...
        logger.debug("Could not parse %r: %s", text, e)
        return None
    if not isinstance(expr, sp.Expr):
        return None
    return expr


def compile_expression(expr: sp.Expr) -> Callable[[float], object]:
    """Turn ``expr`` into a plain float function of x.

    Integer literals become floats before compiling, so a tower like 9^9^9
    overflows in float arithmetic instead of being computed as an exact integer.
    """
    with sp.evaluate(False):
        floated = expr.xreplace({n: sp.Float(n) for n in expr.atoms(sp.Integer)})
        return sp.lambdify(X, floated, modules="math")


def _evaluate(func: Callable[[float], object], x: float) -> Optional[float]:
    y = func(x)
    # complex: negative base to a fractional power
    if isinstance(y, bool) or not isinstance(y, (int, float)):
        return None
    y = float(y)
    return y if math.isfinite(y) else None


def sample_function(expression: str, domain: SamplingDomain = DEFAULT_DOMAIN) -> Optional[Dict]:
    """Evaluate ``expression`` over ``domain``.

    Returns ``{"function": "f(x) = <expression>", "points": [{"x", "y"}, ...]}``
    with both coordinates rounded to 3 decimals, or None when no point
    survives. A point that fails to evaluate, or evaluates to a non-finite
    or non-real value, is skipped without aborting the rest.
    """
    expr = parse_expression(expression)
    if expr is None:
        return None
    try:
        func = compile_expression(expr)
    except Exception as e:
        logger.debug("Could not compile %r: %s", expression, e)
        return None

    points = []
    for x in domain.abscissas():
        try:
            y = _evaluate(func, x)
        except Exception as e:  # ZeroDivisionError, OverflowError, ValueError (math domain), NameError...
            logger.debug("Could not evaluate %s at x=%s: %s", expression, x, e)
            continue
        if y is None:
            continue
        points.append({"x": round(x, 3), "y": round(y, 3)})

    if not points:
        return None

    return {"function": f"f(x) = {expression}", "points": points}
