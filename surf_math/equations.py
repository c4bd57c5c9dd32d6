"""Algebra of 2×2 linear systems: validation, solving and answer checking."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import sympy as sp

from .constants import ANSWER_TOLERANCE

__all__ = [
    "DegenerateSystemError",
    "Equation",
    "EquationSystem",
    "Answer",
    "determinant",
    "is_well_formed",
    "has_unique_solution",
    "solve",
    "exact_solution",
    "has_integer_solution",
    "is_acceptable",
    "check_answer",
    "parse_answer_value",
    "parse_answer",
    "format_equation",
]

Number = int | float


class DegenerateSystemError(ValueError):
    """Raised when a system without a unique solution is solved."""


@dataclass(frozen=True)
class Equation:
    """``a·x + b·y = c``."""

    a: Number
    b: Number
    c: Number

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Equation":
        return cls(a=data["a"], b=data["b"], c=data["c"])

    def to_dict(self) -> dict[str, Number]:
        return {"a": self.a, "b": self.b, "c": self.c}


@dataclass(frozen=True)
class EquationSystem:
    equation1: Equation
    equation2: Equation

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EquationSystem":
        return cls(
            equation1=Equation.from_dict(data["equation1"]),
            equation2=Equation.from_dict(data["equation2"]),
        )

    def to_dict(self) -> dict[str, dict[str, Number]]:
        return {"equation1": self.equation1.to_dict(), "equation2": self.equation2.to_dict()}


@dataclass(frozen=True)
class Answer:
    """User-submitted values; NaN stands for input that did not parse."""

    x: float
    y: float


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def determinant(system: EquationSystem) -> Number:
    e1, e2 = system.equation1, system.equation2
    return e1.a * e2.b - e2.a * e1.b


def is_well_formed(system: EquationSystem) -> bool:
    """Both variables must appear in both equations."""
    return all(
        eq.a != 0 and eq.b != 0 for eq in (system.equation1, system.equation2)
    )


def has_unique_solution(system: EquationSystem) -> bool:
    return determinant(system) != 0


# ---------------------------------------------------------------------------
# Solving
# ---------------------------------------------------------------------------


def solve(system: EquationSystem) -> tuple[float, float]:
    """Return the unique solution ``(x, y)`` via Cramer's rule.

    Raises
    ------
    DegenerateSystemError
        If the determinant is zero (parallel or coincident lines).
    """
    d = determinant(system)
    if d == 0:
        raise DegenerateSystemError(
            f"System has no unique solution (determinant is 0): {system.to_dict()}"
        )
    e1, e2 = system.equation1, system.equation2
    x = (e1.c * e2.b - e2.c * e1.b) / d
    y = (e1.a * e2.c - e2.a * e1.c) / d
    return x, y


def _rational(value: Number) -> sp.Rational:
    # str() gives the shortest decimal form, which is what the user typed
    return sp.Rational(str(value))


def exact_solution(system: EquationSystem) -> tuple[sp.Rational, sp.Rational]:
    """Exact rational solution, used for explanations and integrality checks."""
    if not has_unique_solution(system):
        raise DegenerateSystemError(
            f"System has no unique solution (determinant is 0): {system.to_dict()}"
        )
    e1, e2 = system.equation1, system.equation2
    a1, b1, c1 = (_rational(v) for v in (e1.a, e1.b, e1.c))
    a2, b2, c2 = (_rational(v) for v in (e2.a, e2.b, e2.c))
    d = a1 * b2 - a2 * b1
    return (c1 * b2 - c2 * b1) / d, (a1 * c2 - a2 * c1) / d


def has_integer_solution(system: EquationSystem) -> bool:
    if not has_unique_solution(system):
        return False
    x, y = exact_solution(system)
    return bool(x.is_integer and y.is_integer)


def is_acceptable(system: EquationSystem, *, require_integer_solution: bool = False) -> bool:
    """Single correctness gate for generated and fallback systems."""
    if not (is_well_formed(system) and has_unique_solution(system)):
        return False
    if require_integer_solution:
        return has_integer_solution(system)
    return True


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------


def check_answer(
    system: EquationSystem,
    answer: Answer,
    tolerance: float = ANSWER_TOLERANCE,
) -> bool:
    """True iff both residuals at ``(answer.x, answer.y)`` are strictly below ``tolerance``.

    NaN or infinite values never match. Residuals are computed on exact
    rationals so that a residual of exactly ``tolerance`` is always rejected.
    """
    if not (math.isfinite(answer.x) and math.isfinite(answer.y)):
        return False
    x, y = _rational(answer.x), _rational(answer.y)
    eps = _rational(tolerance)
    for eq in (system.equation1, system.equation2):
        residual = _rational(eq.a) * x + _rational(eq.b) * y - _rational(eq.c)
        if not abs(residual) < eps:
            return False
    return True


def parse_answer_value(text: str | None) -> float:
    """Parse one free-text field; anything unparseable becomes NaN."""
    if text is None:
        return math.nan
    try:
        return float(str(text).strip())
    except ValueError:
        return math.nan


def parse_answer(x_text: str | None, y_text: str | None) -> Answer:
    return Answer(x=parse_answer_value(x_text), y=parse_answer_value(y_text))


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def _fmt_num(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_equation(eq: Equation, x: str = "x", y: str = "y") -> str:
    """Render ``eq`` the way a student would write it, e.g. ``2x - y = 3``."""

    def _term(coeff: Number, var: str, first: bool) -> str:
        mag = abs(coeff)
        body = var if mag == 1 else f"{_fmt_num(mag)}{var}"
        if first:
            return f"-{body}" if coeff < 0 else body
        return f"- {body}" if coeff < 0 else f"+ {body}"

    parts = []
    if eq.a != 0:
        parts.append(_term(eq.a, x, True))
    if eq.b != 0:
        parts.append(_term(eq.b, y, not parts))
    lhs = " ".join(parts) if parts else "0"
    return f"{lhs} = {_fmt_num(eq.c)}"
