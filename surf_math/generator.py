"""Offline question generation and worked solutions.

Used when no text-generation service is available: problems are built from a
seeded RNG so a session can be replayed exactly, and explanations are derived
by elimination on exact rationals.
"""
from __future__ import annotations

import random
from dataclasses import dataclass

import sympy as sp

from . import constants as C
from .equations import Equation, EquationSystem, exact_solution, format_equation, is_acceptable
from .question import Question

__all__ = ["SurfProblemGenerator", "worked_solution"]


@dataclass(frozen=True)
class _Story:
    x_label: str
    y_label: str
    template: str


# Each template receives the two equations already rendered with the labels.
_STORIES = [
    _Story(
        "Wind Speed (knots)",
        "Tide Height (m)",
        "A surf forecaster links the wind speed x and the tide height y of tomorrow's swell: "
        "{eq1} and {eq2}. Which wind speed and tide height make the perfect wave?",
    ),
    _Story(
        "Shortboards",
        "Longboards",
        "A surf shop counts its shortboards x and longboards y. The stock satisfies {eq1}, "
        "and the weekly order sheet says {eq2}. How many of each board does the shop have?",
    ),
    _Story(
        "Morning Lessons",
        "Afternoon Lessons",
        "A surf school plans x morning lessons and y afternoon lessons. The instructors' schedule "
        "gives {eq1}, while the board rental log gives {eq2}. How many lessons of each kind are planned?",
    ),
    _Story(
        "Wave Period (s)",
        "Set Size",
        "Watching the lineup, a lifeguard relates the wave period x to the number of waves per set y: "
        "{eq1} and {eq2}. What are the wave period and the set size?",
    ),
]


class SurfProblemGenerator:
    """Generate surf-themed 2×2 systems with non-zero coefficients and integer solutions."""

    def __init__(self, seed: int | None = None, *, max_attempts: int = 200) -> None:
        self._rng = random.Random(seed)
        self.max_attempts = max_attempts

    def _coeff(self) -> int:
        return self._rng.choice([v for v in range(C.COEFF_MIN, C.COEFF_MAX + 1) if v != 0])

    def _system(self) -> EquationSystem:
        for _ in range(self.max_attempts):
            # Pick the solution first so it is always an integer pair
            x = self._rng.randint(-10, 10)
            y = self._rng.randint(-10, 10)
            a1, b1, a2, b2 = (self._coeff() for _ in range(4))
            c1 = a1 * x + b1 * y
            c2 = a2 * x + b2 * y
            if not (C.CONSTANT_MIN <= c1 <= C.CONSTANT_MAX and C.CONSTANT_MIN <= c2 <= C.CONSTANT_MAX):
                continue
            system = EquationSystem(Equation(a1, b1, c1), Equation(a2, b2, c2))
            if is_acceptable(system, require_integer_solution=True):
                return system
        raise RuntimeError(f"could not generate a valid system in {self.max_attempts} attempts")

    def generate(self) -> Question:
        system = self._system()
        story = self._rng.choice(_STORIES)
        text = story.template.format(
            eq1=format_equation(system.equation1),
            eq2=format_equation(system.equation2),
        )
        return Question(
            problem_text=text,
            equation_system=system,
            variable_x_label=story.x_label,
            variable_y_label=story.y_label,
        )


def _scaled(eq: Equation, k: sp.Rational) -> str:
    scaled = Equation(*(sp.Rational(str(v)) * k for v in (eq.a, eq.b, eq.c)))
    return format_equation(scaled)


def worked_solution(system: EquationSystem, x_label: str = "x", y_label: str = "y") -> str:
    """Step-by-step solution by elimination of ``y``."""
    e1, e2 = system.equation1, system.equation2
    x, y = exact_solution(system)
    b1, b2 = sp.Rational(str(e1.b)), sp.Rational(str(e2.b))
    a1, a2 = sp.Rational(str(e1.a)), sp.Rational(str(e2.a))
    c1, c2 = sp.Rational(str(e1.c)), sp.Rational(str(e2.c))
    lhs_x = a1 * b2 - a2 * b1
    rhs_x = c1 * b2 - c2 * b1
    lines = [
        "1. The system is:",
        f"   {format_equation(e1)}",
        f"   {format_equation(e2)}",
        "2. Use elimination: make the y terms cancel.",
        f"   Multiply the first equation by {b2}: {_scaled(e1, b2)}",
        f"   Multiply the second equation by {b1}: {_scaled(e2, b1)}",
        f"3. Subtract the second from the first: "
        f"{format_equation(Equation(lhs_x, 0, rhs_x))}, so x = {x}.",
        f"4. Substitute x = {x} into the first equation: "
        f"{format_equation(Equation(0, b1, c1 - a1 * x))}, so y = {y}.",
        f"5. Solution: (x, y) = ({x}, {y}), i.e. {x_label} = {x} and {y_label} = {y}.",
    ]
    return "\n".join(lines)
