"""Question model and parsing of provider payloads."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from . import constants as C
from .equations import Equation, EquationSystem, format_equation

__all__ = ["Question", "InvalidQuestionError", "parse_question", "fallback_question"]


class InvalidQuestionError(ValueError):
    """Provider payload is malformed or misses required fields."""


@dataclass(frozen=True)
class Question:
    problem_text: str
    equation_system: EquationSystem
    variable_x_label: str
    variable_y_label: str

    def equations_text(self) -> list[str]:
        sys_ = self.equation_system
        return [format_equation(sys_.equation1), format_equation(sys_.equation2)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "problem_text": self.problem_text,
            **self.equation_system.to_dict(),
            "variable_x": self.variable_x_label,
            "variable_y": self.variable_y_label,
        }


def parse_question(data: Any) -> Question:
    """Build a :class:`Question` from a decoded JSON payload.

    Only the shape is checked here; whether the system is usable is decided by
    :func:`surf_math.equations.is_acceptable`.
    """
    if not isinstance(data, dict):
        raise InvalidQuestionError(f"Expected a JSON object, got {type(data).__name__}")
    return Question(
        problem_text=_require_str(data, "problem_text", "problemText"),
        equation_system=EquationSystem(
            equation1=_require_equation(data, "equation1"),
            equation2=_require_equation(data, "equation2"),
        ),
        variable_x_label=_require_str(data, "variable_x", "variableX"),
        variable_y_label=_require_str(data, "variable_y", "variableY"),
    )


def fallback_question() -> Question:
    return parse_question(C.FALLBACK_QUESTION_DATA)


def _require_str(data: dict[str, Any], key: str, alias: str) -> str:
    val = data.get(key) or data.get(alias)
    if not isinstance(val, str) or not val.strip():
        raise InvalidQuestionError(f"Missing or empty field: {key}")
    return val.strip()


def _require_number(eq: dict[str, Any], key: str, where: str) -> int | float:
    val = eq.get(key)
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        # Models occasionally quote numbers
        try:
            val = float(str(val).strip())
        except ValueError as exc:
            raise InvalidQuestionError(f"{where}.{key} is not a number: {val!r}") from exc
    try:
        finite = math.isfinite(val)
    except OverflowError as exc:
        raise InvalidQuestionError(f"{where}.{key} is out of range") from exc
    if not finite:
        raise InvalidQuestionError(f"{where}.{key} is not finite")
    if isinstance(val, float) and val.is_integer():
        return int(val)
    return val


def _require_equation(data: dict[str, Any], key: str) -> Equation:
    eq = data.get(key)
    if not isinstance(eq, dict):
        raise InvalidQuestionError(f"Missing equation object: {key}")
    return Equation(
        a=_require_number(eq, "a", key),
        b=_require_number(eq, "b", key),
        c=_require_number(eq, "c", key),
    )
