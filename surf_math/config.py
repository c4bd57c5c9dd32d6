"""Runtime configuration for a quiz session."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from . import constants as C

__all__ = ["QuizConfig"]


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class QuizConfig:
    total_questions: int = C.TOTAL_QUESTIONS
    points_per_correct: int = C.POINTS_PER_CORRECT
    tolerance: float = C.ANSWER_TOLERANCE
    # Extra provider requests after a failed or rejected question.
    question_retries: int = C.QUESTION_RETRIES
    require_integer_solution: bool = True
    # When False a failed question fetch sends the session back to START.
    fallback_on_failure: bool = True
    model: str = C.DEFAULT_MODEL

    def __post_init__(self) -> None:
        if self.total_questions < 1:
            raise ValueError("total_questions must be at least 1")
        if self.points_per_correct < 0:
            raise ValueError("points_per_correct must be non-negative")
        if self.tolerance <= 0:
            raise ValueError("tolerance must be positive")
        if self.question_retries < 0:
            raise ValueError("question_retries must be non-negative")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None, **overrides: object) -> "QuizConfig":
        """Build a config from ``SURF_MATH_*`` environment variables."""
        env = os.environ if env is None else env
        values: dict[str, object] = {
            "total_questions": _env_int(env, "SURF_MATH_TOTAL_QUESTIONS", C.TOTAL_QUESTIONS),
            "question_retries": _env_int(env, "SURF_MATH_QUESTION_RETRIES", C.QUESTION_RETRIES),
            "model": env.get("SURF_MATH_MODEL") or C.DEFAULT_MODEL,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]
