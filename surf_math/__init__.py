"""Public package interface for the Surf Math quiz.

Importing this package gives you easy access to the session driver and the
linear-system helpers without having to know the internal module layout.

Typical usage
-------------
>>> import asyncio
>>> from surf_math import QuizSession, GeneratedQuestionProvider
>>> session = QuizSession(GeneratedQuestionProvider(seed=1))
>>> asyncio.run(session.start_game()).phase.value
'playing'
"""
from importlib.metadata import version as _version  # type: ignore

from .config import QuizConfig
from .equations import (
    Answer,
    DegenerateSystemError,
    Equation,
    EquationSystem,
    check_answer,
    has_unique_solution,
    is_acceptable,
    is_well_formed,
    solve,
)
from .provider import (
    AgentQuestionProvider,
    ExplanationUnavailableError,
    GeneratedQuestionProvider,
    ProviderUnavailableError,
    QuestionProvider,
    StaticQuestionProvider,
)
from .question import InvalidQuestionError, Question
from .session import Phase, QuizSession, SessionState

__all__ = [
    "Answer",
    "DegenerateSystemError",
    "Equation",
    "EquationSystem",
    "check_answer",
    "has_unique_solution",
    "is_acceptable",
    "is_well_formed",
    "solve",
    "Question",
    "InvalidQuestionError",
    "QuestionProvider",
    "AgentQuestionProvider",
    "StaticQuestionProvider",
    "GeneratedQuestionProvider",
    "ProviderUnavailableError",
    "ExplanationUnavailableError",
    "Phase",
    "QuizSession",
    "SessionState",
    "QuizConfig",
    "__version__",
]

try:
    __version__ = _version("surf_math")
except Exception:  # pragma: no cover – package not installed yet
    __version__ = "0.0.0"
