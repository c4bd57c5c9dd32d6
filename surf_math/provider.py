"""Question providers and the core-side guards around them.

A provider is anything that can asynchronously produce a :class:`Question`
and an explanation for a system. Providers are allowed to fail or to return
unusable data; :func:`fetch_question` and :func:`fetch_explanation` are the
only entry points the session uses and they always return something
playable.
"""
from __future__ import annotations

import json
import logging
from collections import deque
from typing import Any, Sequence

from . import constants as C
from .agents import ExplanationAgent, QuestionAgent
from .equations import EquationSystem, exact_solution, format_equation, is_acceptable
from .generator import SurfProblemGenerator, worked_solution
from .llm import Agent
from .llm.run import Runner as AgentsRunner
from .question import InvalidQuestionError, Question, fallback_question, parse_question
from .utils import get_final_output, safe_json

__all__ = [
    "AgentsRunner",
    "ProviderUnavailableError",
    "ExplanationUnavailableError",
    "InvalidQuestionError",
    "QuestionProvider",
    "AgentQuestionProvider",
    "StaticQuestionProvider",
    "GeneratedQuestionProvider",
    "invoke_agent",
    "fetch_question",
    "fetch_explanation",
]

logger = logging.getLogger(__name__)

_JSON_MAX_RETRIES = 2


class ProviderUnavailableError(RuntimeError):
    """The question source could not be reached or gave up."""


class ExplanationUnavailableError(RuntimeError):
    """No explanation could be produced for a system."""


class QuestionProvider:
    """Interface for question sources."""

    name: str = "provider"

    async def request_question(self) -> Question:
        raise NotImplementedError

    async def request_explanation(
        self, system: EquationSystem, *, labels: tuple[str, str] | None = None
    ) -> str:
        raise NotImplementedError


async def invoke_agent(
    agent: Any,
    payload: str,
    *,
    expect_json: bool = True,
    max_retries: int = _JSON_MAX_RETRIES,
) -> Any:
    """Run an agent and return its text, or its decoded JSON object.

    Raises ``ProviderUnavailableError`` when the runner itself fails and
    ``InvalidQuestionError`` when no attempt produced a JSON object.
    """
    agent_name = getattr(agent, "name", getattr(agent, "__name__", str(agent)))
    attempts = 0
    while True:
        try:
            res = await AgentsRunner.run(agent, payload)
        except Exception as exc:
            raise ProviderUnavailableError(f"{agent_name} failed: {exc}") from exc

        out = get_final_output(res)
        if not expect_json:
            return out

        try:
            return safe_json(out)
        except ValueError as exc:
            attempts += 1
            logger.info("%s returned unparseable output (attempt %d): %s", agent_name, attempts, exc)
            if attempts >= max_retries:
                raise InvalidQuestionError(f"{agent_name} failed: {exc}") from exc


class AgentQuestionProvider(QuestionProvider):
    """Live provider backed by the OpenAI Responses API."""

    name = "openai"

    def __init__(
        self,
        *,
        model: str | None = None,
        question_agent: Agent = QuestionAgent,
        explanation_agent: Agent = ExplanationAgent,
        recent_limit: int = C.RECENT_PROBLEMS,
    ) -> None:
        if model:
            question_agent = question_agent.clone(model=model)
            explanation_agent = explanation_agent.clone(model=model)
        self.question_agent = question_agent
        self.explanation_agent = explanation_agent
        self._recent: deque[str] = deque(maxlen=recent_limit)

    def _question_payload(self) -> str:
        return json.dumps({"recent_problems": list(self._recent)}, ensure_ascii=False)

    async def request_question(self) -> Question:
        data = await invoke_agent(self.question_agent, self._question_payload())
        question = parse_question(data)
        self._recent.append(question.problem_text[:160])
        return question

    async def request_explanation(
        self, system: EquationSystem, *, labels: tuple[str, str] | None = None
    ) -> str:
        x, y = exact_solution(system)
        x_label, y_label = labels or ("x", "y")
        payload = json.dumps(
            {
                "equation1": format_equation(system.equation1),
                "equation2": format_equation(system.equation2),
                "variable_x": x_label,
                "variable_y": y_label,
                "solution": {"x": str(x), "y": str(y)},
            },
            ensure_ascii=False,
        )
        try:
            text = await invoke_agent(self.explanation_agent, payload, expect_json=False)
        except ProviderUnavailableError as exc:
            raise ExplanationUnavailableError(str(exc)) from exc
        if not isinstance(text, str) or not text.strip():
            raise ExplanationUnavailableError(f"{self.explanation_agent.name} returned no text")
        return text.strip()


class StaticQuestionProvider(QuestionProvider):
    """Serve a fixed list of questions in order, cycling when exhausted."""

    name = "static"

    def __init__(self, questions: Sequence[Question] | None = None) -> None:
        self.questions = list(questions) if questions else [fallback_question()]
        self._next = 0

    async def request_question(self) -> Question:
        question = self.questions[self._next % len(self.questions)]
        self._next += 1
        return question

    async def request_explanation(
        self, system: EquationSystem, *, labels: tuple[str, str] | None = None
    ) -> str:
        return worked_solution(system, *(labels or ("x", "y")))


class GeneratedQuestionProvider(QuestionProvider):
    """Offline provider: seeded random problems with local worked solutions."""

    name = "offline"

    def __init__(self, seed: int | None = None) -> None:
        self.generator = SurfProblemGenerator(seed=seed)

    async def request_question(self) -> Question:
        try:
            return self.generator.generate()
        except RuntimeError as exc:
            raise ProviderUnavailableError(str(exc)) from exc

    async def request_explanation(
        self, system: EquationSystem, *, labels: tuple[str, str] | None = None
    ) -> str:
        return worked_solution(system, *(labels or ("x", "y")))


# ---------------------------------------------------------------------------
# Core-side guards
# ---------------------------------------------------------------------------


async def fetch_question(
    provider: QuestionProvider,
    *,
    retries: int = C.QUESTION_RETRIES,
    require_integer_solution: bool = True,
    use_fallback: bool = True,
) -> Question:
    """Request a question and pass it through the acceptance gate.

    Failed or rejected questions are re-requested up to ``retries`` more
    times; after that the static fallback question is returned, or
    ``ProviderUnavailableError`` is raised when ``use_fallback`` is false.
    """
    last_reason = "no attempt made"
    for attempt in range(retries + 1):
        try:
            question = await provider.request_question()
        except (ProviderUnavailableError, InvalidQuestionError) as exc:
            last_reason = str(exc)
            logger.warning(
                "question request %d/%d failed: %s", attempt + 1, retries + 1, exc
            )
            continue
        except Exception as exc:
            last_reason = f"{type(exc).__name__}: {exc}"
            logger.exception(
                "question request %d/%d raised unexpectedly", attempt + 1, retries + 1
            )
            continue
        if is_acceptable(question.equation_system, require_integer_solution=require_integer_solution):
            return question
        last_reason = f"rejected system {question.equation_system.to_dict()}"
        logger.warning(
            "question request %d/%d rejected: %s", attempt + 1, retries + 1, last_reason
        )

    if not use_fallback:
        raise ProviderUnavailableError(f"no usable question from {provider.name}: {last_reason}")

    fallback = fallback_question()
    if not is_acceptable(fallback.equation_system, require_integer_solution=require_integer_solution):
        raise ProviderUnavailableError("fallback question does not pass validation")
    logger.warning("using fallback question after %d attempt(s)", retries + 1)
    return fallback


async def fetch_explanation(
    provider: QuestionProvider,
    system: EquationSystem,
    *,
    labels: tuple[str, str] | None = None,
) -> str:
    """Return an explanation for ``system``; falls back to generic text on provider failures."""
    try:
        return await provider.request_explanation(system, labels=labels)
    except (ExplanationUnavailableError, ProviderUnavailableError) as exc:
        logger.warning("explanation unavailable from %s: %s", provider.name, exc)
        return C.FALLBACK_EXPLANATION
