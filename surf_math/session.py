"""Quiz session state machine.

``SessionState`` is an immutable snapshot; the module-level transition
functions take a state plus an event and return the next state (or the same
state when the event does not apply to the current phase). ``QuizSession``
is the async driver that wires those transitions to a question provider.

Every provider call is tagged with ``state.turn``. ``turn`` increases each
time a new question is requested (including restarts), so a completion that
arrives for an older turn is ignored.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from . import constants as C
from .config import QuizConfig
from .equations import Answer, check_answer, parse_answer
from .provider import ProviderUnavailableError, QuestionProvider, fetch_explanation, fetch_question
from .question import Question

__all__ = [
    "Phase",
    "SessionState",
    "QuizSession",
    "initial_state",
    "start_game",
    "question_ready",
    "question_failed",
    "submit_answer",
    "explanation_ready",
    "next_question",
]

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    START = "start"
    LOADING = "loading"
    PLAYING = "playing"
    FEEDBACK = "feedback"
    END = "end"


@dataclass(frozen=True)
class SessionState:
    """Typed snapshot of a quiz session."""

    phase: Phase = Phase.START
    score: int = 0
    question_index: int = 1
    total_questions: int = C.TOTAL_QUESTIONS
    turn: int = 0

    # Live turn
    question: Question | None = None
    answer: Answer | None = None
    is_correct: bool | None = None
    explanation: str | None = None
    explanation_pending: bool = False

    @property
    def is_last_question(self) -> bool:
        return self.question_index >= self.total_questions


def initial_state(total_questions: int = C.TOTAL_QUESTIONS) -> SessionState:
    if total_questions < 1:
        raise ValueError("total_questions must be at least 1")
    return SessionState(total_questions=total_questions)


def _ignored(state: SessionState, event: str) -> SessionState:
    logger.debug("ignoring %s in phase %s", event, state.phase.value)
    return state


def _clear_turn(state: SessionState, **changes: object) -> SessionState:
    fields: dict[str, object] = {
        "question": None,
        "answer": None,
        "is_correct": None,
        "explanation": None,
        "explanation_pending": False,
    }
    fields.update(changes)
    return replace(state, **fields)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def start_game(state: SessionState) -> SessionState:
    """Reset score and progress and begin loading the first question.

    Valid from any phase; a restart while a request is in flight
    invalidates that request.
    """
    return _clear_turn(
        state,
        phase=Phase.LOADING,
        score=0,
        question_index=1,
        turn=state.turn + 1,
    )


def question_ready(state: SessionState, question: Question, token: int) -> SessionState:
    if state.phase is not Phase.LOADING:
        return _ignored(state, "question_ready")
    if token != state.turn:
        logger.info("dropping stale question for turn %d (current turn %d)", token, state.turn)
        return state
    return _clear_turn(state, phase=Phase.PLAYING, question=question)


def question_failed(state: SessionState, token: int) -> SessionState:
    if state.phase is not Phase.LOADING:
        return _ignored(state, "question_failed")
    if token != state.turn:
        logger.info("dropping stale failure for turn %d (current turn %d)", token, state.turn)
        return state
    return _clear_turn(state, phase=Phase.START)


def submit_answer(
    state: SessionState,
    answer: Answer,
    *,
    tolerance: float = C.ANSWER_TOLERANCE,
    points: int = C.POINTS_PER_CORRECT,
) -> SessionState:
    """Score ``answer`` against the live question and move to feedback.

    Without a live question this is a no-op.
    """
    if state.phase is not Phase.PLAYING or state.question is None:
        return _ignored(state, "submit_answer")
    correct = check_answer(state.question.equation_system, answer, tolerance)
    return replace(
        state,
        phase=Phase.FEEDBACK,
        answer=answer,
        is_correct=correct,
        score=state.score + points if correct else state.score,
        explanation=None,
        explanation_pending=not correct,
    )


def explanation_ready(state: SessionState, text: str, token: int) -> SessionState:
    if state.phase is not Phase.FEEDBACK or not state.explanation_pending:
        return _ignored(state, "explanation_ready")
    if token != state.turn:
        logger.info("dropping stale explanation for turn %d (current turn %d)", token, state.turn)
        return state
    return replace(state, explanation=text, explanation_pending=False)


def next_question(state: SessionState) -> SessionState:
    """Advance to the next question, or end the session after the last one."""
    if state.phase is not Phase.FEEDBACK:
        return _ignored(state, "next_question")
    if state.is_last_question:
        logger.info("session finished with score %d", state.score)
        # Keep the final turn visible but stop any pending explanation
        return replace(state, phase=Phase.END, explanation_pending=False)
    return _clear_turn(
        state,
        phase=Phase.LOADING,
        question_index=state.question_index + 1,
        turn=state.turn + 1,
    )


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------


class QuizSession:
    """Drive a quiz against a :class:`QuestionProvider`.

    The session is the only writer of its state. ``listener``, if given, is
    called with every new state, e.g. to show a loading indicator while an
    explanation is pending.
    """

    def __init__(
        self,
        provider: QuestionProvider,
        config: QuizConfig | None = None,
        *,
        listener: Callable[[SessionState], None] | None = None,
    ) -> None:
        self.provider = provider
        self.config = config or QuizConfig()
        self.listener = listener
        self._state = initial_state(self.config.total_questions)

    # -- read-only views ---------------------------------------------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def question_index(self) -> int:
        return self._state.question_index

    @property
    def question(self) -> Question | None:
        return self._state.question

    def _set(self, new: SessionState) -> None:
        if new is self._state:
            return
        logger.debug(
            "%s -> %s (question %d/%d, score %d, turn %d)",
            self._state.phase.value,
            new.phase.value,
            new.question_index,
            new.total_questions,
            new.score,
            new.turn,
        )
        self._state = new
        if self.listener is not None:
            self.listener(new)

    # -- events ------------------------------------------------------------
    async def start_game(self) -> SessionState:
        self._set(start_game(self._state))
        await self._load_question()
        return self._state

    async def next_question(self) -> SessionState:
        self._set(next_question(self._state))
        if self._state.phase is Phase.LOADING:
            await self._load_question()
        return self._state

    async def submit_answer(self, x_text: str | None, y_text: str | None) -> SessionState:
        """Submit the two free-text fields for the live question."""
        return await self.submit(parse_answer(x_text, y_text))

    async def submit(self, answer: Answer) -> SessionState:
        before = self._state
        self._set(
            submit_answer(
                before,
                answer,
                tolerance=self.config.tolerance,
                points=self.config.points_per_correct,
            )
        )
        state = self._state
        if state is before or not state.explanation_pending or state.question is None:
            return state

        token = state.turn
        question = state.question
        text = await fetch_explanation(
            self.provider,
            question.equation_system,
            labels=(question.variable_x_label, question.variable_y_label),
        )
        self._set(explanation_ready(self._state, text, token))
        return self._state

    async def _load_question(self) -> None:
        token = self._state.turn
        try:
            question = await fetch_question(
                self.provider,
                retries=self.config.question_retries,
                require_integer_solution=self.config.require_integer_solution,
                use_fallback=self.config.fallback_on_failure,
            )
        except ProviderUnavailableError as exc:
            logger.error("could not load question %d: %s", self._state.question_index, exc)
            self._set(question_failed(self._state, token))
            return
        self._set(question_ready(self._state, question, token))
