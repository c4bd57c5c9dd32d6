"""Command‑line interface: play a Surf Math session in the terminal."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Callable

from .config import QuizConfig
from .provider import AgentQuestionProvider, GeneratedQuestionProvider, QuestionProvider
from .session import Phase, QuizSession, SessionState

__all__ = ["main", "play"]

Ask = Callable[[str], str]
Say = Callable[[str], None]


def _parse_cli(argv: list[str] | None = None) -> argparse.Namespace:  # noqa: D401 – imperative mood
    parser = argparse.ArgumentParser(description="Surf Math: solve 2x2 linear systems, catch the perfect wave 🏄")
    parser.add_argument(
        "--questions",
        type=int,
        default=None,
        help="Number of questions per session (default: 15 or SURF_MATH_TOTAL_QUESTIONS)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Generate problems locally instead of calling the OpenAI API",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for --offline problems")
    parser.add_argument("--model", default=None, help="OpenAI model for questions and explanations")
    parser.add_argument(
        "--log-level",
        choices=["WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging level for surf_math",
    )
    return parser.parse_args(argv)


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(level=logging.WARNING)
    level = getattr(logging, level_name)
    pkg_logger = logging.getLogger("surf_math")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
    handler.setLevel(level)
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    pkg_logger.setLevel(level)


def _show_question(state: SessionState, say: Say) -> None:
    q = state.question
    if q is None:
        return
    say("")
    say(f"🌊 Question {state.question_index}/{state.total_questions}   Score: {state.score}")
    say(q.problem_text)
    for line in q.equations_text():
        say(f"    {line}")
    say(f"x = {q.variable_x_label}, y = {q.variable_y_label}")


def _show_feedback(state: SessionState, say: Say) -> None:
    if state.is_correct:
        say("✔ Correct! You caught the wave.")
        return
    say("✘ Not quite.")
    if state.explanation:
        say(state.explanation)


async def play(session: QuizSession, *, ask: Ask = input, say: Say = print) -> int:
    """Run sessions until the player stops; return the last final score."""
    await session.start_game()
    while True:
        state = session.state
        if state.phase is Phase.START:
            say("Could not load a question.")
            if ask("Retry? [Y/n] ").strip().lower() in {"n", "no"}:
                return state.score
            await session.start_game()
        elif state.phase is Phase.PLAYING:
            _show_question(state, say)
            x_text = ask("x = ")
            y_text = ask("y = ")
            await session.submit_answer(x_text, y_text)
        elif state.phase is Phase.FEEDBACK:
            _show_feedback(state, say)
            ask("Press Enter for the next question... ")
            await session.next_question()
        elif state.phase is Phase.END:
            say("")
            say(f"🏁 Game over! Final score: {state.score}")
            if ask("Play again? [y/N] ").strip().lower() not in {"y", "yes"}:
                return state.score
            await session.start_game()
        else:  # pragma: no cover – LOADING only exists while a request is awaited
            raise RuntimeError(f"unexpected phase {state.phase}")


def main(argv: list[str] | None = None) -> None:  # noqa: D401 – imperative mood
    ns = _parse_cli(argv)
    _configure_logging(ns.log_level)

    if not ns.offline and "OPENAI_API_KEY" not in os.environ:
        sys.exit("Error: Set OPENAI_API_KEY before running, or use --offline.")

    try:
        config = QuizConfig.from_env(total_questions=ns.questions, model=ns.model)
    except ValueError as exc:
        sys.exit(f"Error: {exc}")

    provider: QuestionProvider
    if ns.offline:
        provider = GeneratedQuestionProvider(seed=ns.seed)
    else:
        provider = AgentQuestionProvider(model=config.model)

    def _pending(state: SessionState) -> None:
        if state.explanation_pending:
            print("⏳ Fetching a step-by-step explanation...")

    session = QuizSession(provider, config, listener=_pending)
    try:
        asyncio.run(play(session))
    except (EOFError, KeyboardInterrupt):
        print()


if __name__ == "__main__":  # pragma: no cover
    main()
