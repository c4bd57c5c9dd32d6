"""Package‑wide constants and fallback content."""

from typing import Any

TOTAL_QUESTIONS = 15
POINTS_PER_CORRECT = 10
ANSWER_TOLERANCE = 0.001
QUESTION_RETRIES = 1
DEFAULT_MODEL = "gpt-4o-mini"

# Coefficient bounds requested from the question agent and used offline.
COEFF_MIN, COEFF_MAX = -5, 5
CONSTANT_MIN, CONSTANT_MAX = -50, 50

# Number of recent problems the live provider asks the agent not to repeat.
RECENT_PROBLEMS = 6

# x + y = 12, 2x - y = 3 → (5, 7)
FALLBACK_QUESTION_DATA: dict[str, Any] = {
    "problem_text": (
        "For the perfect wave, the wind speed (x) and the tide height (y) add up to 12. "
        "To match the ideal board, twice the wind speed minus the tide height must be 3. "
        "What is the perfect combination of wind and tide?"
    ),
    "equation1": {"a": 1, "b": 1, "c": 12},
    "equation2": {"a": 2, "b": -1, "c": 3},
    "variable_x": "Wind Speed (knots)",
    "variable_y": "Tide Height (m)",
}

FALLBACK_EXPLANATION = (
    "Sorry, the step-by-step explanation could not be generated right now. "
    "The correct answer is the point where the two lines of the system cross."
)

__all__ = [
    "TOTAL_QUESTIONS",
    "POINTS_PER_CORRECT",
    "ANSWER_TOLERANCE",
    "QUESTION_RETRIES",
    "DEFAULT_MODEL",
    "COEFF_MIN",
    "COEFF_MAX",
    "CONSTANT_MIN",
    "CONSTANT_MAX",
    "RECENT_PROBLEMS",
    "FALLBACK_QUESTION_DATA",
    "FALLBACK_EXPLANATION",
]
