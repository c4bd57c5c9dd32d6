"""Agent definitions used by the live question provider."""
from . import constants as C
from .llm import Agent

# QuestionAgent expected schema:
# {
#   "problem_text": <str>,
#   "equation1": {"a": <int>, "b": <int>, "c": <int>},
#   "equation2": {"a": <int>, "b": <int>, "c": <int>},
#   "variable_x": <str>,   # what x stands for, e.g. "wind speed (knots)"
#   "variable_y": <str>
# }
QuestionAgent = Agent(
    name="QuestionAgent",
    instructions=(
        "You write math problems for a surf-themed learning game. Produce ONE word problem in English "
        "whose solution is a system of two first-degree equations in two unknowns, a1*x + b1*y = c1 and "
        "a2*x + b2*y = c2. The story must relate to surfing (waves, wind, tides, boards, surf schools). "
        f"Coefficients a and b must be non-zero integers between {C.COEFF_MIN} and {C.COEFF_MAX}; constants c "
        f"must be integers between {C.CONSTANT_MIN} and {C.CONSTANT_MAX}. The system MUST have exactly one "
        "solution and both x and y MUST be integers. Do not reveal the solution in the problem text. "
        "If the input lists recent problems, write a different one. "
        "Output: exactly one JSON object with double-quoted keys/values and no trailing text, with keys "
        "problem_text (string), equation1 and equation2 (objects with integer fields a, b, c), variable_x "
        "and variable_y (short names of what x and y stand for, with units)."
    ),
    model=C.DEFAULT_MODEL,
    json_output=True,
)

ExplanationAgent = Agent(
    name="ExplanationAgent",
    instructions=(
        "You are a friendly math tutor. A student learning to solve 2x2 systems of linear equations in a "
        "surf game got the answer wrong. Input: JSON {equation1, equation2, variable_x, variable_y, solution}. "
        "Explain in English, step by step, how to solve the system, using elimination (addition) or "
        "substitution, whichever is simpler for this system. Structure: 1. restate the system; 2. name the "
        "method; 3. show each calculation that finds one variable; 4. substitute it back into an original "
        "equation to find the other; 5. state the final ordered pair (x, y), which must equal the given "
        "solution. Keep it concise, encouraging and easy to follow. Plain text only."
    ),
    model=C.DEFAULT_MODEL,
)

__all__ = ["QuestionAgent", "ExplanationAgent"]
