from __future__ import annotations

from typing import Any, Optional

# Ensure the runner is importable via attribute access for test patches
# e.g., patch("surf_math.llm.run.Runner.run").
from . import run  # noqa: F401


class Agent:
    def __init__(
        self,
        name: str,
        instructions: str,
        model: Optional[str] = None,
        *,
        json_output: bool = False,
    ) -> None:
        self.name: str = name
        self.instructions: str = instructions
        self.model: Optional[str] = model
        self.json_output: bool = json_output

    def clone(self, **overrides: Any) -> "Agent":
        """Return a copy with selected attributes replaced (e.g. ``model``)."""
        fields = {
            "name": self.name,
            "instructions": self.instructions,
            "model": self.model,
            "json_output": self.json_output,
        }
        fields.update(overrides)
        return Agent(**fields)

    def __repr__(self) -> str:
        return f"Agent(name={self.name!r}, model={self.model!r})"
