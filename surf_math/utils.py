"""Internal helpers for agent output handling and tolerant JSON parsing."""
from __future__ import annotations

import json
import re
from typing import Any, cast

# ---------------------------------------------------------------------------
# Generic agent output handling
# ---------------------------------------------------------------------------


def get_final_output(res: Any) -> str:  # noqa: ANN401 – generic return
    """Extract the best‑guess textual payload from a runner response."""
    for attr in ("final_output", "output", "content"):
        if hasattr(res, attr):
            val = getattr(res, attr)
            if val is not None:
                return str(val)
    return str(res)


# ---------------------------------------------------------------------------
# JSON safety helpers
# ---------------------------------------------------------------------------

def _extract_json_block(text: str) -> str:
    """Return the most likely JSON object substring from *text*."""
    fenced = re.search(r"```(?:json)?\s*(\{.*\})\s*```", text, re.DOTALL)
    if fenced:
        return fenced.group(1)
    bracketed = re.search(r"\{[\s\S]*\}", text)
    if bracketed:
        return bracketed.group(0)
    return text


def _repair_json(text: str) -> str:
    """Attempt light‑weight JSON repairs and return the adjusted string."""
    repaired = text
    # Single quotes acting as string delimiters; apostrophes inside strings stay.
    repaired = re.sub(
        r"(?<![\\w])'([^'\\]*(?:\\.[^'\\]*)*)'",
        r'"\1"',
        repaired,
    )
    repaired = re.sub(r"//.*?(?=\n|$)", "", repaired)
    repaired = re.sub(r"/\*.*?\*/", "", repaired, flags=re.DOTALL)
    open_braces = repaired.count("{")
    close_braces = repaired.count("}")
    if open_braces > close_braces:
        repaired += "}" * (open_braces - close_braces)
    repaired = re.sub(r",\s*(?=[}\]])", "", repaired)
    return repaired


def safe_json(text: str) -> dict[str, Any]:
    """Best‑effort JSON object loader with tolerant parsing and repair attempts."""
    text = text.strip()
    if not text:
        raise ValueError("Agent output was empty")

    original_snippet = text.replace("\n", " ")[:300]
    text = _extract_json_block(text)

    for candidate in (text, _repair_json(text)):
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return cast(dict[str, Any], data)
        raise ValueError(f"Agent output was JSON but not an object: {original_snippet}")

    raise ValueError(
        "Agent output was not valid JSON even after repair. "
        f"Original snippet: {original_snippet}..."
    )
