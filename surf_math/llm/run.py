"""Runner interface for executing agents against the OpenAI Responses API."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, ClassVar, cast

from ..constants import DEFAULT_MODEL


class Runner:
    """Minimal async runner that executes an :class:`Agent` via the Responses API.

    An agent is just ``instructions`` plus an optional ``model``; the runner
    sends the instructions as the system message and ``input`` as the user
    message and returns an object whose ``final_output`` holds the model's
    text. Tests monkeypatch :meth:`run`, so nothing from ``openai`` is
    imported until a real call is made.
    """

    DEFAULT_MODEL: ClassVar[str] = DEFAULT_MODEL

    _client: ClassVar[Any | None] = None

    @classmethod
    def _get_client(cls) -> Any:
        if cls._client is None:
            try:  # Import lazily so the dependency is only needed for live calls.
                import openai  # type: ignore
            except Exception as exc:  # pragma: no cover - defensive
                raise RuntimeError("openai package is required to run agents") from exc

            if not hasattr(openai, "AsyncOpenAI"):
                raise RuntimeError(
                    "openai.AsyncOpenAI client with Responses API support is required"
                )
            client: Any = openai.AsyncOpenAI()
            if not hasattr(client, "responses"):
                raise RuntimeError(
                    "openai client does not support Responses API; upgrade your package"
                )
            cls._client = client
        return cls._client

    @staticmethod
    async def run(agent: Any, input: Any) -> Any:  # pragma: no cover - exercised via mocks
        """Execute ``agent`` with ``input`` and return a namespace containing
        the model's response in ``final_output``.

        Parameters
        ----------
        agent:
            Object with ``instructions`` and optional ``model`` and
            ``json_output`` attributes.
        input:
            Data passed to the agent. It is converted to ``str`` and used as the
            user prompt.
        """

        client = Runner._get_client()

        model = getattr(agent, "model", None) or Runner.DEFAULT_MODEL
        messages: list[dict[str, Any]] = [
            {"role": "system", "content": getattr(agent, "instructions", "")},
            {"role": "user", "content": str(input)},
        ]

        kwargs: dict[str, Any] = {
            "model": model,
            "input": cast(Any, messages),
        }
        if getattr(agent, "json_output", False):
            kwargs["text"] = {"format": {"type": "json_object"}}

        resp: Any = await client.responses.create(**kwargs)

        return SimpleNamespace(final_output=Runner._extract_output_text(resp))

    @staticmethod
    def _extract_output_text(resp: Any) -> str:
        """Best-effort extraction of textual output from a Responses object.

        Handles multiple SDK shapes:
        - ``resp.output_text`` when available
        - ``resp.output`` as a list of messages with nested content/text/value
        - Falls back to an empty string if no text could be found
        """

        def _is_nonempty_str(val: Any) -> bool:
            return isinstance(val, str) and val.strip() != ""

        consolidated = getattr(resp, "output_text", None)
        if _is_nonempty_str(consolidated):
            return consolidated

        output = getattr(resp, "output", None)
        texts: list[str] = []

        def _collect(obj: Any, depth: int = 0) -> None:
            # Guard against overly deep or cyclic structures
            if depth > 5 or obj is None:
                return
            if isinstance(obj, str):
                if obj.strip():
                    texts.append(obj)
                return
            if isinstance(obj, (list, tuple)):
                for it in obj:
                    _collect(it, depth + 1)
                return
            if isinstance(obj, dict):
                for key in ("text", "value", "content"):
                    if key in obj:
                        _collect(obj[key], depth + 1)
                return
            for attr in ("text", "value", "content"):
                val = getattr(obj, attr, None)
                if val is not None:
                    _collect(val, depth + 1)

        if output is not None:
            _collect(output)

        joined = "\n".join(t for t in texts if t.strip())
        return joined if joined.strip() else ""
