from __future__ import annotations

import pytest

from surf_math.utils import get_final_output, safe_json


def test_safe_json_single_quotes() -> None:
    out = safe_json("{'a': 1}")
    assert out == {"a": 1}


def test_safe_json_trailing_comma() -> None:
    out = safe_json('{"a": 1,}')
    assert out == {"a": 1}


def test_safe_json_unbalanced_braces() -> None:
    out = safe_json('{"a": {"b": 1}')
    assert out == {"a": {"b": 1}}


def test_safe_json_with_comments() -> None:
    out = safe_json('{"a":1,// c\n"b":2}')
    assert out == {"a": 1, "b": 2}


def test_safe_json_apostrophes_inside_strings() -> None:
    out = safe_json("{'text': \"it's great\"}")
    assert out == {"text": "it's great"}


def test_safe_json_fenced_nested_object() -> None:
    text = 'Here you go:\n```json\n{"equation1": {"a": 1, "b": 1, "c": 12}}\n```\nEnjoy!'
    assert safe_json(text) == {"equation1": {"a": 1, "b": 1, "c": 12}}


def test_safe_json_error_message() -> None:
    with pytest.raises(ValueError) as exc:
        safe_json("not json")
    assert "Original snippet: not json" in str(exc.value)


def test_safe_json_empty() -> None:
    with pytest.raises(ValueError, match="empty"):
        safe_json("   ")


def test_get_final_output_prefers_final_output() -> None:
    class _Res:
        final_output = "text"
        output = "other"

    assert get_final_output(_Res()) == "text"
    assert get_final_output("plain") == "plain"
