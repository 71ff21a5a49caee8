from __future__ import annotations

import json

import pytest
from pydantic import BaseModel

from gcloud_mcp.execution import (
    CommandResult,
    NoStructuredOutputError,
    StructuredOutputError,
    format_error,
)


class _Payload(BaseModel):
    a: int


def test_is_empty() -> None:
    assert CommandResult().is_empty()
    assert not CommandResult(stdout="text").is_empty()
    assert not CommandResult(json_text="{}").is_empty()
    assert CommandResult(stderr="warning only").is_empty()


def test_parse_json_into_typed_targets() -> None:
    result = CommandResult(stdout='{"a":1}', json_text='{"a":1}')

    assert result.parse_json(dict[str, int]) == {"a": 1}
    assert result.parse_json(_Payload) == _Payload(a=1)
    assert result.parse_json() == {"a": 1}


def test_parse_json_without_payload() -> None:
    with pytest.raises(NoStructuredOutputError, match="no JSON output available"):
        CommandResult(stdout="plain text").parse_json()


@pytest.mark.parametrize("payload", ["{not json", "Listed 0 items."])
def test_parse_json_malformed(payload: str) -> None:
    with pytest.raises(StructuredOutputError):
        CommandResult(json_text=payload).parse_json()


def test_parse_json_shape_mismatch() -> None:
    with pytest.raises(StructuredOutputError):
        CommandResult(json_text='{"a": "x"}').parse_json(_Payload)


def test_to_display_text_pretty_prints() -> None:
    text = CommandResult(json_text='{"a":1,"b":[1,2]}').to_display_text()

    assert text == '{\n  "a": 1,\n  "b": [\n    1,\n    2\n  ]\n}'


def test_to_display_text_keeps_unicode() -> None:
    text = CommandResult(json_text='{"name":"café"}').to_display_text()

    assert "café" in text


def test_to_display_text_falls_back_for_malformed_json() -> None:
    assert CommandResult(json_text="{broken").to_display_text() == "{broken"


def test_to_display_text_keeps_number_literals() -> None:
    text = CommandResult(json_text='{"n":-0.5,"big":12345678901234567890}').to_display_text()

    assert text == '{\n  "n": -0.5,\n  "big": 12345678901234567890\n}'


@pytest.mark.parametrize(
    "payload",
    [
        '{"n":1E2}',
        '{"n":2.50}',
        '{"f":1e400}',
        '{"x":NaN}',
        '[Infinity]',
        '{"a":1,"a":2}',
        '[{"k":"v"},{"k":"v","k":"w"}]',
    ],
)
def test_to_display_text_returns_raw_when_reindent_is_lossy(payload: str) -> None:
    assert CommandResult(json_text=payload).to_display_text() == payload


def test_to_display_text_uses_stdout_without_json() -> None:
    assert CommandResult(stdout="raw output\n").to_display_text() == "raw output\n"


def test_format_error_includes_all_fields() -> None:
    text = format_error(RuntimeError("boom"), "tool x y", "denied")

    assert json.loads(text) == {"error": "boom", "command": "tool x y", "stderr": "denied"}
    assert "\n  " in text


def test_format_error_omits_empty_fields() -> None:
    payload = json.loads(format_error("boom"))

    assert payload == {"error": "boom"}
    assert json.loads(format_error("boom", "", "denied")) == {"error": "boom", "stderr": "denied"}
