from __future__ import annotations

import asyncio
import json

import pytest

from gcloud_mcp.execution import CommandExecutionError, CommandResult
from gcloud_mcp.mcp_runtime import ToolResult
from gcloud_mcp.tools.base import (
    EMPTY_OUTPUT_TEXT,
    get_optional_bool,
    get_optional_int,
    get_optional_string,
    get_optional_string_list,
    get_optional_string_map,
    get_required_string,
    guard_arguments,
    join_pairs,
    run_command,
    tool_error,
    tool_result,
    validate_or_raise,
)


async def _returns(result: CommandResult) -> CommandResult:
    return result


async def _raises(error: Exception) -> CommandResult:
    raise error


def _execution_error() -> CommandExecutionError:
    return CommandExecutionError(
        "gcloud command failed: exit status 1\nstderr: denied",
        command="gcloud secrets list",
        result=CommandResult(stderr="denied", exit_code=1),
    )


def test_validate_or_raise_raises_on_invalid_input() -> None:
    schema = {
        "type": "object",
        "properties": {"name": {"type": "string"}},
        "required": ["name"],
    }
    with pytest.raises(ValueError, match="Input validation failed"):
        validate_or_raise(schema, {"name": 123})
    validate_or_raise(schema, {"name": "ok"})


@pytest.mark.parametrize(
    ("args", "message"),
    [
        ({}, "missing required parameter: service"),
        ({"service": 5}, "parameter service must be a string"),
        ({"service": ""}, "parameter service cannot be empty"),
    ],
)
def test_get_required_string_errors(args: dict[str, object], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        get_required_string(args, "service")


def test_get_required_string() -> None:
    assert get_required_string({"service": "api"}, "service") == "api"


def test_optional_getters() -> None:
    args: dict[str, object] = {
        "name": "x",
        "count": 5.0,
        "flag": True,
        "items": ["a", 1, "b"],
        "labels": {"env": "prod", "tier": 2},
    }

    assert get_optional_string(args, "name") == "x"
    assert get_optional_string(args, "missing", "d") == "d"
    assert get_optional_string(args, "count", "d") == "d"
    assert get_optional_int(args, "count", 1) == 5
    assert get_optional_int(args, "flag", 1) == 1
    assert get_optional_int(args, "name", 7) == 7
    assert get_optional_bool(args, "flag") is True
    assert get_optional_bool(args, "name", False) is False
    assert get_optional_string_list(args, "items") == ["a", "b"]
    assert get_optional_string_list(args, "name") == []
    assert get_optional_string_map(args, "labels") == {"env": "prod", "tier": "2"}
    assert get_optional_string_map(args, "items") == {}


def test_join_pairs() -> None:
    assert join_pairs({"a": "1", "b": "2"}) == "a=1,b=2"
    assert join_pairs({}) == ""


def test_tool_result_and_error() -> None:
    ok = tool_result("hello")
    assert ok.content == [{"type": "text", "text": "hello"}]
    assert ok.is_error is False

    err = tool_error(ValueError("bad input"))
    assert err.is_error is True
    assert err.content[0]["text"] == "bad input"


def test_tool_error_formats_execution_errors() -> None:
    result = tool_error(_execution_error())

    payload = json.loads(result.content[0]["text"])
    assert payload["command"] == "gcloud secrets list"
    assert payload["stderr"] == "denied"
    assert "exit status 1" in payload["error"]


def test_run_command_success() -> None:
    result = asyncio.run(run_command(_returns(CommandResult(json_text='{"a":1}'))))

    assert result.content[0]["text"] == '{\n  "a": 1\n}'


def test_run_command_empty_output() -> None:
    result = asyncio.run(run_command(_returns(CommandResult())))

    assert result.content[0]["text"] == EMPTY_OUTPUT_TEXT


def test_run_command_success_text() -> None:
    result = asyncio.run(run_command(_returns(CommandResult(stdout="x")), success_text="done"))

    assert result.content[0]["text"] == "done"


def test_run_command_failure() -> None:
    result = asyncio.run(run_command(_raises(_execution_error()), success_text="done"))

    assert result.is_error is True
    assert json.loads(result.content[0]["text"])["stderr"] == "denied"


def test_guard_arguments_reports_validation_and_value_errors() -> None:
    schema = {"type": "object", "properties": {"limit": {"type": "integer"}}}

    @guard_arguments(schema)
    async def handler(args: dict[str, object]) -> ToolResult:
        get_required_string(args, "service")
        return tool_result("ok")

    invalid = asyncio.run(handler({"limit": "ten"}))
    assert invalid.is_error is True
    assert "Input validation failed" in invalid.content[0]["text"]
    assert "limit" in invalid.content[0]["text"]

    missing = asyncio.run(handler({}))
    assert missing.is_error is True
    assert "missing required parameter: service" in missing.content[0]["text"]

    assert asyncio.run(handler({"service": "x"})).content[0]["text"] == "ok"
