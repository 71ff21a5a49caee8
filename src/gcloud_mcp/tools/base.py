"""Tool helpers."""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable

from gcloud_mcp.execution import CommandExecutionError, CommandResult, format_error
from gcloud_mcp.mcp_runtime import ToolResult
from gcloud_mcp.utils.jsonschema import validate_payload

logger = logging.getLogger(__name__)

EMPTY_OUTPUT_TEXT = "Command completed with no output."

ToolHandler = Callable[[dict[str, object]], Awaitable[ToolResult]]


def validate_or_raise(schema: dict[str, object], payload: dict[str, object]) -> None:
    errors = validate_payload(schema, payload)
    if errors:
        raise ValueError("Input validation failed: " + "; ".join(errors))


def tool_result(text: str) -> ToolResult:
    return ToolResult(content=[{"type": "text", "text": text}])


def tool_error(error: BaseException) -> ToolResult:
    if isinstance(error, CommandExecutionError):
        text = format_error(error, error.command, error.stderr)
    else:
        text = str(error)
    return ToolResult(content=[{"type": "text", "text": text}], is_error=True)


async def run_command(
    execution: Awaitable[CommandResult],
    success_text: str | None = None,
) -> ToolResult:
    """Await one gcloud execution and turn it into a tool result.

    ``success_text`` replaces the command output, for commands whose output
    carries nothing useful (deletes).
    """
    try:
        result = await execution
    except CommandExecutionError as exc:
        return tool_error(exc)
    if success_text is not None:
        return tool_result(success_text)
    if result.is_empty():
        return tool_result(EMPTY_OUTPUT_TEXT)
    return tool_result(result.to_display_text())


def guard_arguments(schema: dict[str, object]) -> Callable[[ToolHandler], ToolHandler]:
    """Validate arguments against ``schema`` and report bad input as a tool error."""

    def decorator(func: ToolHandler) -> ToolHandler:
        @functools.wraps(func)
        async def wrapper(arguments: dict[str, object]) -> ToolResult:
            try:
                validate_or_raise(schema, arguments)
                return await func(arguments)
            except ValueError as exc:
                logger.info("Rejected arguments for %s: %s", func.__name__, exc)
                return tool_error(exc)

        return wrapper

    return decorator


def get_required_string(args: dict[str, object], key: str) -> str:
    if key not in args:
        raise ValueError(f"missing required parameter: {key}")
    value = args[key]
    if not isinstance(value, str):
        raise ValueError(f"parameter {key} must be a string")
    if value == "":
        raise ValueError(f"parameter {key} cannot be empty")
    return value


def get_optional_string(args: dict[str, object], key: str, default: str = "") -> str:
    value = args.get(key)
    return value if isinstance(value, str) else default


def get_optional_int(args: dict[str, object], key: str, default: int) -> int:
    value = args.get(key)
    # bool is an int subclass; JSON true/false is not a number.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


def get_optional_bool(args: dict[str, object], key: str, default: bool = False) -> bool:
    value = args.get(key)
    return value if isinstance(value, bool) else default


def get_optional_string_list(args: dict[str, object], key: str) -> list[str]:
    value = args.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def get_optional_string_map(args: dict[str, object], key: str) -> dict[str, str]:
    value = args.get(key)
    if not isinstance(value, dict):
        return {}
    return {str(k): v if isinstance(v, str) else str(v) for k, v in value.items()}


def join_pairs(values: dict[str, str]) -> str:
    """Render ``{"a": "1", "b": "2"}`` as ``a=1,b=2``."""
    return ",".join(f"{k}={v}" for k, v in values.items())
