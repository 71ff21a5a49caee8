"""Cloud Logging tools."""

from __future__ import annotations

from gcloud_mcp.execution import Executor
from gcloud_mcp.mcp_runtime import ToolResult, ToolSpec
from gcloud_mcp.tools import _schemas as s
from gcloud_mcp.tools.base import (
    get_optional_int,
    get_optional_string,
    get_required_string,
    guard_arguments,
    run_command,
)

SEVERITIES = [
    "DEFAULT",
    "DEBUG",
    "INFO",
    "NOTICE",
    "WARNING",
    "ERROR",
    "CRITICAL",
    "ALERT",
    "EMERGENCY",
]

READ_SCHEMA = s.object_schema(
    {
        "project": s.PROJECT,
        "filter": s.string(
            "Log filter expression (e.g. 'resource.type=cloud_run_revision AND severity>=ERROR')"
        ),
        "resource_type": s.string("Resource type (e.g. cloud_run_revision, gce_instance)"),
        "log_name": s.string("Specific log name to read from"),
        "severity": s.string("Minimum severity level", enum=SEVERITIES[1:]),
        "limit": s.limit(50, "Maximum number of entries to return"),
        "freshness": s.string("How far back to read (e.g. 1h, 30m, 1d)", default="1h"),
        "order": s.string("Sort order", enum=["asc", "desc"], default="desc"),
    },
)
LOGS_LIST_SCHEMA = s.object_schema({"project": s.PROJECT})
WRITE_SCHEMA = s.object_schema(
    {
        "log_name": s.string("Name of the log to write to"),
        "message": s.string("Log message"),
        "severity": s.string("Severity of the entry", enum=SEVERITIES, default="INFO"),
        "project": s.PROJECT,
    },
    required=["log_name", "message"],
)


def build_filter(args: dict[str, object]) -> str:
    """Combine the free-form filter with the structured filter arguments."""
    parts: list[str] = []
    if expression := get_optional_string(args, "filter"):
        parts.append(expression)
    if resource_type := get_optional_string(args, "resource_type"):
        parts.append(f"resource.type={resource_type}")
    if log_name := get_optional_string(args, "log_name"):
        parts.append(f"logName:{log_name}")
    if severity := get_optional_string(args, "severity"):
        parts.append(f"severity>={severity}")
    return " AND ".join(parts)


def build_logging_tools(executor: Executor) -> list[ToolSpec]:
    @guard_arguments(READ_SCHEMA)
    async def logging_read(args: dict[str, object]) -> ToolResult:
        components = ["logging", "read"]
        if log_filter := build_filter(args):
            # The filter is a positional argument.
            components.append(log_filter)
        cmd = (
            executor.command(*components)
            .with_project(get_optional_string(args, "project"))
            .with_flag("limit", str(get_optional_int(args, "limit", 50)))
            .with_flag("freshness", get_optional_string(args, "freshness", "1h"))
        )
        if get_optional_string(args, "order", "desc") == "asc":
            cmd.with_flag("order", "asc")
        return await run_command(cmd.execute())

    @guard_arguments(LOGS_LIST_SCHEMA)
    async def logs_list(args: dict[str, object]) -> ToolResult:
        cmd = executor.command("logging", "logs", "list").with_project(
            get_optional_string(args, "project")
        )
        return await run_command(cmd.execute())

    @guard_arguments(WRITE_SCHEMA)
    async def logging_write(args: dict[str, object]) -> ToolResult:
        log_name = get_required_string(args, "log_name")
        message = get_required_string(args, "message")
        cmd = (
            executor.command("logging", "write", log_name, message)
            .with_flag("severity", get_optional_string(args, "severity", "INFO"))
            .with_project(get_optional_string(args, "project"))
            .with_text_format()
        )
        return await run_command(cmd.execute(), success_text=f"Log entry written to {log_name}")

    return [
        ToolSpec(
            name="gcp_logging_read",
            description="Read log entries with optional filtering",
            input_schema=READ_SCHEMA,
            handler=logging_read,
        ),
        ToolSpec(
            name="gcp_logging_logs_list",
            description="List logs in a project",
            input_schema=LOGS_LIST_SCHEMA,
            handler=logs_list,
        ),
        ToolSpec(
            name="gcp_logging_write",
            description="Write a log entry",
            input_schema=WRITE_SCHEMA,
            handler=logging_write,
        ),
    ]
