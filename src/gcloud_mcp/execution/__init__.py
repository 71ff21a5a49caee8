"""gcloud command construction, execution and result handling."""

from gcloud_mcp.execution.command import CommandBuilder, Executor
from gcloud_mcp.execution.errors import (
    CommandExecutionError,
    CommandTimeoutError,
    NoStructuredOutputError,
    StructuredOutputError,
)
from gcloud_mcp.execution.result import CommandResult, ErrorResponse, format_error

__all__ = [
    "CommandBuilder",
    "CommandExecutionError",
    "CommandResult",
    "CommandTimeoutError",
    "ErrorResponse",
    "Executor",
    "NoStructuredOutputError",
    "StructuredOutputError",
    "format_error",
]
