"""Errors raised by the gcloud execution layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gcloud_mcp.execution.result import CommandResult


class CommandExecutionError(RuntimeError):
    """A gcloud invocation could not be started or did not succeed.

    ``result`` holds whatever was captured (stderr, exit code) so callers can
    inspect it after the failure.
    """

    def __init__(self, message: str, *, command: str, result: CommandResult) -> None:
        super().__init__(message)
        self.command = command
        self.result = result

    @property
    def stderr(self) -> str:
        return self.result.stderr

    @property
    def exit_code(self) -> int:
        return self.result.exit_code


class CommandTimeoutError(CommandExecutionError):
    """The configured command timeout elapsed and the process was killed."""


class NoStructuredOutputError(ValueError):
    """Structured output was requested from a result that has none."""


class StructuredOutputError(ValueError):
    """Captured structured output could not be decoded into the target type."""
