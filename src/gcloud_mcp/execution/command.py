"""Fluent construction and execution of gcloud commands."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import shlex
from collections.abc import Sequence

from gcloud_mcp.config import GCloudSettings
from gcloud_mcp.execution.errors import CommandExecutionError, CommandTimeoutError
from gcloud_mcp.execution.result import CommandResult

logger = logging.getLogger(__name__)

JSON_FORMAT = "json"
PROJECT_FLAG = "project"


class Executor:
    """Runs gcloud commands using the process-wide defaults.

    Holds no mutable state and can be shared; each call path gets its own
    :class:`CommandBuilder` from :meth:`command`.
    """

    def __init__(self, settings: GCloudSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> GCloudSettings:
        return self._settings

    def command(self, *components: str) -> CommandBuilder:
        """Start building ``gcloud <components...>``."""
        return CommandBuilder(self, components)

    async def run(self, builder: CommandBuilder) -> CommandResult:
        args = builder.build()
        command = builder.command_line()
        timeout = self._settings.command_timeout_seconds
        logger.debug("Running %s", command)

        try:
            process = await asyncio.create_subprocess_exec(
                self._settings.gcloud_path,
                *args,
                stdin=(
                    asyncio.subprocess.PIPE
                    if builder.input_text is not None
                    else asyncio.subprocess.DEVNULL
                ),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as exc:
            # ValueError: an argument the OS cannot pass, e.g. one with a NUL byte.
            logger.warning("Failed to start %s: %s", command, exc)
            raise CommandExecutionError(
                f"gcloud command failed: {exc}\nstderr: ",
                command=command,
                result=CommandResult(),
            ) from exc

        input_bytes = builder.input_text.encode("utf-8") if builder.input_text is not None else None
        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                process.communicate(input_bytes), timeout=timeout
            )
        except asyncio.TimeoutError as exc:
            await _kill(process)
            logger.warning("Command timed out after %ss: %s", timeout, command)
            raise CommandTimeoutError(
                f"gcloud command failed: timed out after {timeout:g}s\nstderr: ",
                command=command,
                result=CommandResult(exit_code=process.returncode or 0),
            ) from exc
        except asyncio.CancelledError:
            await _kill(process)
            raise

        stdout = stdout_bytes.decode("utf-8", errors="replace")
        stderr = stderr_bytes.decode("utf-8", errors="replace")
        exit_code = process.returncode or 0

        if exit_code != 0:
            logger.warning("Command exited with status %d: %s", exit_code, command)
            raise CommandExecutionError(
                f"gcloud command failed: exit status {exit_code}\nstderr: {stderr}",
                command=command,
                result=CommandResult(stdout=stdout, stderr=stderr, exit_code=exit_code),
            )

        json_text = None
        if builder.format == JSON_FORMAT:
            json_text = stdout.strip() or None
        return CommandResult(stdout=stdout, stderr=stderr, exit_code=0, json_text=json_text)


async def _kill(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        with contextlib.suppress(ProcessLookupError):
            process.kill()
    await process.wait()


class CommandBuilder:
    """Accumulates components and flags for a single gcloud invocation.

    Not thread-safe; a builder is meant to be used by one call and then
    discarded.
    """

    def __init__(self, executor: Executor, components: Sequence[str]) -> None:
        if not components:
            raise ValueError("a gcloud command needs at least one component")
        settings = executor.settings
        self._executor = executor
        self._components = tuple(components)
        self._flags: dict[str, str] = {}
        self._array_flags: dict[str, list[str]] = {}
        self._bool_flags: list[str] = []
        self._project = settings.project
        self._region = settings.region
        self._zone = settings.zone
        self._format = JSON_FORMAT
        self._input_text: str | None = None

    @property
    def components(self) -> tuple[str, ...]:
        return self._components

    @property
    def project(self) -> str:
        return self._project

    @property
    def region(self) -> str:
        return self._region

    @property
    def zone(self) -> str:
        return self._zone

    @property
    def format(self) -> str:
        return self._format

    @property
    def input_text(self) -> str | None:
        return self._input_text

    # An empty override keeps the inherited default.
    def with_project(self, project: str) -> CommandBuilder:
        if project:
            self._project = project
        return self

    def with_region(self, region: str) -> CommandBuilder:
        if region:
            self._region = region
        return self

    def with_zone(self, zone: str) -> CommandBuilder:
        if zone:
            self._zone = zone
        return self

    def with_flag(self, name: str, value: str) -> CommandBuilder:
        """Add ``--name=value``; empty values are dropped."""
        if value:
            self._flags[name] = value
        return self

    def with_array_flag(self, name: str, value: str) -> CommandBuilder:
        """Add a repeatable ``--name=value``; empty values are dropped."""
        if value:
            self._array_flags.setdefault(name, []).append(value)
        return self

    def with_bool_flag(self, name: str) -> CommandBuilder:
        self._bool_flags.append(name)
        return self

    def with_format(self, output_format: str) -> CommandBuilder:
        self._format = output_format
        return self

    def with_text_format(self) -> CommandBuilder:
        """Drop ``--format`` so gcloud prints text and no JSON is parsed."""
        self._format = ""
        return self

    def with_input(self, text: str) -> CommandBuilder:
        """Feed ``text`` to the process stdin (for ``--data-file=-``)."""
        self._input_text = text
        return self

    def build(self) -> list[str]:
        """Return the argument list, without the gcloud executable.

        Region and zone are only added by :meth:`execute_regional` and
        :meth:`execute_zonal`.
        """
        args = list(self._components)
        args.extend(f"--{name}={value}" for name, value in self._flags.items())
        for name, values in self._array_flags.items():
            args.extend(f"--{name}={value}" for value in values)
        args.extend(f"--{name}" for name in self._bool_flags)
        if self._project:
            args.append(f"--{PROJECT_FLAG}={self._project}")
        if self._format:
            args.append(f"--format={self._format}")
        return args

    def command_line(self) -> str:
        return shlex.join([self._executor.settings.gcloud_path, *self.build()])

    async def execute(self) -> CommandResult:
        return await self._executor.run(self)

    async def execute_regional(self) -> CommandResult:
        if self._region:
            self.with_flag("region", self._region)
        return await self.execute()

    async def execute_zonal(self) -> CommandResult:
        if self._zone:
            self.with_flag("zone", self._zone)
        return await self.execute()
