"""Result and error payloads produced by gcloud executions."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, TypeVar, overload

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from gcloud_mcp.execution.errors import NoStructuredOutputError, StructuredOutputError

T = TypeVar("T")


@dataclass(frozen=True)
class CommandResult:
    """Output of one gcloud execution.

    ``json_text`` is only set when JSON output was requested and stdout was
    non-empty; it is stored as captured, not validated.
    """

    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
    json_text: str | None = None

    @overload
    def parse_json(self) -> Any: ...

    @overload
    def parse_json(self, target: type[T]) -> T: ...

    def parse_json(self, target: Any = Any) -> Any:
        """Decode the structured output into ``target``.

        ``target`` may be anything pydantic can validate into (a model, a
        dataclass, ``dict[str, int]``...). Defaults to plain JSON values.
        """
        if self.json_text is None:
            raise NoStructuredOutputError("no JSON output available")
        try:
            return TypeAdapter(target).validate_json(self.json_text)
        except PydanticValidationError as exc:
            raise StructuredOutputError(f"failed to decode JSON output: {exc}") from exc

    def to_display_text(self) -> str:
        """Pretty-printed JSON when available, raw stdout otherwise.

        The captured JSON is returned untouched when re-indenting it would
        change what it says: invalid JSON, ``NaN``/``Infinity``, duplicate
        keys, or number literals that do not print back the same way.
        """
        if self.json_text is not None:
            try:
                return _reindent(self.json_text)
            except ValueError:
                return self.json_text
        return self.stdout

    def is_empty(self) -> bool:
        return self.json_text is None and self.stdout == ""


def _reindent(text: str) -> str:
    """Re-indent ``text`` with two spaces, raising ``ValueError`` if that is lossy."""

    def constant(name: str) -> Any:
        raise ValueError(f"{name} is not valid JSON")

    def verbatim(convert: Any) -> Any:
        def parse(literal: str) -> Any:
            value = convert(literal)
            if json.dumps(value) != literal:
                raise ValueError(f"number {literal} would be rewritten")
            return value

        return parse

    def unique_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
        obj = dict(pairs)
        if len(obj) != len(pairs):
            raise ValueError("duplicate object key")
        return obj

    value = json.loads(
        text,
        parse_constant=constant,
        parse_int=verbatim(int),
        parse_float=verbatim(float),
        object_pairs_hook=unique_keys,
    )
    return json.dumps(value, indent=2, ensure_ascii=False)


class ErrorResponse(BaseModel):
    error: str
    command: str | None = None
    stderr: str | None = None


def format_error(error: BaseException | str, command: str = "", stderr: str = "") -> str:
    """Render a failure as indented JSON, dropping empty command/stderr."""
    response = ErrorResponse(
        error=str(error),
        command=command or None,
        stderr=stderr or None,
    )
    return response.model_dump_json(indent=2, exclude_none=True)
