"""JSON Schema fragments shared by the gcloud tools."""

from __future__ import annotations

from collections.abc import Iterable

PROJECT = {"type": "string", "description": "GCP project ID (uses default if not specified)"}
REGION = {"type": "string", "description": "Region (uses default if not specified)"}
ZONE = {"type": "string", "description": "Zone (uses default if not specified)"}
FILTER = {"type": "string", "description": "gcloud filter expression"}
STRING_MAP = {"type": "object", "additionalProperties": {"type": ["string", "number", "boolean"]}}
STRING_LIST = {"type": "array", "items": {"type": "string"}}


def limit(default: int, description: str = "Maximum number of results") -> dict[str, object]:
    return {"type": "integer", "minimum": 1, "default": default, "description": description}


def described(fragment: dict[str, object], description: str) -> dict[str, object]:
    return {**fragment, "description": description}


def string(description: str, **extra: object) -> dict[str, object]:
    return {"type": "string", "description": description, **extra}


def object_schema(
    properties: dict[str, dict[str, object]],
    required: Iterable[str] = (),
) -> dict[str, object]:
    schema: dict[str, object] = {"type": "object", "properties": properties}
    required = list(required)
    if required:
        schema["required"] = required
    return schema
