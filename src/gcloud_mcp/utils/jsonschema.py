"""JSON Schema validation wrapper."""

from __future__ import annotations

from jsonschema import Draft202012Validator


def validate_payload(schema: dict[str, object], payload: dict[str, object]) -> list[str]:
    """Validate payload against schema and return error messages.

    Messages are prefixed with the path of the offending field when there is
    one, e.g. ``limit: 'ten' is not of type 'integer'``.
    """
    validator = Draft202012Validator(schema)
    errors: list[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path]):
        location = ".".join(str(part) for part in error.path)
        errors.append(f"{location}: {error.message}" if location else error.message)
    return errors
