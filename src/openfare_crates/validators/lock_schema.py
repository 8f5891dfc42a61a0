"""JSON Schema validation for OpenFare lock documents."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

LOCK_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "OpenFare lock",
    "type": "object",
    "required": ["scheme-version", "plans", "payees"],
    "properties": {
        "scheme-version": {"type": "string", "minLength": 1},
        "plans": {
            "type": "object",
            "additionalProperties": {"$ref": "#/$defs/plan"},
        },
        "payees": {
            "type": "object",
            "additionalProperties": {"type": "object"},
        },
    },
    "$defs": {
        "plan": {
            "type": "object",
            "required": ["type"],
            "properties": {
                "type": {"enum": ["voluntary", "compulsory"]},
                "conditions": {"type": "object"},
                "payments": {
                    "type": "object",
                    "properties": {
                        "total": {"type": "string"},
                        "shares": {
                            "type": "object",
                            "additionalProperties": {"type": "integer", "minimum": 0},
                        },
                    },
                },
            },
        },
    },
}

_VALIDATOR = Draft202012Validator(LOCK_SCHEMA)


def _format_errors(errors: Iterable[ValidationError]) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def lock_errors(document: Any) -> str | None:
    """Return a formatted list of schema violations, or None if valid."""
    errors = sorted(_VALIDATOR.iter_errors(document), key=lambda e: [str(p) for p in e.path])
    if not errors:
        return None
    return _format_errors(errors)
