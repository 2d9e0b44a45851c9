"""Tracking result contract.

JSON Schema for the body served by `GET /api/track` and printed by
`track_cli.py`. Events from the activity widget always carry
timestamp/status/detail; events decoded from the embedded payload keep the
carrier's own field names, so the event schema only types the known fields
when they are present, and non-object elements pass through untyped.
"""

from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft202012Validator


EVENT_SCHEMA: Dict[str, Any] = {
    "if": {"type": "object"},
    "then": {
        "properties": {
            "timestamp": {"type": "string", "minLength": 1, "pattern": "[0-9]"},
            "status": {"type": "string"},
            "detail": {"type": "string"},
        },
        "additionalProperties": True,
    },
}

TRACKING_RESULT_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["shipping", "last_status", "events"],
    "properties": {
        "shipping": {"type": ["string", "number", "boolean", "null"]},
        "last_status": EVENT_SCHEMA,
        "events": {"type": "array", "items": EVENT_SCHEMA},
    },
    "additionalProperties": False,
}

ERROR_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["error"],
    "properties": {"error": {"type": "string", "minLength": 1}},
}

_RESULT_VALIDATOR = Draft202012Validator(TRACKING_RESULT_SCHEMA)
_ERROR_VALIDATOR = Draft202012Validator(ERROR_SCHEMA)


def _collect(validator: Draft202012Validator, payload: Any) -> List[str]:
    errors = []
    for e in sorted(validator.iter_errors(payload), key=lambda x: [str(p) for p in x.path]):
        path = ".".join(str(p) for p in e.path) if e.path else "<root>"
        errors.append(f"{path}: {e.message}")
    return errors


def validate_tracking_result(payload: Dict[str, Any]) -> List[str]:
    """Return a list of human-readable validation errors (empty means valid)."""
    return _collect(_RESULT_VALIDATOR, payload)


def validate_error_body(payload: Dict[str, Any]) -> List[str]:
    return _collect(_ERROR_VALIDATOR, payload)
