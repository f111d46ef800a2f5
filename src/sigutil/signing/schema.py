"""
JSON Schema for EIP-712 typed messages and its validator.
"""

from __future__ import annotations

from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError

from ..errors import SchemaViolationError

TYPED_MESSAGE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "types": {
            "type": "object",
            "additionalProperties": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string"},
                        "type": {"type": "string"},
                    },
                    "required": ["name", "type"],
                },
            },
        },
        "primaryType": {"type": "string"},
        "domain": {"type": "object"},
        "message": {"type": "object"},
    },
    "required": ["types", "primaryType", "domain", "message"],
}

_VALIDATOR = Draft7Validator(TYPED_MESSAGE_SCHEMA)


def validate_typed_message(typed_data: object) -> None:
    """
    Check typed_data against TYPED_MESSAGE_SCHEMA.

    Raises:
        SchemaViolationError: naming the first offending location.
    """
    try:
        _VALIDATOR.validate(typed_data)
    except ValidationError as exc:
        where = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise SchemaViolationError(
            f"Invalid typed message at {where}: {exc.message}"
        ) from exc


__all__: tuple[str, ...] = ("TYPED_MESSAGE_SCHEMA", "validate_typed_message")
