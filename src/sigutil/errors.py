"""Exceptions raised while hashing and signing typed data."""

from __future__ import annotations


class TypedDataError(ValueError):
    """Base class for typed-data encoding errors."""


class SchemaViolationError(TypedDataError):
    """Typed message does not match TYPED_MESSAGE_SCHEMA."""


class UnresolvedTypeError(TypedDataError):
    """A referenced struct type has no definition in the type table."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"No type definition specified: {type_name}")
        self.type_name = type_name


class UnsupportedFeatureError(TypedDataError):
    """The structured encoder was asked to encode an array-typed field."""

    def __init__(self, type_name: str, field_name: str, field_type: str) -> None:
        super().__init__(
            f"Arrays currently unimplemented in encode_data: "
            f"{type_name}.{field_name} has type {field_type}"
        )
        self.type_name = type_name
        self.field_name = field_name
        self.field_type = field_type


class MalformedLegacyEntryError(TypedDataError):
    """Legacy typed data is not a non-empty list of named entries."""


class InvalidNormalizeInputError(TypedDataError, TypeError):
    """normalize() received something other than a hex string or an integer."""


__all__: tuple[str, ...] = (
    "InvalidNormalizeInputError",
    "MalformedLegacyEntryError",
    "SchemaViolationError",
    "TypedDataError",
    "UnresolvedTypeError",
    "UnsupportedFeatureError",
)
