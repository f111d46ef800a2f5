"""
EIP-712 typed-data hashing: type strings, struct encoding and the signing digest.

Arrays are not supported as struct fields. Fields missing from the data
mapping are skipped rather than zero-filled, so a misspelled field name
silently changes the digest instead of raising.
"""

from __future__ import annotations

import enum
from typing import Any, Mapping

from ..errors import (
    SchemaViolationError,
    UnresolvedTypeError,
    UnsupportedFeatureError,
)
from ..hashes import keccak256
from ..serde import encode_abi, to_bytes
from .schema import TYPED_MESSAGE_SCHEMA, validate_typed_message

TypeTable = Mapping[str, list[dict[str, str]]]

DOMAIN_TYPE = "EIP712Domain"
EIP191_STRUCTURED_PREFIX = b"\x19\x01"
TYPED_MESSAGE_KEYS: tuple[str, ...] = tuple(TYPED_MESSAGE_SCHEMA["properties"])


class _FieldKind(enum.Enum):
    ABSENT = "absent"
    HASHED = "hashed"  # string / bytes: keccak256 of the raw value
    STRUCT = "struct"  # keccak256 of the nested struct encoding
    ARRAY = "array"
    ELEMENTARY = "elementary"


def _field_kind(
    field: Mapping[str, str], data: Mapping[str, Any], types: TypeTable
) -> _FieldKind:
    if field["name"] not in data:
        return _FieldKind.ABSENT
    field_type = field["type"]
    if field_type in ("string", "bytes"):
        return _FieldKind.HASHED
    if field_type in types:
        return _FieldKind.STRUCT
    if field_type.endswith("]"):
        return _FieldKind.ARRAY
    return _FieldKind.ELEMENTARY


def find_type_dependencies(
    primary_type: str,
    types: TypeTable,
    results: list[str] | None = None,
) -> list[str]:
    """
    Collect primary_type and every struct type it references, transitively.

    Names are returned once each, in depth-first discovery order. Elementary
    types and names missing from types are not collected; cycles terminate
    because a type already in results is not visited again.
    """
    if results is None:
        results = []
    if primary_type in results or primary_type not in types:
        return results
    results.append(primary_type)
    for field in types[primary_type]:
        find_type_dependencies(field.get("type"), types, results)
    return results


def encode_type(primary_type: str, types: TypeTable) -> str:
    """
    Encode a struct type and its dependencies as a string.

    The primary type comes first, the dependencies follow sorted by name, each
    rendered with its fields in declared order, e.g.
    'Mail(Person from,Person to,string contents)Person(string name,address wallet)'.

    Raises:
        UnresolvedTypeError: if a type in the chain has no definition.
    """
    deps = find_type_dependencies(primary_type, types)
    deps = [dep for dep in deps if dep != primary_type]
    out = []
    for type_name in [primary_type] + sorted(deps):
        fields = types.get(type_name)
        if fields is None:
            raise UnresolvedTypeError(type_name)
        members = ",".join(f"{f['type']} {f['name']}" for f in fields)
        out.append(f"{type_name}({members})")
    return "".join(out)


def hash_type(primary_type: str, types: TypeTable) -> bytes:
    """Keccak-256 of the encoded type string (type hash)."""
    return keccak256(encode_type(primary_type, types).encode("utf-8"))


def encode_data(primary_type: str, data: Mapping[str, Any], types: TypeTable) -> bytes:
    """
    Encode struct data as type hash followed by one 32-byte word per present field.

    Args:
        primary_type: Struct type of data.
        data: Field name to value mapping.
        types: Type definitions.

    Returns:
        ABI-encoded words: hash_type, then each field in declared order.

    Raises:
        UnresolvedTypeError: if primary_type or a dependency is undefined.
        UnsupportedFeatureError: for an array-typed field that is present in data.
    """
    encoded_types = ["bytes32"]
    encoded_values: list[object] = [hash_type(primary_type, types)]

    for field in types[primary_type]:
        kind = _field_kind(field, data, types)
        if kind is _FieldKind.ABSENT:
            continue
        name, field_type = field["name"], field["type"]
        value = data[name]
        if kind is _FieldKind.HASHED:
            encoded_types.append("bytes32")
            encoded_values.append(keccak256(to_bytes(value)))
        elif kind is _FieldKind.STRUCT:
            encoded_types.append("bytes32")
            encoded_values.append(keccak256(encode_data(field_type, value, types)))
        elif kind is _FieldKind.ARRAY:
            raise UnsupportedFeatureError(primary_type, name, field_type)
        else:
            encoded_types.append(field_type)
            encoded_values.append(value)

    return encode_abi(encoded_types, encoded_values)


def hash_struct(primary_type: str, data: Mapping[str, Any], types: TypeTable) -> bytes:
    """Keccak-256 of encoded struct (struct hash)."""
    return keccak256(encode_data(primary_type, data, types))


def sanitize_data(typed_data: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of typed_data with only types, primaryType, domain and message kept."""
    return {
        key: typed_data[key]
        for key in TYPED_MESSAGE_KEYS
        if typed_data.get(key) is not None
    }


def sign(typed_data: Mapping[str, Any]) -> bytes:
    """
    EIP-712 digest to sign: keccak256(0x1901 || hashStruct(domain) || hashStruct(message)).

    Args:
        typed_data: Dict with keys "types", "primaryType", "domain", "message";
            types must define EIP712Domain. Other keys are ignored.

    Returns:
        32-byte hash to sign (e.g. with sign_recoverable).

    Raises:
        SchemaViolationError: if typed_data is not a mapping, or a required key
            is missing or malformed.
    """
    if not isinstance(typed_data, Mapping):
        raise SchemaViolationError(
            f"Invalid typed message at <root>: expected an object, "
            f"got {type(typed_data).__name__}"
        )
    sanitized = sanitize_data(typed_data)
    validate_typed_message(sanitized)
    types = sanitized["types"]
    domain_hash = hash_struct(DOMAIN_TYPE, sanitized["domain"], types)
    message_hash = hash_struct(sanitized["primaryType"], sanitized["message"], types)
    return keccak256(EIP191_STRUCTURED_PREFIX + domain_hash + message_hash)


__all__: tuple[str, ...] = (
    "DOMAIN_TYPE",
    "EIP191_STRUCTURED_PREFIX",
    "TYPED_MESSAGE_KEYS",
    "encode_data",
    "encode_type",
    "find_type_dependencies",
    "hash_struct",
    "hash_type",
    "sanitize_data",
    "sign",
)
