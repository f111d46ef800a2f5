"""
Legacy typed-data hash (eth_signTypedData v1): a flat list of {name, type, value}.

The digest is
    keccak256(soliditySHA3(string[], "type name"...) || soliditySHA3(types, values))
with no struct table, nesting or domain.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..errors import MalformedLegacyEntryError
from ..hashes import keccak256
from ..serde import solidity_sha3, to_bytes

_NOT_A_LIST = "Expect argument to be non-empty array"


def typed_signature_hash(typed_data: Sequence[Mapping[str, Any]]) -> bytes:
    """
    Hash legacy typed data.

    Args:
        typed_data: Non-empty list of {"name", "type", "value"} entries.

    Returns:
        32-byte digest.

    Raises:
        MalformedLegacyEntryError: if typed_data is not a non-empty list or an
            entry has no name.
    """
    if isinstance(typed_data, (str, bytes, bytearray, Mapping)) or not isinstance(
        typed_data, Sequence
    ):
        raise MalformedLegacyEntryError(_NOT_A_LIST)
    if not typed_data:
        raise MalformedLegacyEntryError(_NOT_A_LIST)

    values = []
    types = []
    schema = []
    for i, entry in enumerate(typed_data):
        if not isinstance(entry, Mapping) or not entry.get("name"):
            raise MalformedLegacyEntryError(f"{_NOT_A_LIST}: entry {i} has no name")
        type_ = entry.get("type")
        value = entry.get("value")
        values.append(to_bytes(value) if type_ == "bytes" else value)
        types.append(type_)
        schema.append(f"{type_} {entry['name']}")

    schema_hash = solidity_sha3(["string"] * len(schema), schema)
    data_hash = solidity_sha3(types, values)
    return keccak256(schema_hash + data_hash)


__all__: tuple[str, ...] = ("typed_signature_hash",)
