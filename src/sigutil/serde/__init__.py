"""Serialization (serde): byte/hex conversions and Solidity ABI encodings."""

from .abi import encode_abi, encode_packed, encode_single, solidity_sha3
from .conversions import (
    add_hex_prefix,
    bytes_to_hex,
    bytes_to_int,
    from_signed,
    int_to_bytes,
    int_to_hex,
    is_hex_string,
    set_length_left,
    set_length_right,
    strip_hex_prefix,
    to_bytes,
    to_unsigned,
)

__all__: tuple[str, ...] = (
    "add_hex_prefix",
    "bytes_to_hex",
    "bytes_to_int",
    "encode_abi",
    "encode_packed",
    "encode_single",
    "from_signed",
    "int_to_bytes",
    "int_to_hex",
    "is_hex_string",
    "set_length_left",
    "set_length_right",
    "solidity_sha3",
    "strip_hex_prefix",
    "to_bytes",
    "to_unsigned",
)
