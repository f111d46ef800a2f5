"""
Byte, integer and hex-string conversions.

to_bytes follows the usual "toBuffer" rules of Ethereum tooling: 0x-prefixed
hex strings are decoded, any other string is UTF-8 text.
"""

from __future__ import annotations

import re

_HEX_STRING = re.compile(r"^0x[0-9a-fA-F]*$")
_WORD_BITS = 256


def is_hex_string(value: object) -> bool:
    """True iff value is a str of the form 0x[0-9a-fA-F]*."""
    return isinstance(value, str) and _HEX_STRING.match(value) is not None


def add_hex_prefix(value: str) -> str:
    """Prefix value with "0x" unless it already is (idempotent)."""
    if value.startswith(("0x", "0X")):
        return value
    return "0x" + value


def strip_hex_prefix(value: str) -> str:
    if value.startswith(("0x", "0X")):
        return value[2:]
    return value


def int_to_hex(value: int) -> str:
    """Minimal 0x-prefixed hex of a non-negative int (0 -> "0x0")."""
    if value < 0:
        raise ValueError(f"cannot convert negative integer {value} to hex")
    return hex(value)


def int_to_bytes(value: int) -> bytes:
    """Minimal big-endian bytes of a non-negative int; 0 encodes as one zero byte."""
    if value < 0:
        raise ValueError(f"cannot convert negative integer {value} to bytes")
    return value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")


def to_bytes(value: object) -> bytes:
    """
    Convert value to bytes.

    Args:
        value: bytes-like, 0x hex string, text string, non-negative int,
            list of byte values, or None (empty bytes).

    Returns:
        The byte representation.

    Raises:
        TypeError: for unsupported input types.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if value is None:
        return b""
    if isinstance(value, str):
        if is_hex_string(value):
            digits = value[2:]
            if len(digits) % 2:
                digits = "0" + digits
            return bytes.fromhex(digits)
        return value.encode("utf-8")
    if isinstance(value, bool):
        raise TypeError("cannot convert bool to bytes")
    if isinstance(value, int):
        return int_to_bytes(value)
    if isinstance(value, (list, tuple)):
        return bytes(value)
    raise TypeError(f"cannot convert {type(value).__name__} to bytes")


def bytes_to_hex(value: object) -> str:
    """0x-prefixed lower-case hex of to_bytes(value)."""
    return "0x" + to_bytes(value).hex()


def bytes_to_int(value: object) -> int:
    """Big-endian unsigned int of to_bytes(value); empty input is 0."""
    return int.from_bytes(to_bytes(value), "big")


def from_signed(value: object) -> int:
    """Interpret bytes as a 256-bit two's complement integer."""
    n = bytes_to_int(value)
    if n >> (_WORD_BITS - 1):
        n -= 1 << _WORD_BITS
    return n


def to_unsigned(value: int) -> bytes:
    """Minimal big-endian bytes of value taken modulo 2**256 (empty for 0)."""
    n = value % (1 << _WORD_BITS)
    return n.to_bytes((n.bit_length() + 7) // 8, "big")


def set_length_left(value: object, length: int) -> bytes:
    """Left-pad with zeros to length; longer input keeps its last length bytes."""
    b = to_bytes(value)
    if len(b) >= length:
        return b[len(b) - length :]
    return bytes(length - len(b)) + b


def set_length_right(value: object, length: int) -> bytes:
    """Right-pad with zeros to length; longer input keeps its first length bytes."""
    b = to_bytes(value)
    if len(b) >= length:
        return b[:length]
    return b + bytes(length - len(b))


__all__: tuple[str, ...] = (
    "add_hex_prefix",
    "bytes_to_hex",
    "bytes_to_int",
    "from_signed",
    "int_to_bytes",
    "int_to_hex",
    "is_hex_string",
    "set_length_left",
    "set_length_right",
    "strip_hex_prefix",
    "to_bytes",
    "to_unsigned",
)
