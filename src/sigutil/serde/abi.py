"""
Solidity ABI encodings for elementary types.

- encode_abi: standard static tuple encoding, one 32-byte word per value.
- encode_packed: tightly packed encoding (abi.encodePacked / soliditySHA3).

Dynamic types (string, bytes, arrays) have no static word and are rejected by
encode_abi; encode_packed supports them.
"""

from __future__ import annotations

import re
from typing import Sequence

from ..hashes import keccak256
from .conversions import set_length_right, to_bytes

_WORD = 32
_INT_TYPE = re.compile(r"^(u?)int(\d*)$")
_FIXED_BYTES_TYPE = re.compile(r"^bytes(\d+)$")
_ARRAY_TYPE = re.compile(r"^(.+)\[(\d*)\]$")


def _parse_number(value: object) -> int:
    """Accept int, decimal or 0x-hex string, or big-endian bytes."""
    if isinstance(value, bool):
        raise ValueError("argument is not a number: bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        negative = text.startswith("-")
        if negative:
            text = text[1:]
        try:
            if text.startswith(("0x", "0X")):
                n = int(text[2:] or "0", 16)
            else:
                n = int(text, 10)
        except ValueError:
            raise ValueError(f"argument is not a number: {value!r}") from None
        return -n if negative else n
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, "big")
    raise ValueError(f"argument is not a number: {type(value).__name__}")


def _int_bits(match: re.Match[str], type_: str) -> int:
    bits = int(match.group(2) or 256)
    if bits % 8 or not 8 <= bits <= 256:
        raise ValueError(f"invalid integer width in type {type_!r}")
    return bits


def _fixed_bytes_size(match: re.Match[str], type_: str) -> int:
    size = int(match.group(1))
    if not 1 <= size <= 32:
        raise ValueError(f"invalid byte width in type {type_!r}")
    return size


def _check_range(type_: str, n: int, bits: int, signed: bool) -> None:
    if signed:
        lo, hi = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        lo, hi = 0, (1 << bits) - 1
    if not lo <= n <= hi:
        raise ValueError(f"value {n} out of range for {type_!r}")


def _fixed_bytes(type_: str, value: object, size: int) -> bytes:
    b = to_bytes(value)
    if len(b) > size:
        raise ValueError(f"{type_!r} value is {len(b)} bytes, expected at most {size}")
    return set_length_right(b, size)


def encode_single(type_: str, value: object) -> bytes:
    """
    Encode one elementary value into its 32-byte ABI word.

    Args:
        type_: Static elementary type (uintN, intN, address, bool, bytesN).
        value: The value; numbers may be ints, decimal/hex strings or bytes.

    Returns:
        32 bytes.
    """
    if type_ == "address":
        n = _parse_number(value)
        _check_range(type_, n, 160, signed=False)
        return n.to_bytes(_WORD, "big")
    if type_ == "bool":
        return (1 if value else 0).to_bytes(_WORD, "big")
    m = _INT_TYPE.match(type_)
    if m:
        bits = _int_bits(m, type_)
        signed = m.group(1) != "u"
        n = _parse_number(value)
        _check_range(type_, n, bits, signed)
        return n.to_bytes(_WORD, "big", signed=signed)
    m = _FIXED_BYTES_TYPE.match(type_)
    if m:
        _fixed_bytes_size(m, type_)
        return _fixed_bytes(type_, value, _WORD)
    raise ValueError(f"unsupported static ABI type {type_!r}")


def encode_abi(types: Sequence[str], values: Sequence[object]) -> bytes:
    """Standard ABI encoding of a tuple of static elementary values."""
    if len(types) != len(values):
        raise ValueError(f"got {len(types)} types but {len(values)} values")
    return b"".join(encode_single(t, v) for t, v in zip(types, values))


def _pack(type_: str, value: object, word: bool) -> bytes:
    """Pack one value; word=True pads numbers to 32 bytes (array elements)."""
    m = _ARRAY_TYPE.match(type_)
    if m:
        if isinstance(value, (str, bytes, bytearray)) or not isinstance(
            value, Sequence
        ):
            raise ValueError(f"{type_!r} value must be a sequence")
        if m.group(2) and int(m.group(2)) != len(value):
            raise ValueError(
                f"{type_!r} expects {m.group(2)} elements, got {len(value)}"
            )
        return b"".join(_pack(m.group(1), item, True) for item in value)
    if type_ == "bytes":
        return to_bytes(value)
    if type_ == "string":
        return value.encode("utf-8") if isinstance(value, str) else to_bytes(value)
    if type_ == "bool":
        return (1 if value else 0).to_bytes(_WORD if word else 1, "big")
    if type_ == "address":
        n = _parse_number(value)
        _check_range(type_, n, 160, signed=False)
        return n.to_bytes(_WORD if word else 20, "big")
    m = _INT_TYPE.match(type_)
    if m:
        bits = _int_bits(m, type_)
        signed = m.group(1) != "u"
        n = _parse_number(value)
        _check_range(type_, n, bits, signed)
        return n.to_bytes(_WORD if word else bits // 8, "big", signed=signed)
    m = _FIXED_BYTES_TYPE.match(type_)
    if m:
        return _fixed_bytes(type_, value, _fixed_bytes_size(m, type_))
    raise ValueError(f"unsupported packed type {type_!r}")


def encode_packed(types: Sequence[str], values: Sequence[object]) -> bytes:
    """Tightly packed encoding of values (no padding except inside arrays)."""
    if len(types) != len(values):
        raise ValueError(f"got {len(types)} types but {len(values)} values")
    return b"".join(_pack(t, v, False) for t, v in zip(types, values))


def solidity_sha3(types: Sequence[str], values: Sequence[object]) -> bytes:
    """keccak256 of encode_packed(types, values)."""
    return keccak256(encode_packed(types, values))


__all__: tuple[str, ...] = (
    "encode_abi",
    "encode_packed",
    "encode_single",
    "solidity_sha3",
)
