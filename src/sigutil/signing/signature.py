"""
65-byte signature serialization (r || s || v) and public key recovery.
"""

from __future__ import annotations

from ..curves import recover_pubkey
from ..errors import InvalidNormalizeInputError
from ..serde import (
    add_hex_prefix,
    bytes_to_hex,
    bytes_to_int,
    from_signed,
    int_to_hex,
    set_length_left,
    strip_hex_prefix,
    to_bytes,
    to_unsigned,
)

SIGNATURE_LENGTH = 65


def concat_sig(v: int | bytes, r: int | bytes, s: int | bytes) -> str:
    """
    Serialize a signature as 0x || r (64 hex) || s (64 hex) || v (minimal hex).

    Args:
        v: Recovery value, usually 27 or 28.
        r, s: Signature scalars as ints or big-endian bytes.

    Returns:
        0x-prefixed hex string.
    """
    r_str = set_length_left(to_unsigned(from_signed(r)), 32).hex()
    s_str = set_length_left(to_unsigned(from_signed(s)), 32).hex()
    v_str = strip_hex_prefix(int_to_hex(bytes_to_int(v)))
    return add_hex_prefix(r_str + s_str + v_str)


def from_rpc_sig(sig: object) -> tuple[int, bytes, bytes]:
    """
    Split a 65-byte r || s || v signature.

    Args:
        sig: Signature bytes or 0x hex string.

    Returns:
        (v, r, s) with v in 27 notation and r, s as 32-byte strings.
    """
    raw = to_bytes(sig)
    if len(raw) != SIGNATURE_LENGTH:
        raise ValueError(f"Invalid signature length: {len(raw)} bytes")
    v = raw[64]
    if v < 27:
        v += 27
    return (v, raw[:32], raw[32:64])


def ecrecover(msg_hash: bytes, v: int, r: bytes, s: bytes) -> bytes:
    """Recover the 64-byte public key (x || y) that signed msg_hash."""
    recid = v - 27
    if recid not in (0, 1):
        raise ValueError("Invalid signature v value")
    pubkey = recover_pubkey(
        msg_hash, int.from_bytes(r, "big"), int.from_bytes(s, "big"), recid
    )
    return pubkey[1:]


def recover_public_key(msg_hash: bytes, sig: object) -> bytes:
    """ecrecover over a serialized r || s || v signature."""
    v, r, s = from_rpc_sig(sig)
    return ecrecover(msg_hash, v, r, s)


def normalize(value: object) -> str | None:
    """
    Normalize an integer or hex string to a lower-case 0x-prefixed hex string.

    Falsy input (None, "", 0) yields None.

    Raises:
        InvalidNormalizeInputError: for any other input type.
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidNormalizeInputError(
            "normalize() requires hex string or integer input. "
            f"received {type(value).__name__}: {value!r}"
        )
    if not value:
        return None
    if isinstance(value, int):
        value = bytes_to_hex(value)
    return add_hex_prefix(value.lower())


__all__: tuple[str, ...] = (
    "SIGNATURE_LENGTH",
    "concat_sig",
    "ecrecover",
    "from_rpc_sig",
    "normalize",
    "recover_public_key",
)
