"""
secp256k1 (Ethereum curve): key derivation, recoverable ECDSA, public key recovery.

Points are handled in Jacobian coordinates internally; the point at infinity
has Z == 0. Nonces are derived deterministically per RFC 6979 (HMAC-SHA256).
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Iterator

from ..hashes import keccak256

_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_Gx = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
_Gy = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8

_Jacobian = tuple[int, int, int]

_INFINITY: _Jacobian = (0, 1, 0)
_G: _Jacobian = (_Gx, _Gy, 1)


def _mod_inv(a: int, n: int) -> int:
    return pow(a % n, -1, n)


def _double(p: _Jacobian) -> _Jacobian:
    x, y, z = p
    if z == 0 or y == 0:
        return _INFINITY
    y2 = y * y % _P
    s = 4 * x * y2 % _P
    m = 3 * x * x % _P
    nx = (m * m - 2 * s) % _P
    ny = (m * (s - nx) - 8 * y2 * y2) % _P
    nz = 2 * y * z % _P
    return (nx, ny, nz)


def _add(p: _Jacobian, q: _Jacobian) -> _Jacobian:
    x1, y1, z1 = p
    x2, y2, z2 = q
    if z1 == 0:
        return q
    if z2 == 0:
        return p
    z1z1 = z1 * z1 % _P
    z2z2 = z2 * z2 % _P
    u1 = x1 * z2z2 % _P
    u2 = x2 * z1z1 % _P
    s1 = y1 * z2 * z2z2 % _P
    s2 = y2 * z1 * z1z1 % _P
    if u1 == u2:
        if s1 != s2:
            return _INFINITY
        return _double(p)
    h = (u2 - u1) % _P
    r = (s2 - s1) % _P
    h2 = h * h % _P
    h3 = h * h2 % _P
    u1h2 = u1 * h2 % _P
    nx = (r * r - h3 - 2 * u1h2) % _P
    ny = (r * (u1h2 - nx) - s1 * h3) % _P
    nz = h * z1 * z2 % _P
    return (nx, ny, nz)


def _multiply(k: int, p: _Jacobian) -> _Jacobian:
    """Double-and-add scalar multiplication k * p."""
    result = _INFINITY
    addend = p
    k %= _N
    while k:
        if k & 1:
            result = _add(result, addend)
        addend = _double(addend)
        k >>= 1
    return result


def _to_affine(p: _Jacobian) -> tuple[int, int]:
    x, y, z = p
    if z == 0:
        raise ValueError("point at infinity has no affine form")
    z_inv = _mod_inv(z, _P)
    z_inv2 = z_inv * z_inv % _P
    return (x * z_inv2 % _P, y * z_inv2 * z_inv % _P)


def _encode_point(x: int, y: int) -> bytes:
    return b"\x04" + x.to_bytes(32, "big") + y.to_bytes(32, "big")


def _privkey_scalar(privkey: bytes) -> int:
    if len(privkey) != 32:
        raise ValueError("privkey must be 32 bytes")
    d = int.from_bytes(privkey, "big")
    if d == 0 or d >= _N:
        raise ValueError("invalid privkey")
    return d


def _rfc6979_nonces(d: int, msg_hash: bytes) -> Iterator[int]:
    """Yield candidate nonces for (d, msg_hash) per RFC 6979 section 3.2."""
    x = d.to_bytes(32, "big")
    h1 = (int.from_bytes(msg_hash, "big") % _N).to_bytes(32, "big")
    v = b"\x01" * 32
    k = b"\x00" * 32
    k = hmac.new(k, v + b"\x00" + x + h1, hashlib.sha256).digest()
    v = hmac.new(k, v, hashlib.sha256).digest()
    k = hmac.new(k, v + b"\x01" + x + h1, hashlib.sha256).digest()
    v = hmac.new(k, v, hashlib.sha256).digest()
    while True:
        v = hmac.new(k, v, hashlib.sha256).digest()
        candidate = int.from_bytes(v, "big")
        if 1 <= candidate < _N:
            yield candidate
        k = hmac.new(k, v + b"\x00", hashlib.sha256).digest()
        v = hmac.new(k, v, hashlib.sha256).digest()


def privkey_to_pubkey(privkey: bytes) -> bytes:
    """
    Derive uncompressed public key (65 bytes: 0x04 || x || y) from 32-byte private key.

    Args:
        privkey: 32-byte secp256k1 private key.

    Returns:
        65-byte uncompressed public key.
    """
    d = _privkey_scalar(privkey)
    return _encode_point(*_to_affine(_multiply(d, _G)))


def pubkey_to_address(pubkey: bytes) -> str:
    """
    Ethereum address of a public key.

    Args:
        pubkey: 64-byte x || y, or 65-byte uncompressed key with 0x04 prefix.

    Returns:
        "0x" plus 40 lower-case hex chars (last 20 bytes of keccak256(x || y)).
    """
    if len(pubkey) == 65 and pubkey[0] == 0x04:
        pubkey = pubkey[1:]
    if len(pubkey) != 64:
        raise ValueError("pubkey must be 64 bytes or 65 bytes with 0x04 prefix")
    return "0x" + keccak256(pubkey)[12:].hex()


def privkey_to_address(privkey: bytes) -> str:
    """Ethereum address (0x + 40 hex) of a 32-byte private key."""
    return pubkey_to_address(privkey_to_pubkey(privkey))


def recover_pubkey(msg_hash: bytes, r: int, s: int, recid: int) -> bytes:
    """
    Recover uncompressed public key (65 bytes) from ECDSA signature (msg_hash, r, s, recid).

    Args:
        msg_hash: 32-byte message hash that was signed.
        r, s: Signature components (scalars in [1, n-1]).
        recid: Recovery id (0-3): bit 0 is the parity of R.y, bit 1 means R.x = r + n.

    Returns:
        65-byte uncompressed public key.
    """
    if len(msg_hash) != 32:
        raise ValueError("msg_hash must be 32 bytes")
    if not 0 <= recid <= 3:
        raise ValueError(f"invalid recovery id {recid}")
    if not (0 < r < _N and 0 < s < _N):
        raise ValueError("signature scalar out of range")
    x = r + _N if recid & 2 else r
    if x >= _P:
        raise ValueError("R.x out of field range")
    alpha = (x * x * x + 7) % _P
    y = pow(alpha, (_P + 1) // 4, _P)
    if y * y % _P != alpha:
        raise ValueError("R.x is not on the curve")
    if (y & 1) != (recid & 1):
        y = _P - y
    r_inv = _mod_inv(r, _N)
    z = int.from_bytes(msg_hash, "big") % _N
    u1 = (-z * r_inv) % _N
    u2 = (s * r_inv) % _N
    q = _add(_multiply(u1, _G), _multiply(u2, (x, y, 1)))
    if q[2] == 0:
        raise ValueError("recovered point at infinity")
    return _encode_point(*_to_affine(q))


def sign_recoverable(privkey: bytes, msg_hash: bytes) -> tuple[int, int, int]:
    """
    ECDSA sign with recovery id; returns (r, s, v) with v in {27, 28}.

    The nonce is deterministic (RFC 6979) and s is normalized to the lower
    half of the curve order, so signing the same digest twice yields the same
    signature.

    Args:
        privkey: 32-byte private key.
        msg_hash: 32-byte message hash to sign.

    Returns:
        (r, s, v) where v is 27 + recovery id.
    """
    if len(msg_hash) != 32:
        raise ValueError("msg_hash must be 32 bytes")
    d = _privkey_scalar(privkey)
    z = int.from_bytes(msg_hash, "big") % _N
    for k in _rfc6979_nonces(d, msg_hash):
        rx, ry = _to_affine(_multiply(k, _G))
        r = rx % _N
        if r == 0:
            continue
        s = _mod_inv(k, _N) * (z + r * d) % _N
        if s == 0:
            continue
        recid = (ry & 1) | (2 if rx >= _N else 0)
        if s > _N // 2:
            s = _N - s
            recid ^= 1
        if recid > 1:
            # R.x overflowed n; not expressible with Ethereum's two-valued v
            continue
        return (r, s, 27 + recid)
    raise AssertionError("unreachable")


__all__: tuple[str, ...] = (
    "privkey_to_address",
    "privkey_to_pubkey",
    "pubkey_to_address",
    "recover_pubkey",
    "sign_recoverable",
)
