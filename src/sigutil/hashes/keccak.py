"""
Keccak-256 (original Keccak padding, 256-bit output) as used by Ethereum.

Note this is not NIST SHA3-256: the domain padding byte is 0x01, not 0x06.
"""

from __future__ import annotations

_MASK64 = 0xFFFFFFFFFFFFFFFF
_RATE = 136  # bytes absorbed per permutation (1088-bit rate)
_DIGEST_SIZE = 32

_ROUND_CONSTANTS = (
    0x0000000000000001,
    0x0000000000008082,
    0x800000000000808A,
    0x8000000080008000,
    0x000000000000808B,
    0x0000000080000001,
    0x8000000080008081,
    0x8000000000008009,
    0x000000000000008A,
    0x0000000000000088,
    0x0000000080008009,
    0x000000008000000A,
    0x000000008000808B,
    0x800000000000008B,
    0x8000000000008089,
    0x8000000000008003,
    0x8000000000008002,
    0x8000000000000080,
    0x000000000000800A,
    0x800000008000000A,
    0x8000000080008081,
    0x8000000000008080,
    0x0000000080000001,
    0x8000000080008008,
)

# Rotation offset of lane (x, y), stored at index x + 5 * y.
_ROTATION_OFFSETS = (
    0, 1, 62, 28, 27,
    36, 44, 6, 55, 20,
    3, 10, 43, 25, 39,
    41, 45, 15, 21, 8,
    18, 2, 61, 56, 14,
)  # fmt: skip

# (source lane, destination lane, rotation) for the combined rho and pi steps:
# B[y, 2x + 3y] = rot(A[x, y], r[x, y]).
_RHO_PI = tuple(
    (x + 5 * y, y + 5 * ((2 * x + 3 * y) % 5), _ROTATION_OFFSETS[x + 5 * y])
    for y in range(5)
    for x in range(5)
)


def _rotl(v: int, n: int) -> int:
    if n == 0:
        return v
    return ((v << n) | (v >> (64 - n))) & _MASK64


def _permute(a: list[int]) -> None:
    """Keccak-f[1600] over a flat 25-lane state, in place."""
    b = [0] * 25
    for rc in _ROUND_CONSTANTS:
        # theta
        c = [a[x] ^ a[x + 5] ^ a[x + 10] ^ a[x + 15] ^ a[x + 20] for x in range(5)]
        for x in range(5):
            d = c[(x - 1) % 5] ^ _rotl(c[(x + 1) % 5], 1)
            for y in range(0, 25, 5):
                a[x + y] ^= d
        # rho, pi
        for src, dst, rot in _RHO_PI:
            b[dst] = _rotl(a[src], rot)
        # chi
        for y in range(0, 25, 5):
            b0, b1, b2, b3, b4 = b[y], b[y + 1], b[y + 2], b[y + 3], b[y + 4]
            a[y] = b0 ^ (~b1 & b2)
            a[y + 1] = b1 ^ (~b2 & b3)
            a[y + 2] = b2 ^ (~b3 & b4)
            a[y + 3] = b3 ^ (~b4 & b0)
            a[y + 4] = b4 ^ (~b0 & b1)
        # iota
        a[0] ^= rc


def _absorb_block(state: list[int], block: bytes | bytearray) -> None:
    for i in range(_RATE // 8):
        state[i] ^= int.from_bytes(block[8 * i : 8 * i + 8], "little")
    _permute(state)


class Keccak256:
    """Incremental Keccak-256 with a hashlib-like interface."""

    name = "keccak256"
    digest_size = _DIGEST_SIZE
    block_size = _RATE

    def __init__(self, data: bytes = b"") -> None:
        self._state = [0] * 25
        self._buffer = bytearray()
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        self._buffer += data
        if len(self._buffer) < _RATE:
            return
        full = len(self._buffer) - len(self._buffer) % _RATE
        for off in range(0, full, _RATE):
            _absorb_block(self._state, self._buffer[off : off + _RATE])
        del self._buffer[:full]

    def copy(self) -> Keccak256:
        other = Keccak256()
        other._state = list(self._state)
        other._buffer = bytearray(self._buffer)
        return other

    def digest(self) -> bytes:
        state = list(self._state)
        last = bytearray(self._buffer)
        last += bytes(_RATE - len(last))
        last[len(self._buffer)] ^= 0x01
        last[-1] ^= 0x80
        _absorb_block(state, last)
        return b"".join(lane.to_bytes(8, "little") for lane in state[:4])

    def hexdigest(self) -> str:
        return self.digest().hex()


def keccak256(data: bytes) -> bytes:
    """
    Keccak-256 hash of data.

    Args:
        data: Input bytes (any length).

    Returns:
        32-byte digest.
    """
    return Keccak256(bytes(data)).digest()


__all__: tuple[str, ...] = ("Keccak256", "keccak256")
