"""
Personal message hash (EIP-191 version 0x45, as used by personal_sign).
"""

from __future__ import annotations

from ..hashes import keccak256

PERSONAL_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n"


def hash_personal_message(message: bytes) -> bytes:
    """
    keccak256(prefix || decimal length of message || message).

    Args:
        message: Raw message bytes.

    Returns:
        32-byte digest.
    """
    length = str(len(message)).encode("ascii")
    return keccak256(PERSONAL_MESSAGE_PREFIX + length + message)


__all__: tuple[str, ...] = ("PERSONAL_MESSAGE_PREFIX", "hash_personal_message")
