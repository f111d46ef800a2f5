"""
Sign and recover personal messages and typed data (legacy and EIP-712).

msg_params are mappings with "data" (the message) and, for recovery, "sig"
(a 0x-prefixed 65-byte r || s || v signature).
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..curves import pubkey_to_address, sign_recoverable
from ..serde import bytes_to_hex, to_bytes
from . import typed_data
from .legacy import typed_signature_hash
from .personal import hash_personal_message
from .signature import concat_sig, recover_public_key

logger = logging.getLogger(__name__)


def _ecsign(private_key: bytes | str, msg_hash: bytes) -> str:
    r, s, v = sign_recoverable(to_bytes(private_key), msg_hash)
    return concat_sig(v, r, s)


def _recover_address(msg_hash: bytes, sig: object) -> str:
    address = pubkey_to_address(recover_public_key(msg_hash, sig))
    logger.debug("Recovered signer %s for digest %s", address, msg_hash.hex())
    return address


def _personal_message_hash(msg_params: Mapping[str, Any]) -> bytes:
    return hash_personal_message(to_bytes(msg_params["data"]))


def personal_sign(private_key: bytes | str, msg_params: Mapping[str, Any]) -> str:
    """
    Sign msg_params["data"] with the personal message prefix.

    Args:
        private_key: 32-byte private key (bytes or 0x hex).
        msg_params: {"data": message as bytes, 0x hex or text}.

    Returns:
        0x-prefixed 65-byte signature.
    """
    return _ecsign(private_key, _personal_message_hash(msg_params))


def recover_personal_signature(msg_params: Mapping[str, Any]) -> str:
    """Address that produced msg_params["sig"] over the personal message msg_params["data"]."""
    return _recover_address(_personal_message_hash(msg_params), msg_params["sig"])


def extract_public_key(msg_params: Mapping[str, Any]) -> str:
    """0x-prefixed 64-byte public key that produced a personal signature."""
    pubkey = recover_public_key(_personal_message_hash(msg_params), msg_params["sig"])
    return "0x" + pubkey.hex()


def typed_signature_hash_hex(typed_data_v1: list[Mapping[str, Any]]) -> str:
    """Legacy typed-data digest as 0x hex."""
    return bytes_to_hex(typed_signature_hash(typed_data_v1))


def sign_typed_data_legacy(
    private_key: bytes | str, msg_params: Mapping[str, Any]
) -> str:
    """Sign legacy typed data (list of {name, type, value}) in msg_params["data"]."""
    msg_hash = typed_signature_hash(msg_params["data"])
    logger.debug("Signing legacy typed data digest %s", msg_hash.hex())
    return _ecsign(private_key, msg_hash)


def recover_typed_signature_legacy(msg_params: Mapping[str, Any]) -> str:
    """Signer address of a legacy typed-data signature."""
    msg_hash = typed_signature_hash(msg_params["data"])
    return _recover_address(msg_hash, msg_params["sig"])


def sign_typed_data(private_key: bytes | str, msg_params: Mapping[str, Any]) -> str:
    """
    Sign EIP-712 typed data.

    Args:
        private_key: 32-byte private key (bytes or 0x hex).
        msg_params: {"data": {"types", "primaryType", "domain", "message"}}.

    Returns:
        0x-prefixed 65-byte signature over typed_data.sign(data).
    """
    msg_hash = typed_data.sign(msg_params["data"])
    logger.debug("Signing typed data digest %s", msg_hash.hex())
    return _ecsign(private_key, msg_hash)


def recover_typed_signature(msg_params: Mapping[str, Any]) -> str:
    """Signer address of an EIP-712 typed-data signature."""
    msg_hash = typed_data.sign(msg_params["data"])
    return _recover_address(msg_hash, msg_params["sig"])


__all__: tuple[str, ...] = (
    "extract_public_key",
    "personal_sign",
    "recover_personal_signature",
    "recover_typed_signature",
    "recover_typed_signature_legacy",
    "sign_typed_data",
    "sign_typed_data_legacy",
    "typed_signature_hash_hex",
)
