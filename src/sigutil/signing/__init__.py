"""Signing schemas: EIP-712 typed data, legacy typed data, personal messages."""

from . import typed_data
from .legacy import typed_signature_hash
from .personal import hash_personal_message
from .schema import TYPED_MESSAGE_SCHEMA, validate_typed_message
from .sig_util import (
    extract_public_key,
    personal_sign,
    recover_personal_signature,
    recover_typed_signature,
    recover_typed_signature_legacy,
    sign_typed_data,
    sign_typed_data_legacy,
    typed_signature_hash_hex,
)
from .signature import concat_sig, ecrecover, from_rpc_sig, normalize

__all__: tuple[str, ...] = (
    "TYPED_MESSAGE_SCHEMA",
    "concat_sig",
    "ecrecover",
    "extract_public_key",
    "from_rpc_sig",
    "hash_personal_message",
    "normalize",
    "personal_sign",
    "recover_personal_signature",
    "recover_typed_signature",
    "recover_typed_signature_legacy",
    "sign_typed_data",
    "sign_typed_data_legacy",
    "typed_data",
    "typed_signature_hash",
    "typed_signature_hash_hex",
    "validate_typed_message",
)
