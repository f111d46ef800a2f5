"""
Ethereum-style signing utilities: EIP-712 typed-data hashing, legacy typed
data, personal messages. Pure Python keccak256 and secp256k1; no eth_account
dependency.
"""

from .__about__ import __version__
from .curves import (
    privkey_to_address,
    privkey_to_pubkey,
    pubkey_to_address,
    recover_pubkey,
    sign_recoverable,
)
from .errors import (
    InvalidNormalizeInputError,
    MalformedLegacyEntryError,
    SchemaViolationError,
    TypedDataError,
    UnresolvedTypeError,
    UnsupportedFeatureError,
)
from .hashes import keccak256
from .signing import (
    TYPED_MESSAGE_SCHEMA,
    concat_sig,
    extract_public_key,
    hash_personal_message,
    normalize,
    personal_sign,
    recover_personal_signature,
    recover_typed_signature,
    recover_typed_signature_legacy,
    sign_typed_data,
    sign_typed_data_legacy,
    typed_data,
    typed_signature_hash,
    typed_signature_hash_hex,
)

__all__: tuple[str, ...] = (
    # About
    "__version__",
    # Hashes
    "keccak256",
    # Curves: secp256k1
    "privkey_to_address",
    "privkey_to_pubkey",
    "pubkey_to_address",
    "recover_pubkey",
    "sign_recoverable",
    # Errors
    "InvalidNormalizeInputError",
    "MalformedLegacyEntryError",
    "SchemaViolationError",
    "TypedDataError",
    "UnresolvedTypeError",
    "UnsupportedFeatureError",
    # Signing: EIP-712 typed data
    "TYPED_MESSAGE_SCHEMA",
    "typed_data",
    "sign_typed_data",
    "recover_typed_signature",
    # Signing: legacy typed data
    "typed_signature_hash",
    "typed_signature_hash_hex",
    "sign_typed_data_legacy",
    "recover_typed_signature_legacy",
    # Signing: personal messages
    "hash_personal_message",
    "personal_sign",
    "recover_personal_signature",
    "extract_public_key",
    # Signature helpers
    "concat_sig",
    "normalize",
)
