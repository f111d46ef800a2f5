"""Tests for EIP-712 typed-data encoding and hashing."""

from __future__ import annotations

import copy

import pytest

from sigutil import (
    SchemaViolationError,
    TypedDataError,
    UnresolvedTypeError,
    UnsupportedFeatureError,
    keccak256,
)
from sigutil.signing import typed_data

# --- EIP-712 "Ether Mail" example ---
MAIL_TYPES = {
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ],
    "Person": [
        {"name": "name", "type": "string"},
        {"name": "wallet", "type": "address"},
    ],
    "Mail": [
        {"name": "from", "type": "Person"},
        {"name": "to", "type": "Person"},
        {"name": "contents", "type": "string"},
    ],
}
MAIL_TYPED_DATA = {
    "types": MAIL_TYPES,
    "primaryType": "Mail",
    "domain": {
        "name": "Ether Mail",
        "version": "1",
        "chainId": 1,
        "verifyingContract": "0xCcCCccccCCCCcCCCCCCcCcCccCcCCCcCcccccccC",
    },
    "message": {
        "from": {"name": "Cow", "wallet": "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826"},
        "to": {"name": "Bob", "wallet": "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB"},
        "contents": "Hello, Bob!",
    },
}
MAIL_ENCODED_TYPE = "Mail(Person from,Person to,string contents)Person(string name,address wallet)"
MAIL_TYPE_HASH = "a0cedeb2dc280ba39b857546d74f5549c3a1d7bdc2dd96bf881f76108e23dac2"
MAIL_ENCODED_DATA = (
    "a0cedeb2dc280ba39b857546d74f5549c3a1d7bdc2dd96bf881f76108e23dac2"
    "fc71e5fa27ff56c350aa531bc129ebdf613b772b6604664f5d8dbe21b85eb0c8"
    "cd54f074a4af31b4411ff6a60c9719dbd559c221c8ac3492d9d872b041d703d1"
    "b5aadf3154a261abdd9086fc627b61efca26ae5702701d05cd2305f7c52a2fc8"
)
MAIL_STRUCT_HASH = "c52c0ee5d84264471806290a3f2c4cecfc5490626bf912d01f240d7a274b371e"
MAIL_DOMAIN_HASH = "f2cee375fa42b42143804025fc449deafd50cc031ca257e0b194a650a912090f"
MAIL_DIGEST = "be609aee343fb3c4b28e1df9e632fca64fcfaede20f02e86244efddf30957bd2"

# --- Minimal Person vector ---
PERSON_TYPED_DATA = {
    "types": {
        "EIP712Domain": [{"name": "name", "type": "string"}],
        "Person": [
            {"name": "name", "type": "string"},
            {"name": "wallet", "type": "address"},
        ],
    },
    "primaryType": "Person",
    "domain": {"name": "Test"},
    "message": {
        "name": "Alice",
        "wallet": "0x0000000000000000000000000000000000000001",
    },
}


def test_encode_type_mail() -> None:
    assert typed_data.encode_type("Mail", MAIL_TYPES) == MAIL_ENCODED_TYPE


def test_hash_type_mail() -> None:
    assert typed_data.hash_type("Mail", MAIL_TYPES).hex() == MAIL_TYPE_HASH


def test_encode_data_mail() -> None:
    message = MAIL_TYPED_DATA["message"]
    assert typed_data.encode_data("Mail", message, MAIL_TYPES).hex() == MAIL_ENCODED_DATA


def test_hash_struct_mail() -> None:
    message = MAIL_TYPED_DATA["message"]
    assert typed_data.hash_struct("Mail", message, MAIL_TYPES).hex() == MAIL_STRUCT_HASH


def test_hash_struct_domain() -> None:
    domain = MAIL_TYPED_DATA["domain"]
    assert typed_data.hash_struct("EIP712Domain", domain, MAIL_TYPES).hex() == MAIL_DOMAIN_HASH


def test_sign_mail() -> None:
    assert typed_data.sign(MAIL_TYPED_DATA).hex() == MAIL_DIGEST


def test_sign_is_deterministic() -> None:
    digest = typed_data.sign(PERSON_TYPED_DATA)
    assert len(digest) == 32
    assert typed_data.sign(copy.deepcopy(PERSON_TYPED_DATA)) == digest


def test_sign_changes_with_message() -> None:
    bob = copy.deepcopy(PERSON_TYPED_DATA)
    bob["message"]["name"] = "Bob"
    assert typed_data.sign(bob) != typed_data.sign(PERSON_TYPED_DATA)


def test_sign_uses_structured_prefix() -> None:
    types = PERSON_TYPED_DATA["types"]
    domain_hash = typed_data.hash_struct("EIP712Domain", PERSON_TYPED_DATA["domain"], types)
    message_hash = typed_data.hash_struct("Person", PERSON_TYPED_DATA["message"], types)
    digest = typed_data.sign(PERSON_TYPED_DATA)
    assert digest == keccak256(b"\x19\x01" + domain_hash + message_hash)
    assert digest != keccak256(domain_hash + message_hash)


def test_sign_ignores_extra_top_level_keys() -> None:
    noisy = dict(PERSON_TYPED_DATA, extra={"anything": 1}, signature="0x00")
    assert typed_data.sign(noisy) == typed_data.sign(PERSON_TYPED_DATA)


def test_sanitize_data_keeps_known_keys_only() -> None:
    noisy = dict(PERSON_TYPED_DATA, extra=1)
    sanitized = typed_data.sanitize_data(noisy)
    assert set(sanitized) == {"types", "primaryType", "domain", "message"}
    assert "extra" in noisy


@pytest.mark.parametrize("missing", ["types", "primaryType", "domain", "message"])
def test_sign_rejects_missing_top_level_key(missing: str) -> None:
    incomplete = {k: v for k, v in PERSON_TYPED_DATA.items() if k != missing}
    with pytest.raises(SchemaViolationError):
        typed_data.sign(incomplete)


@pytest.mark.parametrize("value", [None, [], "x", 42])
def test_sign_rejects_non_mapping(value: object) -> None:
    with pytest.raises(SchemaViolationError, match="expected an object"):
        typed_data.sign(value)


def test_sign_rejects_field_without_type() -> None:
    bad = copy.deepcopy(PERSON_TYPED_DATA)
    bad["types"]["Person"][1] = {"name": "wallet"}
    with pytest.raises(SchemaViolationError):
        typed_data.sign(bad)


def test_sign_requires_domain_type() -> None:
    bad = copy.deepcopy(PERSON_TYPED_DATA)
    del bad["types"]["EIP712Domain"]
    with pytest.raises(UnresolvedTypeError) as exc_info:
        typed_data.sign(bad)
    assert exc_info.value.type_name == "EIP712Domain"


def test_type_order_independence() -> None:
    reordered = dict(reversed(list(MAIL_TYPES.items())))
    assert typed_data.encode_type("Mail", reordered) == MAIL_ENCODED_TYPE


def test_field_order_sensitivity() -> None:
    swapped = copy.deepcopy(MAIL_TYPES)
    swapped["Person"].reverse()
    assert typed_data.encode_type("Mail", swapped) != MAIL_ENCODED_TYPE
    assert typed_data.hash_type("Mail", swapped) != typed_data.hash_type("Mail", MAIL_TYPES)


def test_encode_type_sorts_dependencies_only() -> None:
    types = {
        "Root": [
            {"name": "z", "type": "Zeta"},
            {"name": "a", "type": "Alpha"},
        ],
        "Zeta": [{"name": "v", "type": "uint8"}],
        "Alpha": [{"name": "w", "type": "bool"}],
    }
    assert (
        typed_data.encode_type("Root", types)
        == "Root(Zeta z,Alpha a)Alpha(bool w)Zeta(uint8 v)"
    )


def test_find_type_dependencies_order_and_dedup() -> None:
    deps = typed_data.find_type_dependencies("Mail", MAIL_TYPES)
    assert deps == ["Mail", "Person"]


def test_find_type_dependencies_cycle() -> None:
    types = {
        "A": [{"name": "b", "type": "B"}],
        "B": [{"name": "a", "type": "A"}, {"name": "self", "type": "B"}],
    }
    assert typed_data.find_type_dependencies("A", types) == ["A", "B"]
    assert typed_data.encode_type("A", types) == "A(B b)B(A a,B self)"


def test_find_type_dependencies_elementary_root() -> None:
    assert typed_data.find_type_dependencies("uint256", MAIL_TYPES) == []
    assert typed_data.find_type_dependencies("uint256", MAIL_TYPES, ["X"]) == ["X"]


def test_encode_type_missing_definition() -> None:
    with pytest.raises(UnresolvedTypeError, match="Person") as exc_info:
        typed_data.encode_type("Person", {})
    assert exc_info.value.type_name == "Person"
    assert isinstance(exc_info.value, TypedDataError)
    assert isinstance(exc_info.value, ValueError)


def test_encode_data_rejects_arrays() -> None:
    types = {"Batch": [{"name": "amounts", "type": "uint256[]"}]}
    with pytest.raises(UnsupportedFeatureError) as exc_info:
        typed_data.encode_data("Batch", {"amounts": [1, 2]}, types)
    assert exc_info.value.field_name == "amounts"


def test_encode_data_skips_absent_fields() -> None:
    types = {
        "Order": [
            {"name": "amount", "type": "uint256"},
            {"name": "memo", "type": "string"},
        ]
    }
    full = typed_data.encode_data("Order", {"amount": 5, "memo": "hi"}, types)
    partial = typed_data.encode_data("Order", {"amount": 5}, types)
    assert len(full) == 3 * 32
    assert len(partial) == 2 * 32
    assert partial == full[:64]
    # An absent array field is skipped before it can be rejected.
    array_types = {"Batch": [{"name": "amounts", "type": "uint256[]"}]}
    assert len(typed_data.encode_data("Batch", {}, array_types)) == 32


def test_encode_data_absent_differs_from_zero() -> None:
    types = {"Counter": [{"name": "value", "type": "uint256"}]}
    assert typed_data.hash_struct("Counter", {}, types) != typed_data.hash_struct(
        "Counter", {"value": 0}, types
    )


def test_encode_data_hashes_string_and_bytes() -> None:
    types = {
        "Blob": [
            {"name": "label", "type": "string"},
            {"name": "payload", "type": "bytes"},
        ]
    }
    encoded = typed_data.encode_data(
        "Blob", {"label": "hello", "payload": "0xdeadbeef"}, types
    )
    assert encoded[32:64] == keccak256(b"hello")
    assert encoded[64:96] == keccak256(bytes.fromhex("deadbeef"))


def test_encode_data_elementary_words() -> None:
    types = {
        "Flags": [
            {"name": "on", "type": "bool"},
            {"name": "delta", "type": "int8"},
            {"name": "tag", "type": "bytes4"},
        ]
    }
    encoded = typed_data.encode_data(
        "Flags", {"on": True, "delta": -1, "tag": "0x01020304"}, types
    )
    assert encoded[32:64] == (1).to_bytes(32, "big")
    assert encoded[64:96] == b"\xff" * 32
    assert encoded[96:128] == bytes([1, 2, 3, 4]) + bytes(28)


def test_nested_struct_is_hashed_not_inlined() -> None:
    person = MAIL_TYPED_DATA["message"]["from"]
    encoded = typed_data.encode_data("Mail", MAIL_TYPED_DATA["message"], MAIL_TYPES)
    assert encoded[32:64] == typed_data.hash_struct("Person", person, MAIL_TYPES)
