#!/usr/bin/env python3
"""Example: hash, sign and recover EIP-712 typed data."""

from sigutil import (
    keccak256,
    privkey_to_address,
    recover_typed_signature,
    sign_typed_data,
    typed_data,
)

privkey = keccak256(b"cow")
address = privkey_to_address(privkey)
print("Signer address:", address)

full_message = {
    "types": {
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
    },
    "primaryType": "Mail",
    "domain": {
        "name": "Ether Mail",
        "version": "1",
        "chainId": 1,
        "verifyingContract": "0x" + "cc" * 20,
    },
    "message": {
        "from": {"name": "Cow", "wallet": address},
        "to": {"name": "Bob", "wallet": "0x" + "bb" * 20},
        "contents": "Hello, Bob!",
    },
}

print("Type string:", typed_data.encode_type("Mail", full_message["types"]))
print("EIP-712 hash to sign:", typed_data.sign(full_message).hex())

sig = sign_typed_data(privkey, {"data": full_message})
print("Signature:", sig)
print("Recovered:", recover_typed_signature({"data": full_message, "sig": sig}))
