"""
Benchmark typed-data hashing and signing paths.
Reports time per call and peak memory (tracemalloc) per run.

Run after pip install -e .:

  python benchmarks/signing.py
"""

from __future__ import annotations

import time
import tracemalloc

from sigutil import (
    keccak256,
    personal_sign,
    recover_typed_signature,
    sign_typed_data,
    typed_data,
    typed_signature_hash,
)

N_TIME = 200
N_MEM = 50
PRIV = keccak256(b"bench key")
TYPED_DATA = {
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
        "name": "Bench",
        "version": "1",
        "chainId": 1,
        "verifyingContract": "0x" + "00" * 20,
    },
    "message": {
        "from": {"name": "A", "wallet": "0x" + "11" * 20},
        "to": {"name": "B", "wallet": "0x" + "22" * 20},
        "contents": "hello",
    },
}
LEGACY_DATA = [
    {"type": "string", "name": "message", "value": "hello"},
    {"type": "uint256", "name": "value", "value": 42},
]


def _time_per_call(fn, *args, n: int = N_TIME, **kwargs) -> float:
    for _ in range(5):
        fn(*args, **kwargs)
    start = time.perf_counter()
    for _ in range(n):
        fn(*args, **kwargs)
    return (time.perf_counter() - start) / n


def _peak_kb(fn, *args, n: int = N_MEM, **kwargs) -> float:
    tracemalloc.start()
    if hasattr(tracemalloc, "reset_peak"):
        tracemalloc.reset_peak()
    for _ in range(n):
        fn(*args, **kwargs)
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    return peak / 1024.0


def main() -> None:
    print("Benchmark: typed-data hashing and signing (pure Python)")
    print()

    sig = sign_typed_data(PRIV, {"data": TYPED_DATA})
    recover_params = {"data": TYPED_DATA, "sig": sig}
    print(f"  n = {N_TIME} (time), {N_MEM} (memory)")
    print()

    rows = [
        ("typed_data.sign", typed_data.sign, (TYPED_DATA,)),
        ("typed_signature_hash", typed_signature_hash, (LEGACY_DATA,)),
        ("sign_typed_data", sign_typed_data, (PRIV, {"data": TYPED_DATA})),
        ("recover_typed_signature", recover_typed_signature, (recover_params,)),
        ("personal_sign", personal_sign, (PRIV, {"data": b"hello"})),
    ]
    for name, fn, args in rows:
        t = _time_per_call(fn, *args) * 1000
        m = _peak_kb(fn, *args)
        print(f"  {name:<26} {t:8.4f} ms  peak {m:8.2f} KiB")


if __name__ == "__main__":
    main()
