"""Static ABI encoding for constructor arguments.

Only static types are supported: unsigned integers, bools, addresses,
``bytes32`` and tuples (or dataclasses) made of those. That covers every
constructor this tool deploys.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from linkdeploy.contracts.address import Address

WORD_SIZE = 32
_UINT256_MAX = 2**256 - 1


def encode_word(value: Any) -> bytes:
    """Encode a single static value as a 32-byte word."""
    if isinstance(value, bool):
        return int(value).to_bytes(WORD_SIZE, "big")
    if isinstance(value, int):
        if value < 0 or value > _UINT256_MAX:
            raise ValueError(f"value out of uint256 range: {value}")
        return value.to_bytes(WORD_SIZE, "big")
    if isinstance(value, Address):
        return value.raw.rjust(WORD_SIZE, b"\x00")
    if isinstance(value, (bytes, bytearray)):
        if len(value) != WORD_SIZE:
            raise ValueError(f"only bytes32 is supported, got {len(value)} bytes")
        return bytes(value)
    raise TypeError(f"cannot ABI-encode {type(value).__name__} as a static word")


def encode_args(args: Any) -> bytes:
    """Encode a sequence of static arguments, flattening nested tuples in place."""
    if dataclasses.is_dataclass(args) and not isinstance(args, type):
        args = tuple(getattr(args, f.name) for f in dataclasses.fields(args))
    if isinstance(args, (tuple, list)):
        return b"".join(encode_args(item) for item in args)
    return encode_word(args)
