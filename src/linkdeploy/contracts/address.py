"""Fixed-width contract address value."""

from __future__ import annotations

import re
from dataclasses import dataclass

ADDRESS_LENGTH = 20

_HEX_ADDRESS = re.compile(r"^(?:0[xX])?([0-9a-fA-F]{40})$")


@dataclass(frozen=True, order=True)
class Address:
    """A 20-byte address of a deployed contract."""

    raw: bytes

    def __post_init__(self) -> None:
        if len(self.raw) != ADDRESS_LENGTH:
            raise ValueError(f"address must be {ADDRESS_LENGTH} bytes, got {len(self.raw)}")

    @classmethod
    def from_hex(cls, value: str) -> Address:
        match = _HEX_ADDRESS.match(value.strip())
        if match is None:
            raise ValueError(f"not a 20-byte hex address: {value!r}")
        return cls(bytes.fromhex(match.group(1)))

    @classmethod
    def from_bytes(cls, value: bytes) -> Address:
        return cls(bytes(value))

    @property
    def hex(self) -> str:
        """Lowercase hex digits without the ``0x`` prefix."""
        return self.raw.hex()

    def __str__(self) -> str:
        return f"0x{self.raw.hex()}"

    def __repr__(self) -> str:
        return f"Address({self})"
