"""Frozen dataclasses for unlinked and linked contract bytecode."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from linkdeploy.contracts.address import ADDRESS_LENGTH
from linkdeploy.errors import ArtifactLoadError

PLACEHOLDER_NAME_WIDTH = 36

# solc >= 0.5: "__$" + first 34 hex digits of keccak256(qualified name) + "$__"
_HASHED_PLACEHOLDER = re.compile(r"__\$[0-9a-f]{34}\$__")


def placeholder(qualified_name: str) -> str:
    """Legacy solc placeholder for a library: ``__<name, 36 chars>__``."""
    return f"__{qualified_name[:PLACEHOLDER_NAME_WIDTH]:_<{PLACEHOLDER_NAME_WIDTH}}__"


def is_placeholder(text: str, qualified_name: str) -> bool:
    """True for either the legacy or the hashed placeholder form.

    The hash in the hashed form is not recomputed; the recorded link
    reference already says which library the slot belongs to.
    """
    return text == placeholder(qualified_name) or _HASHED_PLACEHOLDER.fullmatch(text) is not None


@dataclass(frozen=True)
class LinkReference:
    """A library whose address must be written at ``offsets`` (in bytes)."""

    qualified_name: str  # "<source path>:<library>"
    offsets: tuple[int, ...]
    length: int = ADDRESS_LENGTH

    @property
    def library(self) -> str:
        return self.qualified_name.rpartition(":")[2]


@dataclass(frozen=True)
class BytecodeArtifact:
    """Creation bytecode that may still contain unresolved library slots.

    ``object`` is hex without ``0x``; every slot named by ``link_references``
    holds placeholder text until it is linked, so an unlinked artifact is
    not decodable as bytes.
    """

    object: str
    link_references: tuple[LinkReference, ...] = ()
    name: str = ""

    @property
    def is_unlinked(self) -> bool:
        return bool(self.link_references)

    @property
    def unresolved(self) -> tuple[str, ...]:
        return tuple(ref.qualified_name for ref in self.link_references)

    @classmethod
    def from_json(cls, data: dict[str, Any], name: str = "") -> BytecodeArtifact:
        """Parse a solc ``evm.bytecode`` object.

        ``linkReferences`` maps source path -> library -> list of
        ``{"start": int, "length": int}`` slots.
        """
        label = name or "<bytecode>"
        try:
            obj = data["object"]
            raw_refs = data.get("linkReferences") or {}
        except (KeyError, TypeError, AttributeError) as exc:
            raise ArtifactLoadError(label, f"missing field {exc}") from exc
        if not isinstance(obj, str):
            raise ArtifactLoadError(label, "bytecode object is not a string")
        obj = obj[2:] if obj.startswith("0x") else obj
        if len(obj) % 2:
            raise ArtifactLoadError(label, "odd-length bytecode object")

        refs: list[LinkReference] = []
        for source, libraries in raw_refs.items():
            for library, slots in libraries.items():
                qualified = f"{source}:{library}"
                offsets = []
                for slot in slots:
                    try:
                        start, length = int(slot["start"]), int(slot["length"])
                    except (KeyError, TypeError, ValueError) as exc:
                        raise ArtifactLoadError(label, f"bad slot for {qualified}: {slot!r}") from exc
                    if length != ADDRESS_LENGTH:
                        raise ArtifactLoadError(label, f"{qualified} slot at {start} is {length} bytes")
                    text = obj[start * 2 : (start + length) * 2]
                    if not is_placeholder(text, qualified):
                        raise ArtifactLoadError(
                            label, f"no placeholder for {qualified} at byte {start}"
                        )
                    offsets.append(start)
                refs.append(LinkReference(qualified, tuple(offsets)))

        return cls(object=obj, link_references=tuple(refs), name=name)


@dataclass(frozen=True)
class ResolvedArtifact:
    """Fully linked creation bytecode, ready to broadcast."""

    bytecode: bytes
    name: str = ""

    @property
    def hex(self) -> str:
        return f"0x{self.bytecode.hex()}"
