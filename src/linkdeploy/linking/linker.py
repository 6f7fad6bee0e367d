"""Library linking for contract creation bytecode."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace

from linkdeploy.contracts.address import Address
from linkdeploy.contracts.ids import Contract
from linkdeploy.errors import ArtifactLoadError, LinkingError
from linkdeploy.linking.artifact import BytecodeArtifact, LinkReference, ResolvedArtifact
from linkdeploy.utils.logging import get_logger

log = get_logger(__name__)


def apply_link(
    artifact: BytecodeArtifact,
    qualified_name: str,
    address: Address,
    contract: Contract | None = None,
) -> BytecodeArtifact:
    """Write ``address`` into every slot reserved for ``qualified_name``.

    References to other libraries are kept. Linking a name the artifact does
    not reference returns it unchanged.
    """
    matching = [ref for ref in artifact.link_references if ref.qualified_name == qualified_name]
    if not matching:
        return artifact

    chars = list(artifact.object)
    for ref in matching:
        for offset in ref.offsets:
            start, end = offset * 2, (offset + ref.length) * 2
            if offset < 0 or end > len(chars):
                raise LinkingError(
                    qualified_name,
                    contract,
                    detail=f"slot for {qualified_name} at byte {offset} is outside the bytecode",
                )
            chars[start:end] = address.hex

    remaining: tuple[LinkReference, ...] = tuple(
        ref for ref in artifact.link_references if ref.qualified_name != qualified_name
    )
    log.debug("library_linked", artifact=artifact.name, library=qualified_name, address=str(address))
    return replace(artifact, object="".join(chars), link_references=remaining)


def assert_fully_linked(artifact: BytecodeArtifact, contract: Contract | None = None) -> ResolvedArtifact:
    """Return deployable bytes, or fail naming the first unresolved library."""
    if artifact.link_references:
        raise LinkingError(artifact.link_references[0].qualified_name, contract)
    try:
        bytecode = bytes.fromhex(artifact.object)
    except ValueError as exc:
        raise ArtifactLoadError(artifact.name or "<bytecode>", f"invalid hex: {exc}") from exc
    return ResolvedArtifact(bytecode=bytecode, name=artifact.name)


def link_libraries(
    artifact: BytecodeArtifact,
    libraries: Mapping[str, Address],
    contract: Contract | None = None,
) -> ResolvedArtifact:
    """Link every library in ``libraries`` and check nothing is left over."""
    for qualified_name, address in libraries.items():
        artifact = apply_link(artifact, qualified_name, address, contract)
    return assert_fully_linked(artifact, contract)
