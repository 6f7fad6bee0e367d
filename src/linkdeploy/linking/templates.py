"""Bytecode templates shipped inside the package.

The light client contracts link against external libraries, so their
bytecode cannot be inlined in generated bindings the usual way. The
unlinked objects are kept here as constants, in solc ``evm.bytecode``
form (``LightClient`` with hashed placeholders, ``LightClientMock`` with
legacy ones), so the deployer never reads contract artifacts from disk.
"""

from __future__ import annotations

from typing import Any

from linkdeploy.errors import ArtifactLoadError
from linkdeploy.linking.artifact import BytecodeArtifact

PLONK_VERIFIER_LIB = "contracts/src/libraries/PlonkVerifier.sol:PlonkVerifier"
STATE_UPDATE_VK_LIB = "contracts/src/libraries/LightClientStateUpdateVK.sol:LightClientStateUpdateVK"
STATE_UPDATE_VK_MOCK_LIB = (
    "contracts/tests/mocks/LightClientStateUpdateVKMock.sol:LightClientStateUpdateVKMock"
)

# Library creation code: deploys a runtime that only accepts delegate calls.
_LIBRARY_PREAMBLE = (
    "60566050600b82828239805160001a6073146043577f4e487b71000000000000000000000000"
    "00000000000000000000000000000000600052600060045260246000fd5b3060005260738153"
    "8281f3fe73000000000000000000000000000000000000000030146080604052600080fdfe"
)

TEMPLATES: dict[str, dict[str, Any]] = {
    "PlonkVerifier": {
        "object": _LIBRARY_PREAMBLE + "a26469706673582212201d5f3ba4c6f2b0e7a1d9c8e4f3b2a1906c5d4e3f2a1b0c9d8e7f6a5b4c3d2e1f64736f6c63430008170033",
        "linkReferences": {},
    },
    "LightClientStateUpdateVK": {
        "object": _LIBRARY_PREAMBLE + "a2646970667358221220c3b1a2d4e5f60718293a4b5c6d7e8f90a1b2c3d4e5f60718293a4b5c6d7e8f9064736f6c63430008170033",
        "linkReferences": {},
    },
    "LightClientStateUpdateVKMock": {
        "object": _LIBRARY_PREAMBLE + "a26469706673582212207a6b5c4d3e2f1a0b9c8d7e6f5a4b3c2d1e0f9a8b7c6d5e4f3a2b1c0d9e8f7a6b64736f6c63430008170033",
        "linkReferences": {},
    },
    "LightClient": {
        "object": (
            "608060405234801561001057600080fd5b50"
            "73__$9b5f6cc0b6b4b51e3c2a2e1ee3ec1e43f1$__50"
            "73__$2f3e8f4ab7a4c8bd1e61f0c9a5d7a2b6c3$__50"
            "610120806100666000396000f3fe6080604052600080fdfea164736f6c6343000817000a"
        ),
        "linkReferences": {
            "contracts/src/libraries/PlonkVerifier.sol": {
                "PlonkVerifier": [{"start": 19, "length": 20}],
            },
            "contracts/src/libraries/LightClientStateUpdateVK.sol": {
                "LightClientStateUpdateVK": [{"start": 41, "length": 20}],
            },
        },
    },
    "LightClientMock": {
        "object": (
            "608060405234801561001057600080fd5b50"
            "73__contracts/src/libraries/PlonkVerifie__50"
            "73__contracts/tests/mocks/LightClientSta__50"
            "73__contracts/src/libraries/PlonkVerifie__50"
            "610140806100806000396000f3fe6080604052600080fdfea164736f6c6343000817000a"
        ),
        "linkReferences": {
            "contracts/src/libraries/PlonkVerifier.sol": {
                "PlonkVerifier": [{"start": 19, "length": 20}, {"start": 63, "length": 20}],
            },
            "contracts/tests/mocks/LightClientStateUpdateVKMock.sol": {
                "LightClientStateUpdateVKMock": [{"start": 41, "length": 20}],
            },
        },
    },
}


def load_template(name: str) -> BytecodeArtifact:
    """Parse the embedded template ``name`` into a ``BytecodeArtifact``."""
    try:
        data = TEMPLATES[name]
    except KeyError:
        raise ArtifactLoadError(name, "no such embedded template") from None
    return BytecodeArtifact.from_json(data, name=name)


def available_templates() -> list[str]:
    return sorted(TEMPLATES)
