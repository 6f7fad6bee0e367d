"""Deployment procedures for the light client contract and its libraries."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial

from linkdeploy.contracts.address import Address
from linkdeploy.contracts.ids import Contract
from linkdeploy.deploy.backend import CreationTransaction
from linkdeploy.deploy.orchestrator import Deployer
from linkdeploy.linking.linker import assert_fully_linked, link_libraries
from linkdeploy.linking.templates import (
    PLONK_VERIFIER_LIB,
    STATE_UPDATE_VK_LIB,
    STATE_UPDATE_VK_MOCK_LIB,
    load_template,
)

# max_blocks_per_epoch value that disables epoch bounds checks
MAX_BLOCKS_PER_EPOCH_DISABLED = 2**32 - 1


@dataclass(frozen=True)
class LightClientState:
    view_num: int
    block_height: int
    block_comm_root: int
    fee_ledger_comm: int
    stake_table_bls_key_comm: int
    stake_table_schnorr_key_comm: int
    stake_table_amount_comm: int
    threshold: int

    @classmethod
    def dummy_genesis(cls) -> LightClientState:
        """Fixed genesis state used when a test deployment supplies none."""
        return cls(
            view_num=0,
            block_height=0,
            block_comm_root=0,
            fee_ledger_comm=0,
            stake_table_bls_key_comm=123,
            stake_table_schnorr_key_comm=123,
            stake_table_amount_comm=20,
            threshold=1,
        )


MockConstructorArgs = tuple[LightClientState, int]


def library_transaction(template: str) -> CreationTransaction:
    """Creation transaction for an embedded, already fully linked library."""
    return CreationTransaction(assert_fully_linked(load_template(template)).bytecode)


async def deploy_library(deployer: Deployer, name: Contract, template: str) -> Address:
    """Deploy a library, loading its template only if it is not deployed yet."""

    async def _deploy(d: Deployer) -> Address:
        return await d.broadcast(library_transaction(template))

    return await deployer.deploy_fn(name, _deploy)


async def deploy_light_client_contract(deployer: Deployer) -> Address:
    """Deploy ``LightClient.sol`` for production.

    ``LightClient`` is upgradable: its constructor leaves it uninitialized,
    and the caller is expected to ``initialize`` it with the genesis state
    through the proxy afterwards.
    """
    plonk_verifier = await deploy_library(deployer, Contract.PLONK_VERIFIER, "PlonkVerifier")
    vk = await deploy_library(deployer, Contract.STATE_UPDATE_VK, "LightClientStateUpdateVK")

    bytecode = link_libraries(
        load_template("LightClient"),
        {PLONK_VERIFIER_LIB: plonk_verifier, STATE_UPDATE_VK_LIB: vk},
        contract=Contract.LIGHT_CLIENT,
    )
    return await deployer.broadcast(CreationTransaction(bytecode.bytecode))


async def deploy_mock_light_client_contract(
    deployer: Deployer,
    constructor_args: MockConstructorArgs | None = None,
) -> Address:
    """Deploy ``LightClientMock.sol`` for testing.

    Unlike the production contract the mock is not upgradable; its
    constructor fully initializes it, so no follow-up call is needed.
    Without ``constructor_args`` it starts from
    ``LightClientState.dummy_genesis()`` with epoch bounds disabled.
    """
    plonk_verifier = await deploy_library(deployer, Contract.PLONK_VERIFIER, "PlonkVerifier")
    vk = await deploy_library(deployer, Contract.STATE_UPDATE_VK, "LightClientStateUpdateVKMock")

    bytecode = link_libraries(
        load_template("LightClientMock"),
        {PLONK_VERIFIER_LIB: plonk_verifier, STATE_UPDATE_VK_MOCK_LIB: vk},
        contract=Contract.LIGHT_CLIENT,
    )
    if constructor_args is None:
        constructor_args = (LightClientState.dummy_genesis(), MAX_BLOCKS_PER_EPOCH_DISABLED)
    return await deployer.broadcast(CreationTransaction(bytecode.bytecode, constructor_args))


async def deploy_light_client(
    deployer: Deployer,
    use_mock: bool = False,
    constructor_args: MockConstructorArgs | None = None,
) -> Address:
    """Deploy the light client, or return it if it is already deployed.

    A predeployed light client short-circuits the whole procedure, libraries
    included.
    """
    if use_mock:
        procedure = partial(deploy_mock_light_client_contract, constructor_args=constructor_args)
    else:
        procedure = deploy_light_client_contract
    return await deployer.deploy_fn(Contract.LIGHT_CLIENT, procedure)
