"""Tests for the light client deployment procedures."""

import asyncio

import pytest

from conftest import FakeBackend, addr
from linkdeploy.contracts import Contract, Contracts
from linkdeploy.deploy.light_client import (
    MAX_BLOCKS_PER_EPOCH_DISABLED,
    LightClientState,
    deploy_light_client,
    deploy_light_client_contract,
    deploy_mock_light_client_contract,
    library_transaction,
)
from linkdeploy.deploy.orchestrator import Deployer
from linkdeploy.errors import DeploymentError
from linkdeploy.linking.templates import TEMPLATES


def test_dummy_genesis():
    genesis = LightClientState.dummy_genesis()
    assert (genesis.view_num, genesis.block_height) == (0, 0)
    assert genesis.stake_table_bls_key_comm == 123
    assert genesis.stake_table_schnorr_key_comm == 123
    assert genesis.stake_table_amount_comm == 20
    assert genesis.threshold == 1
    assert MAX_BLOCKS_PER_EPOCH_DISABLED == 2**32 - 1


def test_production_deploys_libraries_then_light_client(backend):
    deployer = Deployer(backend)

    result = asyncio.run(deploy_light_client(deployer))

    assert result == addr(3)
    assert deployer.contracts.entries() == [
        (Contract.PLONK_VERIFIER, addr(1)),
        (Contract.STATE_UPDATE_VK, addr(2)),
        (Contract.LIGHT_CLIENT, addr(3)),
    ]
    assert backend.created[0][0] == library_transaction("PlonkVerifier").bytecode
    assert backend.created[1][0] == library_transaction("LightClientStateUpdateVK").bytecode

    bytecode, args = backend.created[2]
    assert args == ()
    assert bytecode[19:39] == addr(1).raw
    assert bytecode[41:61] == addr(2).raw


def test_mock_uses_mock_vk_library(backend):
    deployer = Deployer(backend)
    asyncio.run(deploy_light_client(deployer, use_mock=True))

    assert backend.created[1][0] == library_transaction("LightClientStateUpdateVKMock").bytecode
    bytecode, _ = backend.created[2]
    assert bytecode[63:83] == addr(1).raw


def test_mock_defaults_constructor_args(backend):
    deployer = Deployer(backend)
    asyncio.run(deploy_mock_light_client_contract(deployer))

    _, args = backend.created[-1]
    assert args == (LightClientState.dummy_genesis(), MAX_BLOCKS_PER_EPOCH_DISABLED)


def test_mock_keeps_explicit_constructor_args(backend):
    state = LightClientState(5, 6, 7, 8, 9, 10, 11, 12)
    deployer = Deployer(backend)
    asyncio.run(deploy_light_client(deployer, use_mock=True, constructor_args=(state, 42)))

    _, args = backend.created[-1]
    assert args == (state, 42)


def test_predeployed_libraries_are_reused(backend):
    contracts = Contracts({Contract.PLONK_VERIFIER: addr(0xAA)})
    deployer = Deployer(backend, contracts)

    asyncio.run(deploy_light_client(deployer))

    assert len(backend.created) == 2
    bytecode, _ = backend.created[1]
    assert bytecode[19:39] == addr(0xAA).raw
    assert bytecode[41:61] == addr(1).raw


def test_predeployed_light_client_skips_everything(backend):
    contracts = Contracts({Contract.LIGHT_CLIENT: addr(0xCC)})
    deployer = Deployer(backend, contracts)

    assert asyncio.run(deploy_light_client(deployer, use_mock=True)) == addr(0xCC)
    assert backend.created == []
    assert deployer.contracts.entries() == [(Contract.LIGHT_CLIENT, addr(0xCC))]


def test_light_client_failure_keeps_libraries():
    backend = FakeBackend(fail_on=3)
    deployer = Deployer(backend)

    with pytest.raises(DeploymentError) as excinfo:
        asyncio.run(deploy_light_client(deployer))

    assert excinfo.value.contract is Contract.LIGHT_CLIENT
    assert deployer.contracts.entries() == [
        (Contract.PLONK_VERIFIER, addr(1)),
        (Contract.STATE_UPDATE_VK, addr(2)),
    ]


def test_procedure_can_run_without_wrapper(backend):
    deployer = Deployer(backend)
    result = asyncio.run(deploy_light_client_contract(deployer))

    assert result == addr(3)
    # the bare procedure does not record its own contract; deploy_fn does
    assert Contract.LIGHT_CLIENT not in deployer.contracts


def test_predeployed_library_template_is_not_loaded(backend, monkeypatch):
    monkeypatch.setitem(TEMPLATES, "PlonkVerifier", {"object": "608", "linkReferences": {}})
    contracts = Contracts({Contract.PLONK_VERIFIER: addr(0xAA)})
    deployer = Deployer(backend, contracts)

    assert asyncio.run(deploy_light_client(deployer)) == addr(2)
    assert len(backend.created) == 2


def test_broken_library_template_is_blamed_on_library(backend, monkeypatch):
    monkeypatch.setitem(TEMPLATES, "PlonkVerifier", {"object": "608", "linkReferences": {}})
    deployer = Deployer(backend)

    with pytest.raises(DeploymentError) as excinfo:
        asyncio.run(deploy_light_client(deployer))

    assert excinfo.value.contract is Contract.PLONK_VERIFIER
    assert backend.created == []
