"""Shared test fixtures."""

from __future__ import annotations

import logging
from typing import Any

import pytest
import structlog

from linkdeploy.config.models import LinkDeployConfig, RpcConfig
from linkdeploy.contracts.address import Address
from linkdeploy.errors import BackendError
from linkdeploy.linking.artifact import BytecodeArtifact, placeholder


def addr(byte: int) -> Address:
    """Address made of a single repeated byte, e.g. addr(0xAA) == 0xaaaa...aa."""
    return Address(bytes([byte]) * 20)


def make_artifact(prefix: str, slots: list[str], suffix: str = "00", name: str = "Test") -> BytecodeArtifact:
    """Build an unlinked artifact: ``prefix``, one placeholder per slot, ``suffix``.

    Each slot is followed by a one-byte ``50`` (POP) separator.
    """
    obj = prefix
    refs: dict[str, dict[str, list[dict[str, int]]]] = {}
    for qualified in slots:
        source, _, library = qualified.rpartition(":")
        refs.setdefault(source, {}).setdefault(library, []).append(
            {"start": len(obj) // 2, "length": 20}
        )
        obj += placeholder(qualified) + "50"
    return BytecodeArtifact.from_json({"object": obj + suffix, "linkReferences": refs}, name=name)


class FakeBackend:
    """In-memory deployment backend handing out sequential addresses.

    ``fail_on`` is the 1-based index of the creation call that should fail.
    """

    def __init__(self, fail_on: int | None = None) -> None:
        self.created: list[tuple[bytes, tuple[Any, ...]]] = []
        self.sent: list[tuple[Address, bytes]] = []
        self.fail_on = fail_on

    async def create_contract(self, bytecode: bytes, constructor_args: tuple[Any, ...] = ()) -> Address:
        index = len(self.created) + 1
        if index == self.fail_on:
            raise BackendError(f"creation transaction {index} reverted")
        self.created.append((bytecode, constructor_args))
        return addr(index)

    async def send_transaction(self, address: Address, payload: bytes) -> dict[str, Any]:
        self.sent.append((address, payload))
        return {"status": "0x1"}


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def sample_config() -> LinkDeployConfig:
    return LinkDeployConfig(
        rpc=RpcConfig(url="http://node.test:8545", poll_interval=0.0, receipt_timeout=1.0),
    )


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


# Markers
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: requires a running JSON-RPC node")
