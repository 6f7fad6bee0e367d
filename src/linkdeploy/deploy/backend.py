"""Deployment backends: the interface the deployer needs and a JSON-RPC one."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_delay,
    wait_fixed,
)

from linkdeploy.config.models import RpcConfig
from linkdeploy.contracts.address import Address
from linkdeploy.deploy.abi import encode_args
from linkdeploy.errors import BackendError
from linkdeploy.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class CreationTransaction:
    """A prepared contract creation: linked bytecode plus constructor arguments."""

    bytecode: bytes
    constructor_args: tuple[Any, ...] = ()

    @property
    def data(self) -> bytes:
        return self.bytecode + encode_args(self.constructor_args)


@runtime_checkable
class DeploymentBackend(Protocol):
    async def create_contract(self, bytecode: bytes, constructor_args: tuple[Any, ...] = ()) -> Address:
        """Broadcast a creation transaction and return the new contract's address."""
        ...

    async def send_transaction(self, address: Address, payload: bytes) -> dict[str, Any]:
        """Send a call to a deployed contract and return its receipt."""
        ...


class _ReceiptPending(Exception):
    pass


class JsonRpcBackend:
    """Ethereum JSON-RPC backend that lets the node sign transactions.

    Intended for dev nodes (anvil, geth --dev) with unlocked accounts. The
    sender is ``rpc.sender`` or the node's first account.
    """

    def __init__(self, config: RpcConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._client = client or httpx.AsyncClient(timeout=config.request_timeout)
        self._ids = itertools.count(1)
        self._sender: str | None = config.sender

    async def __aenter__(self) -> JsonRpcBackend:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _rpc(self, method: str, params: list[Any]) -> Any:
        body = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        try:
            response = await self._client.post(self._config.url, json=body)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise BackendError(f"{method} request to {self._config.url} failed: {exc}") from exc

        if not isinstance(payload, dict):
            raise BackendError(f"{method} returned a non-object reply: {payload!r}")
        if payload.get("error"):
            error = payload["error"]
            raise BackendError(f"{method} failed: {error.get('message', error)}")
        return payload.get("result")

    async def sender(self) -> str:
        if self._sender is None:
            accounts = await self._rpc("eth_accounts", [])
            if not accounts:
                raise BackendError(f"node at {self._config.url} has no unlocked accounts")
            self._sender = accounts[0]
        return self._sender

    async def _send(self, tx: dict[str, Any]) -> dict[str, Any]:
        tx = {"from": await self.sender(), **tx}
        if self._config.gas is not None:
            tx["gas"] = hex(self._config.gas)
        tx_hash = await self._rpc("eth_sendTransaction", [tx])
        log.debug("transaction_sent", tx_hash=tx_hash)

        receipt = await self._wait_for_receipt(tx_hash)
        if int(receipt.get("status", "0x1"), 16) != 1:
            raise BackendError(f"transaction {tx_hash} reverted")
        return receipt

    async def _wait_for_receipt(self, tx_hash: str) -> dict[str, Any]:
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(_ReceiptPending),
                wait=wait_fixed(self._config.poll_interval),
                stop=stop_after_delay(self._config.receipt_timeout),
            ):
                with attempt:
                    receipt = await self._rpc("eth_getTransactionReceipt", [tx_hash])
                    if receipt is None:
                        raise _ReceiptPending(tx_hash)
        except RetryError as exc:
            raise BackendError(
                f"transaction {tx_hash} not confirmed within {self._config.receipt_timeout}s"
            ) from exc
        return receipt

    async def create_contract(self, bytecode: bytes, constructor_args: tuple[Any, ...] = ()) -> Address:
        tx = CreationTransaction(bytecode, constructor_args)
        receipt = await self._send({"data": "0x" + tx.data.hex()})
        address = receipt.get("contractAddress")
        if not address:
            raise BackendError(f"receipt {receipt.get('transactionHash')} has no contract address")
        return Address.from_hex(address)

    async def send_transaction(self, address: Address, payload: bytes) -> dict[str, Any]:
        return await self._send({"to": str(address), "data": "0x" + payload.hex()})
