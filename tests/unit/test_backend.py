"""Tests for the JSON-RPC deployment backend."""

import asyncio
import json

import httpx
import pytest

from conftest import addr
from linkdeploy.config.models import RpcConfig
from linkdeploy.deploy.backend import DeploymentBackend, JsonRpcBackend
from linkdeploy.errors import BackendError

ACCOUNT = "0x" + "01" * 20
CREATED = "0x" + "CD" * 20


class Node:
    """Scripted JSON-RPC node; receipts show up after ``pending`` polls."""

    def __init__(self, pending: int = 1, receipt: dict | None = None, error: dict | None = None) -> None:
        self.requests: list[dict] = []
        self.pending = pending
        self.receipt = receipt if receipt is not None else {
            "transactionHash": "0xabc",
            "status": "0x1",
            "contractAddress": CREATED,
        }
        self.error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        reply = {"jsonrpc": "2.0", "id": body["id"]}
        method = body["method"]
        if self.error and method == "eth_sendTransaction":
            reply["error"] = self.error
        elif method == "eth_accounts":
            reply["result"] = [ACCOUNT]
        elif method == "eth_sendTransaction":
            reply["result"] = "0xabc"
        elif method == "eth_getTransactionReceipt":
            if self.pending:
                self.pending -= 1
                reply["result"] = None
            else:
                reply["result"] = self.receipt
        return httpx.Response(200, json=reply)

    def methods(self) -> list[str]:
        return [r["method"] for r in self.requests]


def make_backend(node: Node, **rpc) -> JsonRpcBackend:
    config = RpcConfig(url="http://node.test:8545", poll_interval=0.0, receipt_timeout=1.0, **rpc)
    client = httpx.AsyncClient(transport=httpx.MockTransport(node))
    return JsonRpcBackend(config, client=client)


def test_backend_satisfies_protocol():
    assert isinstance(make_backend(Node()), DeploymentBackend)


def test_create_contract():
    node = Node(pending=2)

    async def run():
        async with make_backend(node) as backend:
            return await backend.create_contract(b"\x60\x01", (7,))

    assert asyncio.run(run()) == addr(0xCD)
    assert node.methods() == [
        "eth_accounts",
        "eth_sendTransaction",
        "eth_getTransactionReceipt",
        "eth_getTransactionReceipt",
        "eth_getTransactionReceipt",
    ]
    tx = node.requests[1]["params"][0]
    assert tx["from"] == ACCOUNT
    assert tx["data"] == "0x6001" + "00" * 31 + "07"


def test_configured_sender_and_gas():
    node = Node(pending=0)
    sender = "0x" + "02" * 20

    async def run():
        async with make_backend(node, sender=sender, gas=5_000_000) as backend:
            await backend.create_contract(b"\x60\x01")

    asyncio.run(run())
    assert "eth_accounts" not in node.methods()
    tx = node.requests[0]["params"][0]
    assert tx["from"] == sender
    assert tx["gas"] == hex(5_000_000)


def test_reverted_transaction():
    node = Node(pending=0, receipt={"transactionHash": "0xabc", "status": "0x0"})

    async def run():
        async with make_backend(node) as backend:
            await backend.create_contract(b"\x60\x01")

    with pytest.raises(BackendError, match="reverted"):
        asyncio.run(run())


def test_missing_contract_address():
    node = Node(pending=0, receipt={"transactionHash": "0xabc", "status": "0x1"})

    async def run():
        async with make_backend(node) as backend:
            await backend.create_contract(b"\x60\x01")

    with pytest.raises(BackendError, match="no contract address"):
        asyncio.run(run())


def test_rpc_error_object():
    node = Node(error={"code": -32000, "message": "insufficient funds"})

    async def run():
        async with make_backend(node) as backend:
            await backend.create_contract(b"\x60\x01")

    with pytest.raises(BackendError, match="insufficient funds"):
        asyncio.run(run())


def test_receipt_timeout():
    node = Node(pending=10**9)

    async def run():
        config = RpcConfig(url="http://node.test:8545", poll_interval=0.01, receipt_timeout=0.05)
        client = httpx.AsyncClient(transport=httpx.MockTransport(node))
        async with JsonRpcBackend(config, client=client) as backend:
            await backend.create_contract(b"\x60\x01")

    with pytest.raises(BackendError, match="not confirmed"):
        asyncio.run(run())


def test_http_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502)

    async def run():
        config = RpcConfig(url="http://node.test:8545")
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with JsonRpcBackend(config, client=client) as backend:
            await backend.create_contract(b"\x60\x01")

    with pytest.raises(BackendError, match="eth_accounts"):
        asyncio.run(run())


def test_send_transaction():
    node = Node(pending=0)

    async def run():
        async with make_backend(node) as backend:
            return await backend.send_transaction(addr(0xEE), b"\x12\x34")

    receipt = asyncio.run(run())
    assert receipt["status"] == "0x1"
    tx = node.requests[1]["params"][0]
    assert tx["to"] == "0x" + "ee" * 20
    assert tx["data"] == "0x1234"


@pytest.mark.parametrize("reply", [["not", "an", "object"], "oops", None])
def test_non_object_reply(reply):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=json.dumps(reply))

    async def run():
        config = RpcConfig(url="http://node.test:8545", sender="0x" + "02" * 20)
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with JsonRpcBackend(config, client=client) as backend:
            await backend.send_transaction(addr(0xEE), b"\x12\x34")

    with pytest.raises(BackendError, match="non-object reply"):
        asyncio.run(run())
