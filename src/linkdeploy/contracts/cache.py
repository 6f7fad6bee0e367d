"""Cache of contracts predeployed or deployed during the current run."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Protocol

from linkdeploy.contracts.address import Address
from linkdeploy.contracts.ids import Contract

if TYPE_CHECKING:
    from linkdeploy.config.models import DeployedContracts


class TextSink(Protocol):
    def write(self, s: str, /) -> object: ...


class Contracts:
    """Mapping of contract identifier to address.

    Entries are only added by the deployer right after a successful
    deployment, or up front from predeployed addresses. Iteration follows
    insertion order so exports are deterministic.
    """

    def __init__(self, entries: dict[Contract, Address] | None = None) -> None:
        self._addresses: dict[Contract, Address] = dict(entries or {})

    @classmethod
    def from_deployed(cls, deployed: DeployedContracts) -> Contracts:
        """Seed a cache from predeployed addresses, skipping unset ones."""
        contracts = cls()
        for contract, address in deployed.addresses().items():
            if address is not None:
                contracts.record(contract, address)
        return contracts

    def lookup(self, contract: Contract) -> Address | None:
        return self._addresses.get(contract)

    def record(self, contract: Contract, address: Address) -> None:
        self._addresses[contract] = address

    def entries(self) -> list[tuple[Contract, Address]]:
        return list(self._addresses.items())

    def export(self, sink: TextSink) -> None:
        """Write one ``NAME=0x...`` line per entry, in .env format."""
        for contract, address in self.entries():
            sink.write(f"{contract.display_name}={address}\n")

    def __contains__(self, contract: object) -> bool:
        return contract in self._addresses

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[Contract]:
        return iter(self._addresses)

    def __repr__(self) -> str:
        inner = ", ".join(f"{c.name}={a}" for c, a in self._addresses.items())
        return f"Contracts({inner})"
