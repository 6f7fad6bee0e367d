"""Memoized, dependency-ordered contract deployment."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from linkdeploy.contracts.address import Address
from linkdeploy.contracts.cache import Contracts
from linkdeploy.contracts.ids import Contract
from linkdeploy.deploy.backend import CreationTransaction, DeploymentBackend
from linkdeploy.errors import DeployError, DeploymentError
from linkdeploy.utils.logging import get_logger

log = get_logger(__name__)

DeployProcedure = Callable[["Deployer"], Awaitable[Address]]


class Deployer:
    """Deploys contracts at most once each, recording results in ``contracts``.

    Deploy procedures receive the deployer itself so they can deploy their
    own dependencies first. Calls are awaited one at a time; a nested
    deployment always finishes before its caller touches the cache again.
    Dependency cycles are not detected.
    """

    def __init__(self, backend: DeploymentBackend, contracts: Contracts | None = None) -> None:
        self.backend = backend
        self.contracts = contracts if contracts is not None else Contracts()

    async def deploy_fn(self, name: Contract, deploy: DeployProcedure) -> Address:
        """Deploy ``name`` by calling ``deploy``, unless it is already deployed.

        ``deploy`` is only awaited on a cache miss, so a predeployed contract
        never causes its dependencies to be deployed. If ``deploy`` fails
        nothing is recorded for ``name``; dependencies it deployed before
        failing stay in the cache.
        """
        cached = self.contracts.lookup(name)
        if cached is not None:
            log.info("skipping_deployment", contract=name.name, address=str(cached))
            return cached

        log.info("deploying", contract=name.name)
        try:
            address = await deploy(self)
        except DeployError as exc:
            # errors from nested deployments already name their contract
            if exc.contract is None:
                raise DeploymentError(name, exc) from exc
            raise
        except Exception as exc:
            raise DeploymentError(name, exc) from exc
        log.info("deployed", contract=name.name, address=str(address))

        self.contracts.record(name, address)
        return address

    async def deploy_tx(self, name: Contract, tx: CreationTransaction) -> Address:
        """Deploy ``name`` by broadcasting ``tx``, unless it is already deployed."""

        async def _broadcast(deployer: Deployer) -> Address:
            return await deployer.broadcast(tx)

        return await self.deploy_fn(name, _broadcast)

    async def broadcast(self, tx: CreationTransaction) -> Address:
        """Send ``tx`` to the backend unconditionally. No caching, no retry."""
        return await self.backend.create_contract(tx.bytecode, tx.constructor_args)
