"""Contract deployment: backends, the memoizing deployer and procedures."""

from __future__ import annotations

from linkdeploy.deploy.backend import CreationTransaction, DeploymentBackend, JsonRpcBackend
from linkdeploy.deploy.orchestrator import Deployer

__all__ = ["CreationTransaction", "Deployer", "DeploymentBackend", "JsonRpcBackend"]
