"""linkdeploy — dependency-aware deployment of linked contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from linkdeploy.version import __version__

if TYPE_CHECKING:
    from linkdeploy.config.models import LinkDeployConfig
    from linkdeploy.deploy.backend import DeploymentBackend


@dataclass
class DeployContext:
    """Dependency-injection container shared across CLI commands."""

    config: LinkDeployConfig | None = None
    backend: DeploymentBackend | None = None

    def ensure_config(self) -> LinkDeployConfig:
        if self.config is None:
            from linkdeploy.config.loader import load_config

            self.config = load_config()
        return self.config

    def ensure_backend(self) -> DeploymentBackend:
        if self.backend is None:
            from linkdeploy.deploy.backend import JsonRpcBackend

            cfg = self.ensure_config()
            self.backend = JsonRpcBackend(cfg.rpc)
        return self.backend

    async def aclose(self) -> None:
        close = getattr(self.backend, "aclose", None)
        if close is not None:
            await close()
        self.backend = None


__all__ = ["DeployContext", "__version__"]
