"""YAML configuration loader with env var interpolation."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml

from linkdeploy.config.defaults import CONFIG_FILE_NAMES, CONFIG_SEARCH_PATHS
from linkdeploy.config.models import DeployedContracts, LinkDeployConfig
from linkdeploy.contracts.ids import Contract

_ENV_VAR_PATTERN = re.compile(r"\$\{(\w+)(?::([^}]*))?\}")

# DeployedContracts field seeded by each contract's environment variable.
_DEPLOYED_FIELDS = {
    Contract.HOTSHOT: "hotshot",
    Contract.PLONK_VERIFIER: "plonk_verifier",
    Contract.STATE_UPDATE_VK: "light_client_state_update_vk",
    Contract.LIGHT_CLIENT: "light_client",
    Contract.LIGHT_CLIENT_PROXY: "light_client_proxy",
}


def _interpolate_env(value: str, environ: Mapping[str, str] | None = None) -> str:
    """Replace ${VAR} or ${VAR:default} with environment variable values."""
    env = os.environ if environ is None else environ

    def _replace(match: re.Match[str]) -> str:
        default = match.group(2)
        return env.get(match.group(1), default if default is not None else "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _walk_and_interpolate(obj: object, environ: Mapping[str, str] | None = None) -> object:
    if isinstance(obj, str):
        return _interpolate_env(obj, environ)
    if isinstance(obj, dict):
        return {k: _walk_and_interpolate(v, environ) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_walk_and_interpolate(item, environ) for item in obj]
    return obj


def deployed_from_env(
    base: DeployedContracts | None = None, environ: Mapping[str, str] | None = None
) -> DeployedContracts:
    """Fill unset predeployed addresses from ``ESPRESSO_SEQUENCER_*_ADDRESS`` vars.

    Values already present in ``base`` win over the environment.
    """
    env = os.environ if environ is None else environ
    base = base or DeployedContracts()
    updates: dict[str, str] = {}
    for contract, field_name in _DEPLOYED_FIELDS.items():
        if getattr(base, field_name) is None and env.get(contract.display_name):
            updates[field_name] = env[contract.display_name]
    if not updates:
        return base
    return DeployedContracts.model_validate({**base.model_dump(), **updates})


def find_config_file(explicit_path: str | Path | None = None) -> Path | None:
    """Locate a linkdeploy config file, returning the first found or None."""
    if explicit_path is not None:
        p = Path(explicit_path)
        return p if p.is_file() else None

    for search_dir in CONFIG_SEARCH_PATHS:
        for name in CONFIG_FILE_NAMES:
            candidate = search_dir / name
            if candidate.is_file():
                return candidate
    return None


def load_config(
    path: str | Path | None = None, environ: Mapping[str, str] | None = None
) -> LinkDeployConfig:
    """Load and validate configuration, falling back to defaults.

    Predeployed addresses missing from the file are taken from the
    environment.
    """
    config_path = find_config_file(path)
    if config_path is None:
        config = LinkDeployConfig()
    else:
        raw = yaml.safe_load(config_path.read_text()) or {}
        config = LinkDeployConfig.model_validate(_walk_and_interpolate(raw, environ))

    config.deployed = deployed_from_env(config.deployed, environ)
    return config
