"""Default configuration values and paths."""

from __future__ import annotations

from pathlib import Path

CONFIG_FILE_NAMES = [
    "linkdeploy.yaml",
    "linkdeploy.yml",
    ".linkdeploy.yaml",
    ".linkdeploy.yml",
]

CONFIG_SEARCH_PATHS = [
    Path.cwd(),
    Path.home() / ".config" / "linkdeploy",
    Path.home(),
]

DEFAULT_RPC_URL = "http://localhost:8545"
DEFAULT_RECEIPT_TIMEOUT = 120.0
DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_REQUEST_TIMEOUT = 30.0
