"""Contract identifiers, addresses and the per-run address cache."""

from __future__ import annotations

from linkdeploy.contracts.address import Address
from linkdeploy.contracts.cache import Contracts
from linkdeploy.contracts.ids import Contract

__all__ = ["Address", "Contract", "Contracts"]
