"""Identifiers for the contracts this tool knows how to deploy."""

from __future__ import annotations

from enum import Enum


class Contract(str, Enum):
    """An identifier for a particular contract.

    The value is the display name, which is also the environment variable
    holding a predeployed address and the key written to the output file.
    """

    HOTSHOT = "ESPRESSO_SEQUENCER_HOTSHOT_ADDRESS"
    PLONK_VERIFIER = "ESPRESSO_SEQUENCER_PLONK_VERIFIER_ADDRESS"
    STATE_UPDATE_VK = "ESPRESSO_SEQUENCER_LIGHT_CLIENT_STATE_UPDATE_VK_ADDRESS"
    LIGHT_CLIENT = "ESPRESSO_SEQUENCER_LIGHT_CLIENT_ADDRESS"
    LIGHT_CLIENT_PROXY = "ESPRESSO_SEQUENCER_LIGHT_CLIENT_PROXY_ADDRESS"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.value
