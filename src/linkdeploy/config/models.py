"""Pydantic configuration models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from linkdeploy.config.defaults import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RECEIPT_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RPC_URL,
)
from linkdeploy.contracts.address import Address
from linkdeploy.contracts.ids import Contract


class RpcConfig(BaseModel):
    url: str = DEFAULT_RPC_URL
    sender: str | None = None
    gas: int | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL


class OutputConfig(BaseModel):
    path: str | None = None


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class DeployedContracts(BaseModel):
    """Set of predeployed contracts.

    Any address given here is used as-is and the contract, along with
    everything it depends on, is not deployed again.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    hotshot: Address | None = None
    plonk_verifier: Address | None = None
    light_client_state_update_vk: Address | None = None
    light_client: Address | None = None
    light_client_proxy: Address | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _parse_address(cls, value: object) -> object:
        if value is None or isinstance(value, Address):
            return value
        if isinstance(value, str):
            if not value.strip():
                return None
            return Address.from_hex(value)
        return value

    def addresses(self) -> dict[Contract, Address | None]:
        return {
            Contract.HOTSHOT: self.hotshot,
            Contract.PLONK_VERIFIER: self.plonk_verifier,
            Contract.STATE_UPDATE_VK: self.light_client_state_update_vk,
            Contract.LIGHT_CLIENT: self.light_client,
            Contract.LIGHT_CLIENT_PROXY: self.light_client_proxy,
        }


class LinkDeployConfig(BaseModel):
    rpc: RpcConfig = Field(default_factory=RpcConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    deployed: DeployedContracts = Field(default_factory=DeployedContracts)
