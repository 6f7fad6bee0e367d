"""linkdeploy deploy — deploy the light client and write the address file."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer

from linkdeploy.contracts.ids import Contract


def deploy_cmd(
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", envvar="ESPRESSO_SEQUENCER_L1_PROVIDER", help="JSON-RPC endpoint"),
    sender: Optional[str] = typer.Option(None, "--sender", help="Unlocked account to deploy from"),
    use_mock_contract: bool = typer.Option(False, "--use-mock-contract", help="Deploy LightClientMock instead of LightClient"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write addresses to this .env file instead of stdout"),
    hotshot: Optional[str] = typer.Option(None, "--hotshot", envvar=Contract.HOTSHOT.value, help="Use an already-deployed HotShot.sol"),
    plonk_verifier: Optional[str] = typer.Option(None, "--plonk-verifier", envvar=Contract.PLONK_VERIFIER.value, help="Use an already-deployed PlonkVerifier.sol"),
    light_client_state_update_vk: Optional[str] = typer.Option(None, "--light-client-state-update-vk", envvar=Contract.STATE_UPDATE_VK.value, help="Use an already-deployed LightClientStateUpdateVK.sol"),
    light_client: Optional[str] = typer.Option(None, "--light-client", envvar=Contract.LIGHT_CLIENT.value, help="Use an already-deployed LightClient.sol"),
    light_client_proxy: Optional[str] = typer.Option(None, "--light-client-proxy", envvar=Contract.LIGHT_CLIENT_PROXY.value, help="Use an already-deployed LightClient.sol proxy"),
) -> None:
    """Deploy the light client contract and its libraries.

    Contracts with a predeployed address are skipped. Addresses are written
    in .env format even when deployment fails part way.
    """
    from pydantic import ValidationError

    from linkdeploy.cli.app import get_context
    from linkdeploy.config.models import DeployedContracts
    from linkdeploy.contracts.cache import Contracts
    from linkdeploy.deploy.light_client import deploy_light_client
    from linkdeploy.deploy.orchestrator import Deployer
    from linkdeploy.errors import DeployError
    from linkdeploy.utils.formatters import print_error, print_success

    ctx = get_context()
    cfg = ctx.ensure_config()
    if rpc_url:
        cfg.rpc.url = rpc_url
    if sender:
        cfg.rpc.sender = sender

    overrides = {
        "hotshot": hotshot,
        "plonk_verifier": plonk_verifier,
        "light_client_state_update_vk": light_client_state_update_vk,
        "light_client": light_client,
        "light_client_proxy": light_client_proxy,
    }
    try:
        deployed = DeployedContracts.model_validate(
            {
                **cfg.deployed.model_dump(exclude_none=True),
                **{k: v for k, v in overrides.items() if v},
            }
        )
    except ValidationError as exc:
        print_error(f"Invalid predeployed address: {exc.errors()[0]['msg']}")
        raise typer.Exit(2)

    contracts = Contracts.from_deployed(deployed)

    async def _run() -> None:
        deployer = Deployer(ctx.ensure_backend(), contracts)
        try:
            await deploy_light_client(deployer, use_mock=use_mock_contract)
        finally:
            await ctx.aclose()

    failure: DeployError | None = None
    try:
        asyncio.run(_run())
    except DeployError as exc:
        failure = exc

    out_path = out or (Path(cfg.output.path) if cfg.output.path else None)
    if out_path is not None:
        with out_path.open("w") as f:
            contracts.export(f)
    else:
        contracts.export(sys.stdout)

    if failure is not None:
        print_error(str(failure))
        raise typer.Exit(1)

    target = f" to {out_path}" if out_path is not None else ""
    print_success(f"Deployed {len(contracts)} contract(s){target}")
