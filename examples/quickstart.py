"""linkdeploy Quickstart — deploy the mock light client to a local dev node."""

import asyncio
import sys

from linkdeploy import DeployContext
from linkdeploy.contracts import Contracts
from linkdeploy.deploy.light_client import LightClientState, deploy_light_client
from linkdeploy.deploy.orchestrator import Deployer
from linkdeploy.errors import DeployError
from linkdeploy.utils.logging import setup_logging


async def main():
    # 1. Load configuration (rpc.url defaults to http://localhost:8545)
    setup_logging()
    ctx = DeployContext()
    cfg = ctx.ensure_config()

    # 2. Seed the cache with anything already deployed
    contracts = Contracts.from_deployed(cfg.deployed)
    deployer = Deployer(ctx.ensure_backend(), contracts)

    # 3. Deploy libraries, link and deploy the mock light client
    genesis = LightClientState.dummy_genesis()
    try:
        await deploy_light_client(deployer, use_mock=True, constructor_args=(genesis, 10))
    except DeployError as e:
        print(f"Deployment failed: {e}", file=sys.stderr)
    finally:
        await ctx.aclose()

    # 4. Whatever succeeded is printed in .env format
    contracts.export(sys.stdout)


if __name__ == "__main__":
    asyncio.run(main())
