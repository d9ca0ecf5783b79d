"""
Level deployment entry point

Reads the game manifest, compares it with the deploy data of the active
network, asks for confirmation and deploys whatever is missing.
"""

import sys
import asyncio
import traceback
from typing import Optional

from . import config
from .artifacts import ArtifactResolver
from .confirm import confirm_deployment
from .deploy_data import deploy_data_path, load_deploy_data, store_deploy_data
from .deployer import deploy_contracts
from .manifest import load_levels
from .network import connect, disconnect
from .planner import plan_deployment


async def run(
    network: config.Network,
    deploy_data_file,
    manifest_path=config.MANIFEST_PATH,
    resolver: Optional[ArtifactResolver] = None,
    registry_contract: str = config.REGISTRY_CONTRACT,
    prompt_on_local: bool = config.PROMPT_ON_LOCAL,
    provider=None,
) -> bool:
    """Run one deployment pass. Returns True if contracts were deployed."""
    w3 = await connect(network, provider=provider)

    try:
        deploy_data = load_deploy_data(deploy_data_file)
        levels = load_levels(manifest_path)

        plan = plan_deployment(network, deploy_data, levels)
        if plan.count == 0:
            print("No actions to perform, exiting.")
            return False

        if not await confirm_deployment(network, prompt_on_local):
            print("Deployment cancelled.")
            return False

        await deploy_contracts(w3, network, deploy_data, levels, resolver, registry_contract)
        store_deploy_data(deploy_data_file, deploy_data)
        return True
    finally:
        await disconnect(w3)


def main():
    """Main deployment function"""
    try:
        network = config.get_active_network()
        print("=" * 50)
        print(f"<< NETWORK: {network.name} >>")
        print("=" * 50)

        deployed = asyncio.run(run(
            network,
            deploy_data_path(network.name),
            prompt_on_local=config.prompt_on_local(),
        ))
    except Exception as e:
        print(f"[ERROR] Deployment failed: {e}")
        traceback.print_exc()
        sys.exit(1)

    if deployed:
        print("Done")
        sys.exit(0)


if __name__ == "__main__":
    main()
