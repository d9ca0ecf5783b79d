"""
Environment preflight checks

Validates configuration, manifest, build artifacts and connectivity for the
active network before running a deployment.
"""

import os
import sys
import asyncio
from pathlib import Path
from typing import Optional

from . import config
from .artifacts import ArtifactResolver
from .manifest import load_levels
from .network import connect, disconnect, get_accounts


def check_env_file(env_path: Path = Path(".env")):
    """Report whether a .env file supplies settings; optional for the local chain"""
    if env_path.exists():
        print(f"[OK] Loading settings from {env_path}")
        return True

    print(f"[INFO] No {env_path} file, using the process environment only")
    print("       Settings read by the deployer:")
    print("       ACTIVE_NETWORK     network from config/networks.json (default: local)")
    print("       DEPLOYER_PRIVATE_KEY  signing key, needed off the local chain")
    print("       ALCHEMY_API_KEY    fills rpc_url_template entries")
    print("       PROMPT_ON_LOCAL    set to false to skip confirmation on local")
    return False


def check_private_key(private_key: Optional[str] = None):
    """Check if deployer private key is configured"""
    private_key = private_key if private_key is not None else os.getenv("DEPLOYER_PRIVATE_KEY")
    if not private_key:
        print("[WARN] DEPLOYER_PRIVATE_KEY not set")
        print("       Required for non-local deployments")
        return False

    # 0x + 64 hex chars, or 64 hex chars
    expected = 66 if private_key.startswith("0x") else 64
    if len(private_key) != expected:
        print("[ERROR] DEPLOYER_PRIVATE_KEY has invalid length")
        return False

    print("[OK] DEPLOYER_PRIVATE_KEY is configured")
    return True


def check_manifest(manifest_path: Path = config.MANIFEST_PATH):
    """Check the manifest loads and its deploy ids are unique"""
    try:
        levels = load_levels(manifest_path)
    except (OSError, ValueError) as e:
        print(f"[ERROR] Cannot load manifest: {e}")
        return None

    print(f"[OK] Manifest lists {len(levels)} levels")
    return levels


def check_artifacts(levels, resolver: ArtifactResolver, registry_contract: str = config.REGISTRY_CONTRACT):
    """Check every contract the deployment needs has a build artifact"""
    missing = []

    try:
        resolver.resolve(registry_contract)
    except (OSError, ValueError) as e:
        missing.append(f"{registry_contract}: {e}")

    for level in levels:
        try:
            resolver.resolve_level(level.level_contract)
        except (OSError, ValueError) as e:
            missing.append(f"{level.level_contract}: {e}")

    if missing:
        print(f"[ERROR] {len(missing)} artifacts missing or invalid")
        for entry in missing:
            print(f"        - {entry}")
        print("        Build the contracts before deploying")
        return False

    print(f"[OK] Artifacts found for {len(levels) + 1} contracts")
    return True


async def check_connectivity(network: config.Network, provider=None):
    """Check the node answers and report the deployer balance"""
    print(f"Testing connection to {network.name}...")

    try:
        w3 = await connect(network, provider=provider)
    except Exception as e:
        print(f"[ERROR] Connection failed: {e}")
        return False

    try:
        chain_id = await w3.eth.chain_id
        block_number = await w3.eth.block_number
        print(f"     Chain ID: {chain_id}")
        print(f"     Block: {block_number:,}")

        deployer = network.address
        if not deployer:
            accounts = await get_accounts(w3)
            deployer = accounts[0] if accounts else None
        if deployer:
            balance = await w3.eth.get_balance(deployer)
            print(f"     Deployer: {deployer}")
            print(f"     Balance: {w3.from_wei(balance, 'ether'):.6f} ETH")
        else:
            print("[WARN] No deployer account available")
        return True
    except Exception as e:
        print(f"[ERROR] Node query failed: {e}")
        return False
    finally:
        await disconnect(w3)


def run_checks(
    network: config.Network,
    manifest_path=config.MANIFEST_PATH,
    resolver: Optional[ArtifactResolver] = None,
    registry_contract: str = config.REGISTRY_CONTRACT,
    provider=None,
):
    """Run every check; returns a name -> passed mapping"""
    resolver = resolver or ArtifactResolver()
    results = {}

    if not network.local:
        results["private_key"] = check_private_key(network.private_key or "")

    levels = check_manifest(manifest_path)
    results["manifest"] = levels is not None
    if levels is not None:
        results["artifacts"] = check_artifacts(levels, resolver, registry_contract)

    print()
    results["connectivity"] = asyncio.run(check_connectivity(network, provider))
    return results


def main():
    """Run all environment checks"""
    print("=" * 50)
    print("Level Deployer Environment Check")
    print("=" * 50)
    print()

    check_env_file()

    try:
        networks = config.load_networks()
    except (OSError, ValueError) as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    name = config.active_network_name()
    if name not in networks:
        print(f"[ERROR] Unknown network: {name}")
        print(f"        Available: {', '.join(networks)}")
        sys.exit(1)

    network = networks[name]
    print(f"[OK] Active network: {network.name}")
    results = run_checks(network)

    # Summary
    print()
    print("=" * 50)
    print("Summary")
    print("=" * 50)

    for check, passed in results.items():
        status = "[OK]" if passed else "[FAIL]"
        print(f"  {status} {check}")

    print()
    if all(results.values()):
        print("Environment is ready for deployment!")
        print("Run: python scripts/deploy_contracts.py")
    else:
        print("Some checks failed. Please fix the issues above.")
        sys.exit(1)


if __name__ == "__main__":
    main()
