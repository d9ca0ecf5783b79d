"""
Level Deployer Configuration

Network descriptors, filesystem layout and gas policy constants.
Secrets and overrides come from the environment (.env supported).
"""

import os
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional
from dotenv import load_dotenv

load_dotenv()

ROOT_DIR = Path(__file__).resolve().parent.parent

NETWORKS_CONFIG = ROOT_DIR / "config" / "networks.json"
GAMEDATA_DIR = ROOT_DIR / "gamedata"
MANIFEST_PATH = GAMEDATA_DIR / "gamedata.json"
BUILD_DIR = ROOT_DIR / "contracts" / "build" / "contracts"

# Network selected when ACTIVE_NETWORK is not set
DEFAULT_NETWORK = "local"

# Ask for confirmation even on the disposable local chain
PROMPT_ON_LOCAL = True

REGISTRY_ID = "ethernaut"
REGISTRY_CONTRACT = "Ethernaut.vy"

# Deploy-data value for a level that is intentionally left undeployed
PLACEHOLDER_ADDRESS = "x"

GAS_LIMIT = 4_500_000
GAS_PRICE_MULTIPLIER = 10


@dataclass(frozen=True)
class Network:
    name: str
    url: str
    port: Optional[int] = None
    private_key: Optional[str] = None
    address: Optional[str] = None
    local: bool = False

    @property
    def provider_url(self) -> str:
        if self.port:
            return f"{self.url}:{self.port}"
        return self.url


def load_networks(config_path: Path = NETWORKS_CONFIG) -> Dict[str, Network]:
    """Load the network table, resolving RPC url templates and secrets"""
    if not Path(config_path).exists():
        raise FileNotFoundError(f"Network config not found: {config_path}")

    with open(config_path) as f:
        entries = json.load(f)["networks"]

    api_key = os.getenv("ALCHEMY_API_KEY", "")
    private_key = os.getenv("DEPLOYER_PRIVATE_KEY") or None

    networks = {}
    for key, entry in entries.items():
        if "rpc_url" in entry:
            url = entry["rpc_url"]
        elif "rpc_url_template" in entry:
            url = entry["rpc_url_template"].replace("{ALCHEMY_API_KEY}", api_key)
        else:
            raise ValueError(f"No RPC URL configured for {key}")

        local = bool(entry.get("local", False))
        networks[key] = Network(
            name=entry.get("name", key),
            url=url,
            port=entry.get("port"),
            private_key=None if local else private_key,
            address=entry.get("address"),
            local=local,
        )

    return networks


def active_network_name() -> str:
    return os.getenv("ACTIVE_NETWORK", DEFAULT_NETWORK)


def get_active_network(config_path: Path = NETWORKS_CONFIG) -> Network:
    """Return the descriptor for the network this run targets"""
    networks = load_networks(config_path)
    name = active_network_name()

    if name not in networks:
        raise ValueError(
            f"Unknown network: {name} (available: {', '.join(networks)})"
        )

    network = networks[name]
    if not network.local and not network.private_key:
        raise ValueError(f"DEPLOYER_PRIVATE_KEY not set (required for {name})")

    return network


def prompt_on_local() -> bool:
    value = os.getenv("PROMPT_ON_LOCAL")
    if value is None:
        return PROMPT_ON_LOCAL
    return value.strip().lower() not in ("0", "false", "no", "n")
