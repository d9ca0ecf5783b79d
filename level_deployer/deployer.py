"""
Level Deployer

Deploys (or attaches to) the level registry, then deploys every pending
level concurrently and registers each one with the registry.
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional

from web3 import AsyncWeb3

from .artifacts import Artifact, ArtifactResolver
from .config import GAS_LIMIT, GAS_PRICE_MULTIPLIER, REGISTRY_CONTRACT, REGISTRY_ID, Network
from .manifest import Level
from .network import get_accounts
from .planner import needs_deploy


@dataclass(frozen=True)
class GasPolicy:
    gas_price: int
    gas: int = GAS_LIMIT

    def tx_params(self, sender: str) -> dict:
        return {"from": sender, "gasPrice": self.gas_price, "gas": self.gas}


async def fetch_gas_policy(w3: AsyncWeb3) -> GasPolicy:
    gas_price = await w3.eth.gas_price
    return GasPolicy(gas_price=gas_price * GAS_PRICE_MULTIPLIER)


async def resolve_sender(w3: AsyncWeb3, network: Network) -> str:
    """Configured address first, else the first account the client knows"""
    if network.address:
        return network.address

    accounts = await get_accounts(w3)
    if not accounts:
        raise ValueError(f"No account available to deploy from on {network.name}")
    return accounts[0]


class LevelDeployer:
    def __init__(
        self,
        w3: AsyncWeb3,
        network: Network,
        resolver: Optional[ArtifactResolver] = None,
        registry_contract: str = REGISTRY_CONTRACT,
    ):
        self.w3 = w3
        self.network = network
        self.resolver = resolver or ArtifactResolver()
        self.registry_contract = registry_contract
        self.registry = None
        self.sender: Optional[str] = None
        self.gas: Optional[GasPolicy] = None
        # One submission at a time so concurrent tasks never reuse a nonce
        self._send_lock = asyncio.Lock()

    async def _transact(self, fn):
        async with self._send_lock:
            tx_hash = await fn.transact(self.gas.tx_params(self.sender))
        receipt = await self.w3.eth.wait_for_transaction_receipt(tx_hash)
        if receipt.status != 1:
            raise RuntimeError(f"Transaction {tx_hash.hex()} reverted")
        return receipt

    async def _deploy(self, artifact: Artifact, *args):
        factory = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        receipt = await self._transact(factory.constructor(*args))
        return self.w3.eth.contract(address=receipt.contractAddress, abi=artifact.abi)

    async def deploy_registry(self, deploy_data: Dict[str, str]):
        artifact = self.resolver.resolve(self.registry_contract)

        if needs_deploy(self.network, deploy_data.get(REGISTRY_ID)):
            print(f"⚙️  Deploying {self.registry_contract}...")
            self.registry = await self._deploy(artifact)
            print(f"  Registry: {self.registry.address}")
            deploy_data[REGISTRY_ID] = self.registry.address
        else:
            address = deploy_data[REGISTRY_ID]
            print(f"Using deployed {self.registry_contract}: {address}")
            self.registry = self.w3.eth.contract(
                address=self.w3.to_checksum_address(address),
                abi=artifact.abi,
            )

        return self.registry

    async def deploy_level(self, level: Level, deploy_data: Dict[str, str]):
        if not needs_deploy(self.network, deploy_data.get(level.deploy_id)):
            print(f"Using deployed {level.level_contract}...")
            return level

        print(f"Deploying {level.level_contract}, deployId: {level.deploy_id}...")
        artifact = self.resolver.resolve_level(level.level_contract)
        contract = await self._deploy(artifact, *level.deploy_params)
        print(f"  {level.name}: {contract.address}")

        deploy_data[level.deploy_id] = contract.address
        print(f"  storing deployed id: {level.deploy_id} with address: {contract.address}")

        print(f"  Registering level {level.level_contract}...")
        await self._transact(self.registry.functions.registerLevel(contract.address))
        print(f"[OK] Registered {level.level_contract}")

        return level

    async def deploy_all(self, deploy_data: Dict[str, str], levels: List[Level]):
        """Mutates deploy_data in place; any failing level fails the whole run"""
        self.gas = await fetch_gas_policy(self.w3)
        self.sender = await resolve_sender(self.w3, self.network)
        print(f"👤 From: {self.sender}")

        await self.deploy_registry(deploy_data)

        return await asyncio.gather(
            *(self.deploy_level(level, deploy_data) for level in levels)
        )


async def deploy_contracts(
    w3: AsyncWeb3,
    network: Network,
    deploy_data: Dict[str, str],
    levels: List[Level],
    resolver: Optional[ArtifactResolver] = None,
    registry_contract: str = REGISTRY_CONTRACT,
):
    deployer = LevelDeployer(w3, network, resolver, registry_contract)
    return await deployer.deploy_all(deploy_data, levels)
