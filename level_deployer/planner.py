"""
Deployment planning

Decides which contracts still need to be deployed on the active network.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import Network, PLACEHOLDER_ADDRESS, REGISTRY_ID
from .manifest import Level


def needs_deploy(network: Network, address: Optional[str]) -> bool:
    """Local chains reset between runs, so everything is redeployed there.
    Elsewhere only missing or placeholder entries are deployed."""
    if network.local:
        return True
    return address is None or address == PLACEHOLDER_ADDRESS


@dataclass
class DeploymentPlan:
    deploy_registry: bool = False
    levels: List[Level] = field(default_factory=list)

    @property
    def count(self) -> int:
        return int(self.deploy_registry) + len(self.levels)


def plan_deployment(network: Network, deploy_data: Dict[str, str], levels: List[Level]) -> DeploymentPlan:
    plan = DeploymentPlan()

    if needs_deploy(network, deploy_data.get(REGISTRY_ID)):
        plan.deploy_registry = True
        print(f"({plan.count}) Will deploy the level registry!")

    for level in levels:
        address = deploy_data.get(level.deploy_id)
        if needs_deploy(network, address):
            plan.levels.append(level)
            note = " [marked undeployed]" if address == PLACEHOLDER_ADDRESS else ""
            print(f"({plan.count}) Will deploy {level.level_contract} ({level.name}){note}")

    return plan
