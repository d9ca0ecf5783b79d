"""
Shared pytest fixtures for level deployment testing.

Compiles the contracts under contracts/ into a temporary build directory
laid out like the real artifact store, and provides an in-process chain
through web3's async eth-tester provider.
"""

import json
import pytest
from pathlib import Path
from web3 import AsyncWeb3
from web3.providers.eth_tester import AsyncEthereumTesterProvider
from vyper import compile_code

from level_deployer.artifacts import Artifact
from level_deployer.config import Network

CONTRACTS_DIR = Path(__file__).parent.parent / "contracts"

REGISTRY_REF = "Ethernaut.vy"
LEVEL_REFS = ["Fallback.vy", "Token.vy"]

LOCAL = Network(name="local", url="http://127.0.0.1", port=8545, local=True)
SEPOLIA = Network(name="sepolia", url="https://sepolia.example")


def compile_contract(path: Path) -> dict:
    """Compile a Vyper contract"""
    with open(path) as f:
        source = f.read()
    return compile_code(source, output_formats=["abi", "bytecode"])


def write_artifact(path: Path, compiled: dict):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump({"abi": compiled["abi"], "bytecode": compiled["bytecode"]}, f)


@pytest.fixture(scope="session")
def compiled_contracts():
    """Compile registry and levels once per test session"""
    compiled = {REGISTRY_REF: compile_contract(CONTRACTS_DIR / REGISTRY_REF)}
    for ref in LEVEL_REFS:
        compiled[ref] = compile_contract(CONTRACTS_DIR / "levels" / ref)
    return compiled


@pytest.fixture
def build_dir(tmp_path, compiled_contracts):
    """Artifact store: <build>/<ref>/<name>.json and <build>/levels/<ref>/<name>.json"""
    build = tmp_path / "build"
    write_artifact(build / REGISTRY_REF / "Ethernaut.json", compiled_contracts[REGISTRY_REF])
    for ref in LEVEL_REFS:
        name = ref.split(".")[0]
        write_artifact(build / "levels" / ref / f"{name}.json", compiled_contracts[ref])
    return build


@pytest.fixture
def manifest_path(tmp_path):
    """Manifest with the two sample levels"""
    path = tmp_path / "gamedata.json"
    path.write_text(json.dumps({
        "levels": [
            {
                "name": "Fallback",
                "levelContract": "Fallback.vy",
                "deployParams": [],
                "deployId": "0",
            },
            {
                "name": "Token",
                "levelContract": "Token.vy",
                "deployParams": [21000000],
                "deployId": "1",
            },
        ]
    }))
    return path


@pytest.fixture
def provider():
    """Fresh in-process chain for each test"""
    return AsyncEthereumTesterProvider()


@pytest.fixture
def w3(provider):
    return AsyncWeb3(provider)


@pytest.fixture
def local_network():
    return LOCAL


@pytest.fixture
def remote_network():
    return SEPOLIA


class InMemoryResolver:
    """Artifact resolver backed by a dict, records every lookup"""

    def __init__(self, compiled: dict):
        self.artifacts = {
            ref: Artifact(abi=c["abi"], bytecode=c["bytecode"])
            for ref, c in compiled.items()
        }
        self.lookups = []

    def resolve(self, contract_ref):
        self.lookups.append(contract_ref)
        if contract_ref not in self.artifacts:
            raise FileNotFoundError(contract_ref)
        return self.artifacts[contract_ref]

    def resolve_level(self, contract_ref):
        return self.resolve(contract_ref)


@pytest.fixture
def resolver(compiled_contracts):
    return InMemoryResolver(compiled_contracts)
