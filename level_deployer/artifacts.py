"""
Compiled contract artifacts

Resolves a contract reference (e.g. Fallback.sol) to its ABI and bytecode
in the build directory produced by the contract toolchain:

    <build>/<ref>/<name>.json            registry contract
    <build>/levels/<ref>/<name>.json     level contracts
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .config import BUILD_DIR


@dataclass(frozen=True)
class Artifact:
    abi: List[dict]
    bytecode: str


def without_extension(contract_ref: str) -> str:
    return contract_ref.split(".")[0]


def load_artifact(path: Path) -> Artifact:
    """Load an artifact file. Missing files raise FileNotFoundError."""
    with open(path) as f:
        compiled = json.load(f)

    if "abi" not in compiled or "bytecode" not in compiled:
        raise ValueError(f"Artifact has no abi/bytecode: {path}")

    bytecode = compiled["bytecode"]
    # Foundry nests the hex under "object"
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object", "")

    if not bytecode:
        raise ValueError(f"Artifact has empty bytecode: {path}")

    return Artifact(abi=compiled["abi"], bytecode=bytecode)


class ArtifactResolver:
    def __init__(self, build_dir: Path = BUILD_DIR):
        self.build_dir = Path(build_dir)

    def path_for(self, contract_ref: str, level: bool = False) -> Path:
        base = self.build_dir / "levels" if level else self.build_dir
        return base / contract_ref / f"{without_extension(contract_ref)}.json"

    def resolve(self, contract_ref: str) -> Artifact:
        return load_artifact(self.path_for(contract_ref))

    def resolve_level(self, contract_ref: str) -> Artifact:
        return load_artifact(self.path_for(contract_ref, level=True))
