"""
Game manifest reader

Loads the level definitions from gamedata.json. Only the fields needed for
deployment are kept; display metadata (difficulty, description, ...) is
ignored.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import MANIFEST_PATH, REGISTRY_ID


@dataclass(frozen=True)
class Level:
    name: str
    level_contract: str
    deploy_id: str
    deploy_params: tuple = field(default_factory=tuple)


def parse_level(entry: dict) -> Level:
    missing = [key for key in ("name", "levelContract", "deployId") if key not in entry]
    if missing:
        raise ValueError(f"Level entry missing {', '.join(missing)}: {entry}")

    params = entry.get("deployParams") or []
    if not isinstance(params, list):
        raise ValueError(f"deployParams must be a list for {entry['deployId']}")

    return Level(
        name=entry["name"],
        level_contract=entry["levelContract"],
        deploy_id=str(entry["deployId"]),
        deploy_params=tuple(params),
    )


def load_levels(path: Path = MANIFEST_PATH) -> List[Level]:
    """Load levels from the manifest.

    Deployment identifiers are the keys level tasks write into the shared
    deploy-data record, so they must be unique and must not collide with
    the registry's identifier.
    """
    with open(path) as f:
        gamedata = json.load(f)

    if "levels" not in gamedata:
        raise ValueError(f"Manifest has no 'levels' array: {path}")

    levels = [parse_level(entry) for entry in gamedata["levels"]]

    seen = set()
    for level in levels:
        if level.deploy_id == REGISTRY_ID:
            raise ValueError(f"Level {level.name} uses reserved deployId '{REGISTRY_ID}'")
        if level.deploy_id in seen:
            raise ValueError(f"Duplicate deployId in manifest: {level.deploy_id}")
        seen.add(level.deploy_id)

    return levels
