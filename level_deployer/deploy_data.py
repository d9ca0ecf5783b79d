"""
Deploy data store

Per-network JSON mapping of deployment identifier -> deployed address.
"""

import os
import json
import tempfile
from pathlib import Path
from typing import Dict

from .config import GAMEDATA_DIR


def deploy_data_path(network_name: str, gamedata_dir: Path = GAMEDATA_DIR) -> Path:
    return Path(gamedata_dir) / f"deploy.{network_name}.json"


def load_deploy_data(path) -> Dict[str, str]:
    """Load deploy data, returning an empty record if the file is missing or corrupt"""
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}

    if not isinstance(data, dict):
        return {}
    return data


def store_deploy_data(path, deploy_data: Dict[str, str]):
    """Replace the deploy data file atomically. Write errors propagate and
    leave the previous file untouched."""
    path = Path(path)
    print(f"💾 Writing updated deploy data: {path}")

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(deploy_data, f, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise
