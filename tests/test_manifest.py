"""
Test suite for the game manifest reader
"""

import json
import pytest
from level_deployer.manifest import Level, load_levels


def write_manifest(tmp_path, levels):
    path = tmp_path / "gamedata.json"
    path.write_text(json.dumps({"levels": levels}))
    return path


def test_load_levels(manifest_path):
    levels = load_levels(manifest_path)

    assert levels == [
        Level(name="Fallback", level_contract="Fallback.vy", deploy_id="0"),
        Level(name="Token", level_contract="Token.vy", deploy_id="1", deploy_params=(21000000,)),
    ]


def test_extra_fields_are_ignored(tmp_path):
    path = write_manifest(tmp_path, [{
        "name": "Fallback",
        "difficulty": "1",
        "description": "fallback.md",
        "levelContract": "Fallback.sol",
        "deployId": "0",
    }])

    [level] = load_levels(path)
    assert level.deploy_params == ()


def test_missing_manifest_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_levels(tmp_path / "nope.json")


def test_manifest_without_levels_raises(tmp_path):
    path = tmp_path / "gamedata.json"
    path.write_text("{}")

    with pytest.raises(ValueError):
        load_levels(path)


def test_missing_required_field_raises(tmp_path):
    path = write_manifest(tmp_path, [{"name": "Fallback", "deployId": "0"}])

    with pytest.raises(ValueError, match="levelContract"):
        load_levels(path)


def test_duplicate_deploy_id_rejected(tmp_path):
    path = write_manifest(tmp_path, [
        {"name": "A", "levelContract": "A.sol", "deployId": "0"},
        {"name": "B", "levelContract": "B.sol", "deployId": "0"},
    ])

    with pytest.raises(ValueError, match="Duplicate"):
        load_levels(path)


def test_registry_deploy_id_reserved(tmp_path):
    path = write_manifest(tmp_path, [
        {"name": "A", "levelContract": "A.sol", "deployId": "ethernaut"},
    ])

    with pytest.raises(ValueError, match="reserved"):
        load_levels(path)


def test_deploy_params_must_be_list(tmp_path):
    path = write_manifest(tmp_path, [
        {"name": "A", "levelContract": "A.sol", "deployId": "0", "deployParams": 5},
    ])

    with pytest.raises(ValueError):
        load_levels(path)
