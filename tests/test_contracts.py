import json
from pathlib import Path

import pytest


@pytest.fixture()
def contracts_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "tokenlist" / "contracts"


def test_contract_schemas_are_valid(contracts_dir: Path):
    from jsonschema import Draft202012Validator

    paths = sorted(contracts_dir.glob("*.schema.json"))
    assert {p.name for p in paths} >= {
        "asset_v1.schema.json",
        "token_list_v1.schema.json",
        "tokenlist_config_v1.schema.json",
    }
    for p in paths:
        obj = json.loads(p.read_text(encoding="utf-8"))
        assert isinstance(obj, dict)
        assert obj.get("$schema")
        Draft202012Validator.check_schema(obj)
