import json
from pathlib import Path

import pytest


CONTRACT = "C" + "A" * 55
ISSUER = "G" + "B" * 55


def asset(**kw):
    rec = {"name": "TokenOne", "org": "OrgOne", "contract": CONTRACT}
    rec.update(kw)
    return {k: v for k, v in rec.items() if v is not None}


def test_validate_asset_ok_minimal():
    from tokenlist.asset_validate import validate_asset

    assert validate_asset(asset()) == []


def test_validate_asset_ok_all_optional_fields():
    from tokenlist.asset_validate import validate_asset

    rec = asset(
        domain="tokens.example.org",
        icon="https://example.org/icon.png",
        decimals=7,
        comment="a" * 150,
    )
    assert validate_asset(rec) == []


@pytest.mark.parametrize("name,ok", [("a" * 4, True), ("a" * 30, True), ("a" * 3, False), ("a" * 31, False)])
def test_name_length_bounds(name, ok):
    from tokenlist.asset_validate import validate_asset

    assert (validate_asset(asset(name=name)) == []) is ok


@pytest.mark.parametrize("org,ok", [("a" * 5, True), ("a" * 30, True), ("a" * 4, False), ("a" * 31, False)])
def test_org_length_bounds(org, ok):
    from tokenlist.asset_validate import validate_asset

    assert (validate_asset(asset(org=org)) == []) is ok


def test_issuer_mode_without_contract_is_valid():
    from tokenlist.asset_validate import validate_asset

    rec = {"name": "TokenTwo", "org": "OrgTwo", "code": "USDC", "issuer": ISSUER}
    assert validate_asset(rec) == []


def test_both_identity_modes_is_valid():
    from tokenlist.asset_validate import validate_asset

    assert validate_asset(asset(code="USDC", issuer=ISSUER)) == []


def test_no_identity_is_invalid():
    from tokenlist.asset_validate import validate_asset

    assert validate_asset({"name": "TokenOne", "org": "OrgOne"})


def test_code_without_issuer_is_invalid():
    from tokenlist.asset_validate import validate_asset

    assert validate_asset({"name": "TokenOne", "org": "OrgOne", "code": "USDC"})


@pytest.mark.parametrize(
    "field,value",
    [
        ("contract", "C" + "a" * 55),
        ("contract", "C" + "A" * 54),
        ("contract", "G" + "A" * 55),
        ("code", "TOOLONGCODE13"),
        ("code", "US-D"),
        ("issuer", "G" + "B" * 56),
        ("domain", "-bad.example.org"),
        ("domain", "localhost"),
        ("icon", "not a uri"),
        ("decimals", 39),
        ("decimals", -1),
        ("decimals", 1.5),
        ("decimals", True),
        ("comment", "a" * 151),
        ("contract", "C" + "A" * 55 + "\n"),
        ("code", "USD\n"),
        ("issuer", "G" + "B" * 55 + "\n"),
        ("domain", "tokens.example.org\n"),
        ("icon", "bafkreihdwdcefgh4dq\n"),
    ],
)
def test_field_violations(field, value):
    from tokenlist.asset_validate import validate_asset

    rec = asset()
    rec[field] = value
    if field in ("code", "issuer"):
        rec.setdefault("code", "USDC")
        rec.setdefault("issuer", ISSUER)
    assert validate_asset(rec)


def test_icon_content_address_is_valid():
    from tokenlist.asset_validate import validate_asset

    assert validate_asset(asset(icon="bafkreihdwdcefgh4dqkjv67uzcmw7oje")) == []


def test_unknown_field_is_rejected():
    from tokenlist.asset_validate import validate_asset

    errs = validate_asset(asset(website="https://example.org"))
    assert errs
    assert any("website" in e for e in errs)


def test_non_object_is_rejected():
    from tokenlist.asset_validate import validate_asset

    assert validate_asset(["not", "an", "object"])


def test_errors_name_the_field():
    from tokenlist.asset_validate import validate_asset

    errs = validate_asset(asset(decimals=99))
    assert errs == [e for e in errs if e.startswith("$.decimals")]


def test_asset_validate_cli(tmp_path: Path, capsys):
    (tmp_path / "a.json").write_text(json.dumps(asset()), encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    from tokenlist.asset_validate import main

    assert main(["--assets-dir", str(tmp_path)]) == 0
    assert "OK" in capsys.readouterr().out


def test_asset_validate_cli_reports_problems(tmp_path: Path, capsys):
    (tmp_path / "a.json").write_text(json.dumps(asset(name="abc")), encoding="utf-8")
    (tmp_path / "b.json").write_text("{not json", encoding="utf-8")

    from tokenlist.asset_validate import main

    assert main(["--assets-dir", str(tmp_path)]) == 2
    out = capsys.readouterr().out
    assert "a.json" in out
    assert "b.json" in out


def test_trailing_newline_contract_and_code_are_rejected():
    from tokenlist.asset_validate import validate_asset

    rec = {"name": "TokenOne", "org": "OrgOne", "contract": "C" + "A" * 55 + "\n", "code": "USD\n"}
    errs = validate_asset(rec)
    assert any(e.startswith("$.contract") for e in errs)
    assert any(e.startswith("$.code") for e in errs)
