"""Validate asset records against the asset_v1 schema.

Usage:
  python -m tokenlist.asset_validate --assets-dir <dir>
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from jsonschema import Draft202012Validator, FormatChecker

from tokenlist.json_io import load_asset_dir, load_schema


ASSET_SCHEMA = "asset_v1.schema.json"


@lru_cache(maxsize=1)
def asset_validator() -> Draft202012Validator:
    return Draft202012Validator(
        load_schema(ASSET_SCHEMA), format_checker=FormatChecker()
    )


def validate_asset(record: Any) -> list[str]:
    """Return the schema violations of `record`; an empty list means valid."""
    errors = sorted(
        asset_validator().iter_errors(record),
        key=lambda e: (list(map(str, e.path)), e.message),
    )
    return [f"{e.json_path}: {e.message}" for e in errors]


def main(argv: list[str] | None = None) -> int:
    import argparse

    p = argparse.ArgumentParser()
    p.add_argument("--assets-dir", required=True)
    ns = p.parse_args(argv)

    asset_files, unreadable = load_asset_dir(ns.assets_dir)
    problems: list[str] = [f"{name}: {err}" for name, err in unreadable]
    for af in asset_files:
        problems.extend(f"{af.file}: {e}" for e in validate_asset(af.record))

    if problems:
        for e in problems:
            print(e)
        return 2
    print("OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
