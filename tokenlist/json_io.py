"""JSON IO for asset files and the token list.

Asset files live one per asset in a flat directory; only `*.json` files are
read. The token list is a single JSON object `{version, assets: [...]}`.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from jsonschema import Draft202012Validator

from tokenlist.errors import ManifestError, ParseError, WriteError


ASSET_SUFFIX = ".json"
CONTRACTS_DIR = Path(__file__).resolve().parent / "contracts"


@dataclass(frozen=True)
class AssetFile:
    """One parsed asset file; `record` is whatever JSON value the file held."""

    file: str
    record: Any

    @property
    def key(self) -> str | None:
        return asset_key(self.record)


def asset_key(record: Any) -> str | None:
    """Identity of an asset record.

    `contract` when present, else the `code:issuer` pair. None means the record
    carries no identity at all.
    """
    if not isinstance(record, dict):
        return None
    contract = record.get("contract")
    if isinstance(contract, str):
        return contract
    code = record.get("code")
    issuer = record.get("issuer")
    if isinstance(code, str) and isinstance(issuer, str):
        return f"{code}:{issuer}"
    return None


def load_schema(name: str) -> dict:
    return json.loads((CONTRACTS_DIR / name).read_text(encoding="utf-8"))


def read_json(path: str | Path) -> Any:
    p = Path(path)
    try:
        return json.loads(p.read_text(encoding="utf-8-sig"))
    except (OSError, ValueError) as e:
        raise ParseError(f"failed to parse JSON from {p}: {e}") from e


def sha256_bytes(b: bytes) -> str:
    h = hashlib.sha256()
    h.update(b)
    return "sha256:" + h.hexdigest()


def write_json(path: str | Path, obj: Any) -> str:
    """Write `obj` as indented JSON and return the sha256 of the bytes written."""
    p = Path(path)
    data = (json.dumps(obj, ensure_ascii=False, indent=2) + "\n").encode("utf-8")
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
    except OSError as e:
        raise WriteError(f"failed to write {p}: {e}") from e
    return sha256_bytes(data)


def iter_asset_files(assets_dir: str | Path) -> Iterable[Path]:
    d = Path(assets_dir)
    for p in sorted(d.iterdir(), key=lambda x: x.name):
        if p.is_file() and p.suffix == ASSET_SUFFIX:
            yield p


def load_asset_dir(
    assets_dir: str | Path,
) -> tuple[list[AssetFile], list[tuple[str, str]]]:
    """Return (asset_files, unreadable) where unreadable is [(file, error)]."""
    asset_files: list[AssetFile] = []
    unreadable: list[tuple[str, str]] = []
    for p in iter_asset_files(assets_dir):
        try:
            record = read_json(p)
        except ParseError as e:
            unreadable.append((p.name, str(e)))
            continue
        asset_files.append(AssetFile(file=p.name, record=record))
    return asset_files, unreadable


def load_token_list(path: str | Path) -> dict:
    obj = read_json(path)
    if not isinstance(obj, dict):
        raise ManifestError(f"token list must be a JSON object: {path}")

    v = Draft202012Validator(load_schema("token_list_v1.schema.json"))
    errors = sorted(v.iter_errors(obj), key=lambda e: list(map(str, e.path)))
    if errors:
        details = "; ".join(f"{list(e.path)}: {e.message}" for e in errors)
        raise ManifestError(f"invalid token list {path}: {details}")
    return obj
