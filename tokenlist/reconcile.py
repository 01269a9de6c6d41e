"""Reconcile a token list against the asset files of a directory.

Rules:
- every asset file's identity key counts as present, even when the record then
  fails validation; an invalid file therefore never causes a deletion
- valid records with a known key are shallow-merged onto the existing entry
  when any of their fields differ
- valid records with an unknown key are appended
- keys in the token list that no asset file carries are removed

The input token list is never mutated; the result holds a working copy.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from tokenlist.asset_validate import validate_asset
from tokenlist.json_io import AssetFile, asset_key
from tokenlist.logger import log_event


TOOL = "reconcile"


@dataclass
class InvalidAsset:
    file: str
    errors: list[str]


@dataclass
class ReconcileResult:
    token_list: dict
    changed: bool = False
    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    invalid: list[InvalidAsset] = field(default_factory=list)


def normalize(value: Any) -> Any:
    """Fold integral floats to int so 7 and 7.0 compare equal."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {k: normalize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [normalize(v) for v in value]
    return value


def canonical(value: Any) -> str:
    return json.dumps(normalize(value), sort_keys=True, ensure_ascii=False, separators=(",", ":"))


def has_changed(record: dict, existing: dict) -> bool:
    """True if any field of `record` is missing from or differs in `existing`."""
    return any(
        k not in existing or canonical(v) != canonical(existing[k])
        for k, v in record.items()
    )


def find_asset(assets: Iterable[Any], key: str) -> dict | None:
    return next((a for a in assets if asset_key(a) == key), None)


def sort_assets(assets: Iterable[dict]) -> list[dict]:
    # codepoint order on contract; contract-less entries first, by code:issuer
    def sort_key(a: dict) -> tuple[str, str]:
        c = a.get("contract")
        return (c if isinstance(c, str) else "", asset_key(a) or "")

    return sorted(assets, key=sort_key)


def reconcile(
    token_list: dict,
    asset_files: Iterable[AssetFile],
    *,
    log_path: Path | None = None,
) -> ReconcileResult:
    work = copy.deepcopy(token_list)
    assets: list = work["assets"]
    result = ReconcileResult(token_list=work)

    existing_keys = {k for k in (asset_key(a) for a in assets) if k is not None}
    seen_keys: set[str] = set()

    for af in asset_files:
        key = af.key
        if key is not None:
            seen_keys.add(key)

        errors = validate_asset(af.record)
        if errors:
            result.invalid.append(InvalidAsset(file=af.file, errors=errors))
            log_event(
                event="ASSET_INVALID",
                level="ERROR",
                message=f"Asset validation failed for {af.file}: " + "; ".join(errors),
                log_path=log_path,
                tool=TOOL,
                file=af.file,
                contract=key,
                diagnostics=errors,
            )
            continue

        # a valid record always has a key
        if key is None:
            continue
        existing = find_asset(assets, key)
        if existing is not None:
            if has_changed(af.record, existing):
                log_event(
                    event="ASSET_UPDATED",
                    message=f"Changes detected for asset {key} in file {af.file}",
                    log_path=log_path,
                    tool=TOOL,
                    file=af.file,
                    contract=key,
                )
                existing.update(copy.deepcopy(af.record))
                result.changed = True
                if key not in result.updated and key not in result.added:
                    result.updated.append(key)
        else:
            log_event(
                event="ASSET_ADDED",
                message=f"Adding new asset from file {af.file}",
                log_path=log_path,
                tool=TOOL,
                file=af.file,
                contract=key,
            )
            assets.append(copy.deepcopy(af.record))
            result.changed = True
            result.added.append(key)

    to_delete = sorted(existing_keys - seen_keys)
    if to_delete:
        log_event(
            event="ASSETS_REMOVED",
            message=f"Removing deleted assets: {', '.join(to_delete)}",
            log_path=log_path,
            tool=TOOL,
            diagnostics={"removed": to_delete},
        )
        drop = set(to_delete)
        work["assets"] = [a for a in assets if asset_key(a) not in drop]
        result.changed = True
        result.removed = to_delete

    return result
