"""Build the token list from a directory of asset files.

One run:
- load the existing token list (fatal if missing or malformed)
- load every `*.json` asset file (unreadable files are skipped)
- reconcile: validate, add, update, remove
- when anything changed: bump the version, sort assets by contract, write

Usage:
  python -m tokenlist.build_token_list --assets-dir assets --token-list tokenList.json

Options:
  --config <file>   tokenlist config (paths); flags override it
  --log <file>      also append structured events to this jsonl file
  --report <file>   write a JSON report of the run
  --dry-run         reconcile and log, but never write the token list
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from tokenlist.errors import ManifestError, ParseError, WriteError
from tokenlist.json_io import load_asset_dir, load_token_list, write_json
from tokenlist.logger import log_event
from tokenlist.reconcile import reconcile, sort_assets
from tokenlist.versioning import increment_version


TOOL = "build_token_list"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def merge_and_verify_assets(
    assets_dir: str | Path,
    token_list_path: str | Path,
    *,
    log_path: Path | None = None,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Run one reconciliation and return a machine-first report.

    `status` is one of WRITTEN, NO_CHANGES, DRY_RUN, FAILED.
    """
    assets_dir = Path(assets_dir)
    token_list_path = Path(token_list_path)

    report: dict[str, Any] = {
        "report_version": "0.1",
        "created_at": now_iso(),
        "assets_dir": str(assets_dir),
        "token_list_path": str(token_list_path),
        "dry_run": dry_run,
        "status": "FAILED",
        "error": None,
        "changed": False,
        "version_from": None,
        "version_to": None,
        "stats": {},
        "added": [],
        "updated": [],
        "removed": [],
        "invalid": [],
        "unreadable": [],
    }

    def fail(event: str, message: str) -> dict[str, Any]:
        log_event(
            event=event,
            level="ERROR",
            message=message,
            log_path=log_path,
            tool=TOOL,
            file=str(token_list_path),
        )
        report["error"] = message
        return report

    log_event(
        event="RUN_START",
        message=f"Reconciling {assets_dir} into {token_list_path}",
        log_path=log_path,
        tool=TOOL,
        dry_run=dry_run,
    )

    try:
        token_list = load_token_list(token_list_path)
    except (ParseError, ManifestError) as e:
        return fail(
            "TOKEN_LIST_INVALID",
            f"Existing asset list is invalid or not found at {token_list_path}: {e}",
        )
    report["version_from"] = token_list["version"]

    try:
        asset_files, unreadable = load_asset_dir(assets_dir)
    except OSError as e:
        return fail("ASSETS_DIR_UNREADABLE", f"Cannot list asset directory {assets_dir}: {e}")

    for name, err in unreadable:
        log_event(
            event="ASSET_UNREADABLE",
            level="ERROR",
            message=f"Skipping {name}: {err}",
            log_path=log_path,
            tool=TOOL,
            file=name,
        )
        report["unreadable"].append({"file": name, "error": err})

    result = reconcile(token_list, asset_files, log_path=log_path)
    report.update(
        changed=result.changed,
        added=result.added,
        updated=result.updated,
        removed=result.removed,
        invalid=[asdict(x) for x in result.invalid],
        stats={
            "asset_files": len(asset_files) + len(unreadable),
            "added": len(result.added),
            "updated": len(result.updated),
            "removed": len(result.removed),
            "invalid": len(result.invalid),
            "unreadable": len(unreadable),
        },
    )

    if not result.changed:
        log_event(
            event="NO_CHANGES",
            message="No new assets were added, changes detected, or assets deleted.",
            log_path=log_path,
            tool=TOOL,
        )
        report["status"] = "NO_CHANGES"
        report["version_to"] = token_list["version"]
        return report

    try:
        new_version = increment_version(token_list["version"])
    except ValueError as e:
        return fail(
            "TOKEN_LIST_INVALID",
            f"Existing asset list is invalid or not found at {token_list_path}: {e}",
        )
    report["version_to"] = new_version
    updated = {
        **result.token_list,
        "version": new_version,
        "assets": sort_assets(result.token_list["assets"]),
    }

    if dry_run:
        log_event(
            event="DRY_RUN",
            message=f"Dry run: would write version {new_version} to {token_list_path}",
            log_path=log_path,
            tool=TOOL,
        )
        report["status"] = "DRY_RUN"
        return report

    try:
        sha = write_json(token_list_path, updated)
    except WriteError as e:
        return fail("WRITE_FAILED", f"Error writing file: {e}")

    log_event(
        event="TOKEN_LIST_WRITTEN",
        message=f"Successfully written data to {token_list_path}",
        log_path=log_path,
        tool=TOOL,
        file=str(token_list_path),
        diagnostics={"version": new_version, "sha256": sha},
    )
    report["status"] = "WRITTEN"
    return report


def main(argv: list[str] | None = None) -> int:
    import argparse

    p = argparse.ArgumentParser()
    p.add_argument("--assets-dir", default=None, help="Directory of *.json asset files")
    p.add_argument("--token-list", default=None, help="Token list path (json)")
    p.add_argument(
        "--config",
        default=None,
        help="Path to a tokenlist config (optional; can provide assets_dir, token_list_path, log_path)",
    )
    p.add_argument("--log", default=None, help="Append structured events to this jsonl file")
    p.add_argument("--report", default=None, help="Write a JSON run report here")
    p.add_argument("--dry-run", action="store_true")
    ns = p.parse_args(argv)

    assets_dir: str | None = ns.assets_dir
    token_list_path: str | None = ns.token_list
    log_path: str | None = ns.log
    if ns.config:
        from tokenlist.tl_config import load_config

        cfg = load_config(ns.config)
        assets_dir = assets_dir or cfg.get("assets_dir")
        token_list_path = token_list_path or cfg.get("token_list_path")
        log_path = log_path or cfg.get("log_path")

    if not assets_dir or not token_list_path:
        p.error("missing paths: pass --assets-dir and --token-list or provide --config")

    report = merge_and_verify_assets(
        assets_dir,
        token_list_path,
        log_path=Path(log_path) if log_path else None,
        dry_run=ns.dry_run,
    )
    log_event(
        event="RUN_END",
        message=f"status={report['status']} version={report['version_to']}",
        log_path=Path(log_path) if log_path else None,
        tool=TOOL,
        stats=report["stats"],
    )

    if ns.report:
        try:
            write_json(Path(ns.report), report)
        except WriteError as e:
            log_event(
                event="WRITE_FAILED",
                level="ERROR",
                message=f"Error writing report: {e}",
                log_path=Path(log_path) if log_path else None,
                tool=TOOL,
                file=ns.report,
            )
            return 2

    return 2 if report["status"] == "FAILED" else 0


if __name__ == "__main__":
    raise SystemExit(main())
