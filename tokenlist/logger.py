"""Structured logger writing jsonl events and echoing them to the console.

Each event is one flat JSON object per line, appended to `log_path` when one
is given. The human `message` is always printed: INFO to stdout, WARN and
ERROR to stderr.
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


LEVELS = ("INFO", "WARN", "ERROR")


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def log_event(
    *,
    event: str,
    message: str,
    level: str = "INFO",
    log_path: Path | None = None,
    tool: str | None = None,
    file: str | None = None,
    contract: str | None = None,
    diagnostics: dict | list | None = None,
    **extra: Any,
) -> dict:
    if level not in LEVELS:
        raise ValueError(f"unknown level={level!r} (expected {'|'.join(LEVELS)})")

    obj: dict[str, Any] = {
        "ts": utc_now(),
        "level": level,
        "event": event,
        "message": message,
        "tool": tool,
        "file": file,
        "contract": contract,
        "diagnostics": diagnostics,
    }
    # attach extra fields (non-breaking)
    for k, v in extra.items():
        if k not in obj:
            obj[k] = v

    stream = sys.stdout if level == "INFO" else sys.stderr
    print(message, file=stream)

    if log_path is not None:
        p = Path(log_path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("a", encoding="utf-8") as f:
            f.write(json.dumps(obj, ensure_ascii=False) + "\n")

    return obj
