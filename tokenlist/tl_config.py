"""tokenlist config (v1): optional JSON file naming the build paths.

Example:
{
  "assets_dir": "../assets",
  "token_list_path": "./tokenList.json",
  "log_path": null
}

Rules:
- relative paths resolve against the directory holding the config file
- absent/null keys stay None; CLI flags fill or override them
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from tokenlist.json_io import load_schema, read_json


PATH_KEYS = ("assets_dir", "token_list_path", "log_path")


def load_config(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    obj = read_json(p)
    if not isinstance(obj, dict):
        raise TypeError("config must be a JSON object")

    Draft202012Validator(load_schema("tokenlist_config_v1.schema.json")).validate(obj)

    base = p.resolve().parent
    cfg: dict[str, Any] = {}
    for k in PATH_KEYS:
        v = obj.get(k)
        if v in (None, ""):
            cfg[k] = None
            continue
        vp = Path(v)
        cfg[k] = str(vp if vp.is_absolute() else base / vp)
    return cfg
