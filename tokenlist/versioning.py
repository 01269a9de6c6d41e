"""Token list version bumps.

Versions are `MAJOR.MINOR.PATCH`. Patch and minor roll over past 9 into the
next component; major saturates at 999.
"""

from __future__ import annotations


MAX_MINOR = 9
MAX_PATCH = 9
MAX_MAJOR = 999


def parse_version(version: str) -> tuple[int, int, int]:
    parts = version.split(".") if isinstance(version, str) else []
    if len(parts) != 3 or not all(x.isascii() and x.isdigit() for x in parts):
        raise ValueError(f"invalid version {version!r} (expected MAJOR.MINOR.PATCH)")
    major, minor, patch = (int(x) for x in parts)
    return major, minor, patch


def increment_version(version: str) -> str:
    major, minor, patch = parse_version(version)

    patch += 1
    if patch > MAX_PATCH:
        patch = 0
        minor += 1
        if minor > MAX_MINOR:
            minor = 0
            major += 1

    # saturate; minor/patch still reset on the carry
    major = min(major, MAX_MAJOR)

    return f"{major}.{minor}.{patch}"
