"""Error types for token list builds.

Schema violations are not exceptions here; see asset_validate.validate_asset.
"""

from __future__ import annotations


class ParseError(ValueError):
    """A file could not be read or is not well-formed JSON."""


class ManifestError(ValueError):
    """The token list parsed but cannot be used (bad shape or version)."""


class WriteError(OSError):
    """The token list could not be written."""
