"""
Exceptions that abort a marketplace fetch run.

Per-package problems never raise these; they are reported through step
results and the output records instead.
"""
from __future__ import annotations

from pathlib import Path


class MarketplaceFetchError(Exception):
    """Base class for fatal fetch errors."""


class CatalogFetchError(MarketplaceFetchError):
    """The package listing could not be retrieved."""

    def __init__(self, status_code: int, reason: str = "", body: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(
            f"Failed to fetch package list. Status: {status_code} {reason}. Body: {body}"
        )


class OutputDirectoryMissingError(MarketplaceFetchError):
    """The configured output directory does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Output directory does not exist: {path}")
