"""
Pydantic models for the marketplace fetcher.

This module defines the data flowing through the pipeline:
- Listing entries returned by the GitHub contents API
- Plugin manifests declared by package authors
- Commit dates derived from a package's history
- Output records written to the JSON document

Output records keep their field declaration order, which is the key order
of the generated JSON.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator


NO_MANIFEST_ERROR = "No manifest.json"


def as_text(value: Any) -> str:
    """
    Render a manifest value for an output record.

    Missing and falsy values become ``""``; strings pass through; anything
    else (numbers, booleans, objects, lists) is written as JSON text,
    e.g. ``1.2`` -> ``"1.2"``, ``true`` -> ``"true"``.
    """
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, sort_keys=True)


# ---------------------------------------------------------------------------
# Remote Models
# ---------------------------------------------------------------------------


class PackageListing(BaseModel):
    """
    One entry of the ``packages`` directory listing.

    Only entries whose ``type`` is ``"dir"`` describe a plugin package; files
    that live next to them (README and the like) are ignored downstream.
    """

    model_config = ConfigDict(extra="allow")

    name: str = ""
    type: str = ""
    path: str = ""
    html_url: str = ""
    git_url: str = ""

    @field_validator("name", "type", "path", "html_url", "git_url", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        # Submodule entries report null urls.
        return "" if value is None else value

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"


class Manifest(BaseModel):
    """
    The ``manifest.json`` a plugin author ships with the package.

    Every field is optional and kept as the author wrote it, whatever its
    JSON type; only ``PackageRecord.from_manifest`` turns values into text.
    Keys the fetcher does not use (``effect``, ``theme``, ``sponsors`` ...)
    are preserved as extras.
    """

    model_config = ConfigDict(extra="allow")

    title: Any = None
    name: Any = None
    id: Any = None
    description: Any = None
    author: Any = None
    repo: Any = None
    version: Any = None
    icon: Any = None

    # Local icon path, set once the icon step has run.
    _icon_url: str = PrivateAttr(default="")

    @property
    def icon_url(self) -> str:
        return self._icon_url

    @icon_url.setter
    def icon_url(self, value: Optional[str]) -> None:
        self._icon_url = value or ""


class CommitDates(BaseModel):
    """
    Creation and last-update timestamps of a package directory.

    Both values are ISO-8601 strings as returned by GitHub, or empty strings
    when the history could not be determined.
    """

    created_at: str = ""
    last_updated: str = ""


# ---------------------------------------------------------------------------
# Output Models
# ---------------------------------------------------------------------------


class PackageRecord(BaseModel):
    """
    Output record for a package whose manifest could be read.
    """

    name: str
    id: str = ""
    description: str = ""
    author: str = ""
    repo: str = ""
    version: str = ""
    dir: str
    iconUrl: str = ""
    created_at: str = ""
    last_updated: str = ""

    @classmethod
    def from_manifest(
        cls,
        listing: PackageListing,
        manifest: Manifest,
        dates: CommitDates,
    ) -> "PackageRecord":
        return cls(
            name=as_text(manifest.name) or listing.name,
            id=as_text(manifest.id),
            description=as_text(manifest.description),
            author=as_text(manifest.author),
            repo=as_text(manifest.repo),
            version=as_text(manifest.version),
            dir=listing.name,
            iconUrl=manifest.icon_url,
            created_at=dates.created_at,
            last_updated=dates.last_updated,
        )


class PackageErrorRecord(BaseModel):
    """
    Output record for a package without a readable manifest.
    """

    name: str
    error: str = Field(default=NO_MANIFEST_ERROR)
    iconUrl: str = ""
    created_at: str = ""
    last_updated: str = ""

    @classmethod
    def missing_manifest(cls, listing: PackageListing, dates: CommitDates) -> "PackageErrorRecord":
        return cls(
            name=listing.name,
            error=NO_MANIFEST_ERROR,
            iconUrl="",
            created_at=dates.created_at,
            last_updated=dates.last_updated,
        )


OutputRecord = Union[PackageRecord, PackageErrorRecord]
