"""
Read-only API over the generated marketplace document.

The endpoints serve whatever the last fetch run wrote; they never talk to
GitHub themselves.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from logseq_marketplace.core.dependencies import get_settings
from logseq_marketplace.core.settings import FetchSettings
from logseq_marketplace.storage.json_writer import read_records

logger = logging.getLogger(__name__)

router = APIRouter()


def _load(settings: FetchSettings) -> List[Dict[str, Any]]:
    path = settings.output_path
    if not path.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{path.name} has not been generated yet",
        )
    try:
        return read_records(path)
    except ValueError as e:
        logger.error(f"Invalid marketplace document {path}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Marketplace document is not valid JSON",
        )


@router.get("/plugins")
async def list_plugins(settings: FetchSettings = Depends(get_settings)) -> List[Dict[str, Any]]:
    """
    Return the full list of records, success and error records alike.
    """
    return _load(settings)


@router.get("/plugins/{package_dir}")
async def get_plugin(package_dir: str, settings: FetchSettings = Depends(get_settings)) -> Dict[str, Any]:
    """
    Return the record of one package, looked up by its directory name.

    Error records have no ``dir`` key, so their ``name`` is matched instead.
    """
    for record in _load(settings):
        if record.get("dir", record.get("name")) == package_dir:
            return record
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown package: {package_dir}")
