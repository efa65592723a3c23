"""
Download and parse a package's ``manifest.json``.
"""
from __future__ import annotations

import logging
from typing import Optional

from logseq_marketplace.domain.models import Manifest
from logseq_marketplace.domain.results import Absent, Failed, Ok, StepResult, value_or_none
from logseq_marketplace.services.fetcher.client import GitHubClient

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"


def get_manifest_url(client: GitHubClient, package_name: str) -> str:
    return f"{client.settings.raw_packages_url}/{package_name}/{MANIFEST_FILENAME}"


async def fetch_manifest_result(client: GitHubClient, package_name: str) -> StepResult[Manifest]:
    """
    Fetch the manifest of *package_name*.

    A non-success status is ``Absent``; network errors, invalid JSON and
    documents that are not JSON objects are ``Failed``. Callers treat both
    the same way: the package has no usable manifest.
    """
    url = get_manifest_url(client, package_name)
    try:
        response = await client.get(url)
        if not response.is_success:
            logger.info(f"No manifest.json for {package_name} (HTTP {response.status_code})")
            return Absent(f"HTTP {response.status_code}")

        manifest = Manifest.model_validate(response.json())
    except ValueError as e:
        # Invalid JSON, or a document that is not an object
        logger.warning(f"Invalid manifest.json for {package_name}: {e}")
        return Failed(e)
    except Exception as e:
        logger.warning(f"Error fetching manifest for {package_name}: {e}")
        return Failed(e)

    logger.info(f"Fetched manifest for {package_name}")
    return Ok(manifest)


async def fetch_manifest(client: GitHubClient, package_name: str) -> Optional[Manifest]:
    return value_or_none(await fetch_manifest_result(client, package_name))
