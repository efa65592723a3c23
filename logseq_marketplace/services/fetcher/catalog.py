"""
List the package directories of the marketplace repository.
"""
from __future__ import annotations

import logging
from typing import List

import httpx
from pydantic import ValidationError

from logseq_marketplace.core.errors import CatalogFetchError
from logseq_marketplace.domain.models import PackageListing
from logseq_marketplace.services.fetcher.client import GitHubClient

logger = logging.getLogger(__name__)

UNREADABLE_BODY = "(could not read error body)"


def _read_error_body(response: httpx.Response) -> str:
    try:
        return response.text
    except (httpx.HTTPError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read error body: {e}")
        return UNREADABLE_BODY


async def fetch_packages(client: GitHubClient) -> List[PackageListing]:
    """
    Return the ``packages`` directory listing in the order GitHub reports it.

    No filtering happens here; non-directory entries are included.

    Raises:
        CatalogFetchError: the API answered with a non-success status or
            with something other than a JSON array of listing objects.
    """
    logger.info("Fetching package list from GitHub...")
    response = await client.get(client.settings.catalog_url)

    if not response.is_success:
        raise CatalogFetchError(
            response.status_code,
            response.reason_phrase,
            _read_error_body(response),
        )

    try:
        data = response.json()
    except ValueError as e:
        raise CatalogFetchError(response.status_code, response.reason_phrase, f"invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise CatalogFetchError(
            response.status_code,
            response.reason_phrase,
            f"expected a JSON array, got {type(data).__name__}",
        )

    listings = []
    for index, entry in enumerate(data):
        try:
            listings.append(PackageListing.model_validate(entry))
        except ValidationError as e:
            raise CatalogFetchError(
                response.status_code,
                response.reason_phrase,
                f"malformed entry at index {index}: {e}",
            ) from e
    logger.info(f"Found {len(listings)} packages.")
    return listings
