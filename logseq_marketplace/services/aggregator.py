"""
Build the marketplace JSON document from the GitHub repository.
"""
from __future__ import annotations

import logging
from typing import AsyncIterator, Iterable, List, Optional

from logseq_marketplace.core.errors import OutputDirectoryMissingError
from logseq_marketplace.core.settings import FetchSettings
from logseq_marketplace.domain.models import (
    CommitDates,
    OutputRecord,
    PackageErrorRecord,
    PackageListing,
    PackageRecord,
)
from logseq_marketplace.domain.results import Absent, Failed, Ok
from logseq_marketplace.services.fetcher.catalog import fetch_packages
from logseq_marketplace.services.fetcher.client import GitHubClient
from logseq_marketplace.services.fetcher.history import fetch_commit_dates_result
from logseq_marketplace.services.fetcher.manifest import fetch_manifest_result
from logseq_marketplace.services.icons import materialize_icon_result
from logseq_marketplace.storage.json_writer import write_records

logger = logging.getLogger(__name__)


async def build_record(client: GitHubClient, listing: PackageListing) -> OutputRecord:
    """
    Assemble the output record of one package directory.
    """
    package_name = listing.name
    manifest_result = await fetch_manifest_result(client, package_name)
    dates_result = await fetch_commit_dates_result(client, package_name)

    if isinstance(dates_result, Ok):
        dates = dates_result.value
    else:
        # Missing history is not surfaced on the record.
        dates = CommitDates()

    if isinstance(manifest_result, Ok):
        manifest = manifest_result.value
        if manifest.icon:
            icon_result = await materialize_icon_result(client, manifest, package_name)
            if isinstance(icon_result, Failed):
                logger.info(f"Continuing without icon for {package_name}: {icon_result}")
        else:
            manifest.icon_url = ""
        return PackageRecord.from_manifest(listing, manifest, dates)

    if isinstance(manifest_result, Absent):
        logger.debug(f"Manifest absent for {package_name}: {manifest_result.reason}")
    else:
        logger.debug(f"Manifest failed for {package_name}: {manifest_result}")
    return PackageErrorRecord.missing_manifest(listing, dates)


async def iter_records(
    client: GitHubClient,
    listings: Iterable[PackageListing],
) -> AsyncIterator[OutputRecord]:
    """
    Yield one record per directory listing, in listing order.

    A package whose processing raises is logged and skipped without a
    record. This differs from a missing manifest, which yields an error
    record.
    """
    processed = 0
    progress_every = client.settings.progress_every
    for listing in listings:
        if not listing.is_dir:
            continue

        logger.info(f"Processing package: {listing.name}")
        try:
            record = await build_record(client, listing)
        except Exception as e:
            logger.error(f"Failed to process package {listing.name}: {e}", exc_info=True)
            record = None

        processed += 1
        if progress_every and processed % progress_every == 0:
            logger.info(f"Processed {processed} packages...")

        if record is not None:
            yield record


async def collect_records(
    client: GitHubClient,
    listings: Iterable[PackageListing],
    limit: Optional[int] = None,
) -> List[OutputRecord]:
    """
    Drain ``iter_records``, stopping after *limit* records when given.
    """
    results: List[OutputRecord] = []
    if limit is not None and limit <= 0:
        return results

    records = iter_records(client, listings)
    try:
        async for record in records:
            results.append(record)
            if limit is not None and len(results) >= limit:
                logger.info(f"Reached limit of {limit} packages")
                break
    finally:
        await records.aclose()
    return results


def ensure_output_dir(settings: FetchSettings) -> None:
    if not settings.output_dir.is_dir():
        raise OutputDirectoryMissingError(settings.output_dir)


async def run(
    settings: FetchSettings,
    limit: Optional[int] = None,
    client: Optional[GitHubClient] = None,
) -> int:
    """
    Fetch the whole marketplace and write the output document.

    Returns the number of records written.

    Raises:
        OutputDirectoryMissingError: before any network activity.
        CatalogFetchError: the listing could not be fetched; nothing is written.
    """
    ensure_output_dir(settings)
    output_path = settings.output_path

    owns_client = client is None
    if client is None:
        client = GitHubClient(settings)

    try:
        listings = await fetch_packages(client)
        results = await collect_records(client, listings, limit=limit)
    finally:
        if owns_client:
            await client.close()

    write_records(output_path, results)
    logger.info(f"Fetched {len(results)} plugins. Output: {output_path}")
    return len(results)
