"""
Derive creation and last-update dates from a package's commit history.
"""
from __future__ import annotations

import logging
from typing import Any

from logseq_marketplace.domain.models import CommitDates
from logseq_marketplace.domain.results import Absent, Failed, Ok, StepResult
from logseq_marketplace.services.fetcher.client import GitHubClient

logger = logging.getLogger(__name__)


def _committer_date(entry: Any) -> str:
    """
    Return ``entry["commit"]["committer"]["date"]`` or an empty string.
    """
    node = entry
    for key in ("commit", "committer", "date"):
        if not isinstance(node, dict):
            return ""
        node = node.get(key)
    return node if isinstance(node, str) else ""


def commit_dates_from_history(commits: list) -> CommitDates:
    """
    Build commit dates from a newest-first list of GitHub commit objects.
    """
    if not commits:
        return CommitDates()
    return CommitDates(
        created_at=_committer_date(commits[-1]),
        last_updated=_committer_date(commits[0]),
    )


async def fetch_commit_dates_result(client: GitHubClient, package_name: str) -> StepResult[CommitDates]:
    """
    Query the first page of commits touching ``packages/<package_name>``.

    Only one page is requested, so a package with more commits than the page
    size reports the oldest commit *on that page* as its creation date.
    """
    settings = client.settings
    params = {
        "path": f"{settings.packages_root}/{package_name}",
        "per_page": settings.commits_per_page,
    }
    try:
        response = await client.get(settings.commits_url, params=params)
        if not response.is_success:
            logger.info(f"Could not fetch commits for {package_name} (HTTP {response.status_code})")
            return Failed(RuntimeError(f"HTTP {response.status_code}"))
        commits = response.json()
    except Exception as e:
        logger.warning(f"Error fetching commit dates for {package_name}: {e}")
        return Failed(e)

    if not isinstance(commits, list) or not commits:
        logger.debug(f"No commit history for {package_name}")
        return Absent("no commits")

    return Ok(commit_dates_from_history(commits))


async def fetch_commit_dates(client: GitHubClient, package_name: str) -> CommitDates:
    """
    Like ``fetch_commit_dates_result`` but never fails: unknown dates are empty.
    """
    result = await fetch_commit_dates_result(client, package_name)
    if isinstance(result, Ok):
        return result.value
    return CommitDates()
