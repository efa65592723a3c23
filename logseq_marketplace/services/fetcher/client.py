"""
Shared HTTP session for talking to GitHub.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from logseq_marketplace.core.settings import FetchSettings

logger = logging.getLogger(__name__)


class GitHubClient:
    """
    Wraps one ``httpx.AsyncClient`` for the duration of a run.

    Every request carries the headers from the settings, so the optional
    token is attached without any component looking at the environment.
    """

    def __init__(
        self,
        settings: FetchSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self._client = httpx.AsyncClient(
            headers=settings.request_headers(),
            follow_redirects=True,
            transport=transport,
        )
        if not settings.github_token:
            logger.debug("No GitHub token configured, using anonymous access")

    async def get(self, url: str, **kwargs) -> httpx.Response:
        logger.debug(f"GET {url}")
        return await self._client.get(url, **kwargs)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
