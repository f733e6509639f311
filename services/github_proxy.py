"""Read-through cache in front of the GitHub client."""

from __future__ import annotations

import logging

from clients.github_client import GitHubClient
from models.schemas import UpstreamOutcome
from services.cache import ResponseCache, fingerprint

logger = logging.getLogger(__name__)


class GitHubProxy:
    """Serves GitHub resources from the cache, fetching on a miss.

    Every outcome is stored, error statuses included, so a consistently
    failing resource is not refetched until its entry expires.
    """

    def __init__(
        self,
        client: GitHubClient,
        cache: ResponseCache,
        ttl_seconds: float | None = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._ttl = ttl_seconds

    async def fetch(self, relative_url: str) -> UpstreamOutcome:
        key = fingerprint(relative_url)
        cached = self._cache.get(key)
        if cached is not None:
            logger.info("Cache hit for %s", key)
            return cached

        outcome = await self._client.send(relative_url)
        self._cache.put(key, outcome, ttl=self._ttl)
        logger.info("Cached %s (status %d)", key, outcome.status_code)
        return outcome
