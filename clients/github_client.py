"""Async GitHub REST API client that normalizes every call into an outcome."""

from __future__ import annotations

import logging

import httpx

from config import Settings
from models.schemas import UpstreamOutcome

logger = logging.getLogger(__name__)

INTERNAL_ERROR_STATUS = 500
INTERNAL_ERROR_BODY = '{"message": "Internal error contacting GitHub API"}'


class GitHubClient:
    """Issues authenticated GET requests against the GitHub REST API.

    Non-2xx responses are returned as ordinary outcomes; only transport
    failures are converted, into a synthetic 500 outcome.  The underlying
    ``httpx.AsyncClient`` is pooled and must be closed with :meth:`aclose`.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "User-Agent": settings.github_user_agent,
        }
        if settings.github_token and settings.github_token.strip():
            headers["Authorization"] = f"Bearer {settings.github_token.strip()}"
        self._client = httpx.AsyncClient(
            base_url=settings.github_api_base.rstrip("/") + "/",
            headers=headers,
            timeout=settings.github_timeout,
            transport=transport,
            follow_redirects=True,
        )

    async def send(self, relative_url: str) -> UpstreamOutcome:
        """GET *relative_url* (path plus already-encoded query)."""
        try:
            resp = await self._client.get(relative_url)
            return UpstreamOutcome(status_code=resp.status_code, content=resp.text)
        except Exception:
            logger.exception("GitHub request failed for %s", relative_url)
            return UpstreamOutcome(
                status_code=INTERNAL_ERROR_STATUS, content=INTERNAL_ERROR_BODY
            )

    async def aclose(self) -> None:
        await self._client.aclose()
