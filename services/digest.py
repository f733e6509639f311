"""Digest pipeline: fetch recent events, reduce them, and ask the LLM for a summary."""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone

from clients.llm_client import SummaryBackend
from models.schemas import DigestResponse
from services.github_proxy import GitHubProxy
from utils.activity import build_digest_prompt, reduce_events, render_activity_summary

logger = logging.getLogger(__name__)

PAGE_SIZES: dict[str, int] = {"daily": 30, "weekly": 100}


class InvalidPeriodError(ValueError):
    """Raised for a period other than ``daily`` or ``weekly``."""


class UpstreamStatusError(Exception):
    """Raised when the events fetch comes back with a non-200 status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class DigestService:
    """Produces an LLM-written digest of a user's recent GitHub activity."""

    def __init__(self, proxy: GitHubProxy, backend: SummaryBackend) -> None:
        self._proxy = proxy
        self._backend = backend

    async def summarize(self, username: str, period: str) -> DigestResponse:
        if period not in PAGE_SIZES:
            raise InvalidPeriodError("Period must be 'daily' or 'weekly'")

        t0 = time.monotonic()
        outcome = await self._proxy.fetch(
            f"users/{username}/events?per_page={PAGE_SIZES[period]}"
        )
        if not outcome.ok:
            logger.warning(
                "Failed to fetch events for %s with status %d",
                username, outcome.status_code,
            )
            raise UpstreamStatusError(
                "Failed to fetch GitHub events", status_code=outcome.status_code
            )

        events = json.loads(outcome.content)
        stats = reduce_events(events)
        prompt = build_digest_prompt(username, period, render_activity_summary(stats))
        logger.info("[%s] Reduced %d events (%.1fs)",
                    username, stats.total_events, time.monotonic() - t0)

        digest = await self._backend.generate(prompt)
        logger.info("[%s] Digest generated (%.1fs)", username, time.monotonic() - t0)

        return DigestResponse(
            username=username,
            period=period,
            generated_at=datetime.now(timezone.utc),
            digest=digest,
            event_count=stats.total_events,
        )
