"""Fans out the three dashboard legs and joins them into one document."""

from __future__ import annotations

import asyncio
import json
import logging

from models.schemas import DashboardResponse, LegResult, UpstreamOutcome
from services.github_proxy import GitHubProxy

logger = logging.getLogger(__name__)

MALFORMED_LEG = {"message": "Malformed response from GitHub API"}
FAILED_LEG = {"message": "Internal error contacting GitHub API"}


class DashboardService:
    """Builds the user/repos/events aggregate for a GitHub user."""

    def __init__(self, proxy: GitHubProxy) -> None:
        self._proxy = proxy

    async def build_dashboard(self, username: str) -> DashboardResponse:
        legs = {
            "user": f"users/{username}",
            "repos": f"users/{username}/repos",
            "events": f"users/{username}/events",
        }
        # return_exceptions keeps one failing leg from cancelling its siblings
        results = await asyncio.gather(
            *(self._proxy.fetch(url) for url in legs.values()),
            return_exceptions=True,
        )
        parts = {
            name: _to_leg(username, name, result)
            for name, result in zip(legs, results)
        }
        return DashboardResponse(**parts)


def _to_leg(
    username: str, name: str, result: UpstreamOutcome | BaseException
) -> LegResult:
    if isinstance(result, BaseException):
        logger.error(
            "%s request raised for %s", name.capitalize(), username, exc_info=result
        )
        return LegResult(status=500, data=FAILED_LEG)

    if not result.ok:
        logger.warning(
            "%s request failed for %s with status %d",
            name.capitalize(), username, result.status_code,
        )

    try:
        data = json.loads(result.content)
    except ValueError:
        logger.warning("%s response for %s is not valid JSON", name.capitalize(), username)
        return LegResult(status=500, data=MALFORMED_LEG)
    return LegResult(status=result.status_code, data=data)
