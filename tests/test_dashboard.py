from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

from clients.github_client import GitHubClient
from services.cache import ResponseCache
from models.schemas import UpstreamOutcome
from services.dashboard import FAILED_LEG, MALFORMED_LEG, DashboardService
from services.github_proxy import GitHubProxy


def _service(client: GitHubClient, cache: ResponseCache | None = None) -> DashboardService:
    return DashboardService(GitHubProxy(client, cache if cache is not None else ResponseCache(60)))


@pytest.mark.asyncio
async def test_dashboard_combines_all_three_legs(upstream, github_client_factory):
    upstream.routes.update({
        "/users/octocat": (200, {"login": "octocat"}),
        "/users/octocat/repos": (200, [{"name": "repo1"}]),
        "/users/octocat/events": (200, [{"type": "PushEvent"}]),
    })
    service = _service(github_client_factory(upstream))

    doc = await service.build_dashboard("octocat")

    assert doc.user.status == 200
    assert doc.repos.status == 200
    assert doc.events.status == 200
    assert doc.user.data["login"] == "octocat"
    assert doc.repos.data[0]["name"] == "repo1"
    assert doc.events.data[0]["type"] == "PushEvent"


@pytest.mark.asyncio
async def test_failed_leg_does_not_block_the_others(upstream, github_client_factory, caplog):
    upstream.routes.update({
        "/users/octocat": (200, {"login": "octocat"}),
        "/users/octocat/events": (200, [{"type": "PushEvent"}]),
    })
    service = _service(github_client_factory(upstream))

    with caplog.at_level(logging.WARNING, logger="services.dashboard"):
        doc = await service.build_dashboard("octocat")

    assert doc.user.status == 200
    assert doc.repos.status == 404
    assert doc.events.status == 200
    assert doc.repos.data == {"message": "Not Found"}
    assert doc.user.data["login"] == "octocat"

    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert warnings == ["Repos request failed for octocat with status 404"]


@pytest.mark.asyncio
async def test_malformed_leg_body_is_a_local_failure(upstream, github_client_factory):
    upstream.routes.update({
        "/users/octocat": (200, {"login": "octocat"}),
        "/users/octocat/repos": (200, "<html>not json</html>"),
        "/users/octocat/events": (200, []),
    })
    cache = ResponseCache(60)
    service = _service(github_client_factory(upstream), cache)

    doc = await service.build_dashboard("octocat")

    assert doc.repos.status == 500
    assert doc.repos.data == MALFORMED_LEG
    assert doc.user.data["login"] == "octocat"
    assert doc.events.data == []
    # raw outcome stays cached untouched
    assert cache.get("github:users/octocat/repos").content == "<html>not json</html>"


@pytest.mark.asyncio
async def test_legs_are_served_from_cache_on_repeat(upstream, github_client_factory):
    upstream.routes.update({
        "/users/octocat": (200, {"login": "octocat"}),
        "/users/octocat/repos": (200, []),
        "/users/octocat/events": (200, []),
    })
    service = _service(github_client_factory(upstream))

    await service.build_dashboard("octocat")
    await service.build_dashboard("octocat")

    assert len(upstream.calls) == 3


@pytest.mark.asyncio
async def test_legs_run_concurrently(make_settings):
    in_flight = 0
    peak = 0

    async def handler(request: httpx.Request) -> httpx.Response:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.05)
        in_flight -= 1
        return httpx.Response(200, json={})

    client = GitHubClient(make_settings(), transport=httpx.MockTransport(handler))
    await _service(client).build_dashboard("octocat")
    await client.aclose()

    assert peak == 3


@pytest.mark.asyncio
async def test_cancelling_dashboard_cancels_every_leg(make_settings):
    started: list[str] = []
    cancelled: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        started.append(request.url.path)
        try:
            await asyncio.sleep(30)
        except asyncio.CancelledError:
            cancelled.append(request.url.path)
            raise
        return httpx.Response(200, json={})

    cache = ResponseCache(60)
    client = GitHubClient(make_settings(), transport=httpx.MockTransport(handler))
    task = asyncio.create_task(_service(client, cache).build_dashboard("octocat"))
    for _ in range(100):
        if len(started) == 3:
            break
        await asyncio.sleep(0.01)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    await client.aclose()

    assert sorted(cancelled) == [
        "/users/octocat",
        "/users/octocat/events",
        "/users/octocat/repos",
    ]
    assert len(cache) == 0


class RaisingProxy:
    """Serves canned outcomes but raises for one resource."""

    def __init__(self, failing_url: str) -> None:
        self.failing_url = failing_url

    async def fetch(self, relative_url: str) -> UpstreamOutcome:
        if relative_url == self.failing_url:
            raise RuntimeError("socket exploded")
        return UpstreamOutcome(200, "[]")


@pytest.mark.asyncio
async def test_leg_that_raises_is_logged_with_traceback(caplog):
    service = DashboardService(RaisingProxy("users/octocat/repos"))

    with caplog.at_level(logging.ERROR, logger="services.dashboard"):
        doc = await service.build_dashboard("octocat")

    assert doc.repos.status == 500
    assert doc.repos.data == FAILED_LEG
    assert doc.user.status == doc.events.status == 200

    [record] = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert record.getMessage() == "Repos request raised for octocat"
    assert record.exc_info is not None
    assert isinstance(record.exc_info[1], RuntimeError)
