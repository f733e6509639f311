"""Shared fixtures: a stub GitHub upstream, a controllable clock and a stub LLM."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from clients.github_client import GitHubClient
from config import Settings

GITHUB_BASE = "https://api.github.com"


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubUpstream:
    """Routes requests by path+query to canned responses and records every call."""

    def __init__(self, routes: dict[str, tuple[int, object]] | None = None) -> None:
        self.routes = dict(routes or {})
        self.calls: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        key = request.url.raw_path.decode()
        if key in self.routes:
            status, body = self.routes[key]
            text = body if isinstance(body, str) else json.dumps(body)
            return httpx.Response(status, text=text)
        return httpx.Response(404, json={"message": "Not Found"})

    def count(self, raw_path: str) -> int:
        return sum(1 for r in self.calls if r.url.raw_path.decode() == raw_path)


class StubBackend:
    def __init__(self, reply: str = "Busy week! 🚀", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def make_settings(**overrides) -> Settings:
    values = dict(
        github_api_base=GITHUB_BASE,
        github_token="ghp_test",
        github_user_agent="GitHubDashboardAPI",
        cache_ttl_seconds=60,
        llm_api_key="llm_test",
        llm_api_base="https://api.groq.com/openai/v1",
        llm_model="llama-3.3-70b-versatile",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(name="make_settings")
def make_settings_fixture() -> Callable[..., Settings]:
    return make_settings


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream() -> StubUpstream:
    return StubUpstream()


@pytest.fixture
def backend() -> StubBackend:
    return StubBackend()


@pytest.fixture
def github_client_factory() -> Callable[..., GitHubClient]:
    def factory(handler, **overrides) -> GitHubClient:
        return GitHubClient(make_settings(**overrides), transport=httpx.MockTransport(handler))

    return factory
