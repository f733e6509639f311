"""FastAPI dependencies resolving the process-wide clients and cache."""

from __future__ import annotations

from fastapi import Depends, Request

from clients.github_client import GitHubClient
from clients.llm_client import SummaryBackend
from config import Settings, get_settings
from services.cache import ResponseCache
from services.dashboard import DashboardService
from services.digest import DigestService
from services.github_proxy import GitHubProxy


def get_response_cache(request: Request) -> ResponseCache:
    return request.app.state.response_cache


def get_github_client(request: Request) -> GitHubClient:
    return request.app.state.github_client


def get_summary_backend(request: Request) -> SummaryBackend:
    return request.app.state.summary_backend


def get_proxy(
    client: GitHubClient = Depends(get_github_client),
    cache: ResponseCache = Depends(get_response_cache),
    settings: Settings = Depends(get_settings),
) -> GitHubProxy:
    return GitHubProxy(client, cache, ttl_seconds=settings.cache_ttl_seconds)


def get_dashboard_service(proxy: GitHubProxy = Depends(get_proxy)) -> DashboardService:
    return DashboardService(proxy)


def get_digest_service(
    proxy: GitHubProxy = Depends(get_proxy),
    backend: SummaryBackend = Depends(get_summary_backend),
) -> DigestService:
    return DigestService(proxy, backend)
