"""Pass-through GitHub resources served through the response cache."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from models.schemas import UpstreamOutcome
from routers.deps import get_proxy
from services.github_proxy import GitHubProxy
from utils.query import build_query_string

router = APIRouter(prefix="/api/github", tags=["github"])


def _as_response(outcome: UpstreamOutcome) -> Response:
    return Response(
        content=outcome.content,
        status_code=outcome.status_code,
        media_type="application/json",
    )


@router.get("/users")
async def list_users(
    since: int | None = None,
    per_page: int | None = None,
    proxy: GitHubProxy = Depends(get_proxy),
) -> Response:
    query = build_query_string({"since": since, "per_page": per_page})
    return _as_response(await proxy.fetch(f"users{query}"))


@router.get("/users/{username}")
async def get_user(username: str, proxy: GitHubProxy = Depends(get_proxy)) -> Response:
    return _as_response(await proxy.fetch(f"users/{username}"))


@router.get("/users/{username}/repos")
async def get_repos(username: str, proxy: GitHubProxy = Depends(get_proxy)) -> Response:
    return _as_response(await proxy.fetch(f"users/{username}/repos"))


@router.get("/users/{username}/events")
async def get_events(username: str, proxy: GitHubProxy = Depends(get_proxy)) -> Response:
    return _as_response(await proxy.fetch(f"users/{username}/events"))


@router.get("/repos/{owner}/{repo}/commits")
async def get_commits(
    owner: str,
    repo: str,
    author: str | None = None,
    proxy: GitHubProxy = Depends(get_proxy),
) -> Response:
    query = build_query_string({"author": author})
    return _as_response(await proxy.fetch(f"repos/{owner}/{repo}/commits{query}"))
