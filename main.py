"""FastAPI application entry point."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from clients.github_client import GitHubClient
from clients.llm_client import LLMClient
from config import get_settings
from routers.dashboard import router as dashboard_router
from routers.github import router as github_router
from services.cache import ResponseCache

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    app.state.response_cache = ResponseCache(settings.cache_ttl_seconds)
    app.state.github_client = GitHubClient(settings)
    app.state.summary_backend = LLMClient(settings)
    try:
        yield
    finally:
        await app.state.github_client.aclose()


app = FastAPI(
    title="GitHub Dashboard API",
    description="Cached GitHub proxy with dashboard aggregation and LLM activity digests.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_allowed_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_timing(request: Request, call_next):
    t0 = time.monotonic()
    response = await call_next(request)
    elapsed = time.monotonic() - t0
    response.headers["X-Process-Time"] = f"{elapsed:.3f}"
    logging.getLogger("timing").info(
        "%s %s — %.3fs (%d)",
        request.method,
        request.url.path,
        elapsed,
        response.status_code,
    )
    return response


app.include_router(github_router)
app.include_router(dashboard_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
