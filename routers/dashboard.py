"""GET /dashboard and GET /digest endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from models.schemas import DashboardResponse, DigestResponse
from routers.deps import get_dashboard_service, get_digest_service
from services.dashboard import DashboardService
from services.digest import DigestService, InvalidPeriodError, UpstreamStatusError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/github", tags=["dashboard"])


@router.get("/dashboard/{username}", response_model=DashboardResponse)
async def get_dashboard(
    username: str,
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    try:
        return await service.build_dashboard(username)
    except Exception as exc:
        logger.exception("Dashboard aggregation failed for %s", username)
        raise HTTPException(
            status_code=500, detail="Failed to aggregate dashboard data"
        ) from exc


@router.get("/digest/{username}", response_model=DigestResponse)
async def get_digest(
    username: str,
    period: str = "daily",
    service: DigestService = Depends(get_digest_service),
) -> DigestResponse:
    try:
        return await service.summarize(username, period)
    except InvalidPeriodError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UpstreamStatusError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Failed to generate digest for %s", username)
        raise HTTPException(status_code=500, detail="Failed to generate digest") from exc
