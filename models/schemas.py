from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Period = Literal["daily", "weekly"]


@dataclass(frozen=True)
class UpstreamOutcome:
    """Normalized result of one upstream call: status code plus raw body text."""

    status_code: int
    content: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class LegResult(BaseModel):
    status: int
    data: Any = None


class DashboardResponse(BaseModel):
    user: LegResult
    repos: LegResult
    events: LegResult


class DigestResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str
    period: Period
    generated_at: datetime
    digest: str
    event_count: int = Field(..., ge=0)
