"""
Pydantic models for API request/response validation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Any


# === Simulation ===

class CreateSessionRequest(BaseModel):
    config: dict[str, Any] | None = None
    preset: str | None = None
    name: str | None = None


class StepRequest(BaseModel):
    n: int = Field(default=1, ge=1)


class RunRequest(BaseModel):
    ticks: int | None = Field(default=None, ge=1)


class SessionSummary(BaseModel):
    id: str
    name: str
    status: str
    current_tick: int
    max_ticks: int
    time: float
    site_count: int
    total_population: float


class SessionResponse(SessionSummary):
    config: dict[str, Any]


# === Economy ===

class SiteSummary(BaseModel):
    id: str
    name: str
    pop: float
    unpriced_goods: list[str]
    top_industry: str | None


class SiteDetail(BaseModel):
    id: str
    name: str
    replenisher: dict[str, Any]
    economy: dict[str, Any]
