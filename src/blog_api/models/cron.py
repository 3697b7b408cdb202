"""Cron trigger Pydantic models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CronSuccessResponse(BaseModel):
    success: bool = True
    message: str
    results: dict[str, Any] = Field(default_factory=dict)


class CronErrorResponse(BaseModel):
    error: str
    details: str | None = None


class CronUsageResponse(BaseModel):
    message: str
    usage: str
    steps: list[str] = Field(default_factory=list)
