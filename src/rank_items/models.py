"""Data models for the rank_items pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from rank_items.keywords import RELEVANT_KEYWORDS


@dataclass
class RankingConfig:
    relevant_keywords: tuple[str, ...] = RELEVANT_KEYWORDS
    priority_sources: frozenset[int] = frozenset()
    min_score: float = 0.3
    max_items: int = 50


@dataclass
class RankedItem:
    """A raw item decorated with its relevance score for one pipeline run."""
    id: Optional[int]
    source_id: int
    title: Optional[str]
    url: Optional[str]
    published_at: Optional[datetime]
    payload: dict[str, Any]
    score: float = 0.0
    reasons: list[str] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw, score: float, reasons: list[str]) -> "RankedItem":
        return cls(
            id=raw.id,
            source_id=raw.source_id,
            title=raw.title,
            url=raw.url,
            published_at=raw.published_at,
            payload=dict(raw.payload or {}),
            score=score,
            reasons=reasons,
        )
