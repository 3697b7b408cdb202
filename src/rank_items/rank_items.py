"""Heuristic relevance scoring of raw items."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any

from common.datetime import days_since
from common.settings import RankingSettings
from common.text import contains_any, contains_term
from rank_items.keywords import (
    BREAKING_WORDS,
    MAJOR_VERSION_PATTERN,
    NEW_FEATURE_WORDS,
    PERFORMANCE_WORDS,
    RELEASE_WORDS,
    SECURITY_WORDS,
    SHORT_VERSION_PATTERN,
)
from rank_items.models import RankedItem, RankingConfig

logger = logging.getLogger(__name__)

KEYWORD_WEIGHT = 0.2
RELEASE_WEIGHT = 0.3
BREAKING_WEIGHT = 0.4
MAJOR_VERSION_WEIGHT = 0.5
SECURITY_WEIGHT = 0.4
PERFORMANCE_WEIGHT = 0.2
NEW_FEATURE_WEIGHT = 0.2
PRIORITY_SOURCE_WEIGHT = 0.3
TITLE_WEIGHT = 0.1
GITHUB_WEIGHT = 0.1
SHORT_CONTENT_PENALTY = 0.2

MIN_TITLE_LENGTH = 10
MIN_PAYLOAD_LENGTH = 100

# (max age in days, bonus, reason)
RECENCY_BONUSES = (
    (1, 0.3, "Very recent (within 24h)"),
    (7, 0.2, "Recent (within 7 days)"),
    (30, 0.1, "Recent (within 30 days)"),
)

_JSON_ESCAPES = re.compile(r"\\[nrt]")


def serialize_payload(payload: dict[str, Any] | None) -> str:
    return json.dumps(payload or {}, ensure_ascii=False, default=str)


def item_text(item) -> str:
    """Lowercased title plus serialized payload, the text all signals are matched on."""
    serialized = _JSON_ESCAPES.sub(" ", serialize_payload(item.payload))
    return f"{item.title or ''} {serialized}".lower()


def ranking_config_from_settings(settings: RankingSettings) -> RankingConfig:
    return RankingConfig(
        priority_sources=frozenset(settings.priority_sources),
        min_score=settings.min_score,
        max_items=settings.max_items,
    )


def score_item(
    item,
    config: RankingConfig | None = None,
    now: datetime | None = None,
) -> tuple[float, list[str]]:
    """Score one item in [0, 1] and explain the score.

    Pure given `item`, `config` and `now`.
    """
    config = config or RankingConfig()
    now = now or datetime.now(timezone.utc)
    text = item_text(item)
    score = 0.0
    reasons: list[str] = []

    matched = [kw for kw in dict.fromkeys(config.relevant_keywords) if contains_term(text, kw)]
    if matched:
        score += KEYWORD_WEIGHT * len(matched)
        reasons.append(f"Relevant keywords: {', '.join(matched)}")

    if contains_any(text, RELEASE_WORDS) or SHORT_VERSION_PATTERN.search(text):
        score += RELEASE_WEIGHT
        reasons.append("Release/version announcement")

    if contains_any(text, BREAKING_WORDS):
        score += BREAKING_WEIGHT
        reasons.append("Breaking changes mentioned")

    if MAJOR_VERSION_PATTERN.search(text):
        score += MAJOR_VERSION_WEIGHT
        reasons.append("Major version release")

    if contains_any(text, SECURITY_WORDS):
        score += SECURITY_WEIGHT
        reasons.append("Security update")

    if contains_any(text, PERFORMANCE_WORDS):
        score += PERFORMANCE_WEIGHT
        reasons.append("Performance improvements")

    if contains_any(text, NEW_FEATURE_WORDS):
        score += NEW_FEATURE_WEIGHT
        reasons.append("New features")

    if item.source_id in config.priority_sources:
        score += PRIORITY_SOURCE_WEIGHT
        reasons.append("Priority source")

    if item.published_at is not None:
        age = days_since(item.published_at, now)
        for max_days, bonus, reason in RECENCY_BONUSES:
            if age <= max_days:
                score += bonus
                reasons.append(reason)
                break

    if item.title and len(item.title) > MIN_TITLE_LENGTH:
        score += TITLE_WEIGHT
        reasons.append("Good title length")

    if item.url and "github.com" in item.url:
        score += GITHUB_WEIGHT
        reasons.append("GitHub source")

    if len(serialize_payload(item.payload)) < MIN_PAYLOAD_LENGTH:
        score -= SHORT_CONTENT_PENALTY
        reasons.append("Short content (penalty)")

    return max(0.0, min(1.0, score)), reasons


def rank_items(
    items,
    config: RankingConfig | None = None,
    now: datetime | None = None,
) -> list[RankedItem]:
    """Score items, sort by score descending (stable), drop those under min_score, cap at max_items."""
    config = config or RankingConfig()
    now = now or datetime.now(timezone.utc)

    ranked = []
    for item in items:
        score, reasons = score_item(item, config, now)
        ranked.append(RankedItem.from_raw(item, score, reasons))

    ranked.sort(key=lambda r: r.score, reverse=True)
    kept = [r for r in ranked if r.score >= config.min_score][: config.max_items]

    logger.info("Ranked %d items, %d above min score %.2f", len(ranked), len(kept), config.min_score)
    return kept
