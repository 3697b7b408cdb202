"""Diversified top-K selection over a ranked list."""

from __future__ import annotations

import logging

from common.text import contains_term, normalize_title
from rank_items.keywords import FRAMEWORK_NAMES, RELEASE_TYPE_WORDS, SEMVER_PATTERN
from rank_items.models import RankedItem
from rank_items.rank_items import item_text

logger = logging.getLogger(__name__)


def extract_topic_keywords(item) -> set[str]:
    """Framework names, the first semantic version and coarse release-type words in the item."""
    text = item_text(item)
    keywords = {name for name in FRAMEWORK_NAMES if contains_term(text, name)}

    version = SEMVER_PATTERN.search(text)
    if version:
        keywords.add(version.group(1))

    keywords.update(word for word in RELEASE_TYPE_WORDS if contains_term(text, word))
    return keywords


def select_top_candidates(ranked: list[RankedItem], count: int = 3) -> list[RankedItem]:
    """Pick up to `count` items, preferring ones with no topic overlap.

    First pass: skip exact title duplicates and any item sharing a topic
    keyword with an already selected one. If that leaves fewer than `count`,
    a second pass fills from the remaining items in rank order, still
    skipping exact title duplicates.
    """
    if count <= 0 or not ranked:
        return []

    selected: list[RankedItem] = []
    used_topics: set[str] = set()
    used_titles: set[str] = set()

    for item in ranked:
        if len(selected) >= count:
            break
        title = normalize_title(item.title)
        if title and title in used_titles:
            continue
        topics = extract_topic_keywords(item)
        if topics & used_topics:
            continue
        selected.append(item)
        used_topics |= topics
        if title:
            used_titles.add(title)

    diverse = len(selected)
    if len(selected) < count:
        for item in ranked:
            if len(selected) >= count:
                break
            if any(item is chosen for chosen in selected):
                continue
            title = normalize_title(item.title)
            if title and title in used_titles:
                continue
            selected.append(item)
            if title:
                used_titles.add(title)

    logger.info(
        "Selected %d candidates (%d diverse, %d from fallback)",
        len(selected), diverse, len(selected) - diverse,
    )
    return selected


def select_best_candidate(ranked: list[RankedItem]) -> RankedItem | None:
    return ranked[0] if ranked else None
