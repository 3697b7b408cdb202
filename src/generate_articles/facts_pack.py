"""Build the facts pack for one ranked item."""

from __future__ import annotations

from common.datetime import iso_date
from common.text import contains_any, contains_term
from ingest_items.models import (
    GithubReleasePayload,
    RegistryPayload,
    RssPayload,
    payload_from_dict,
)
from rank_items.keywords import (
    BREAKING_WORDS,
    ECOSYSTEMS,
    NEW_FEATURE_WORDS,
    PERFORMANCE_WORDS,
    SECURITY_WORDS,
)
from generate_articles.models import FactsPack, KeyFacts, SourceRef

DEFAULT_HIGHLIGHT = "Release announcement"
DEFAULT_TOPIC = "Unknown Topic"


def _payload_fields(payload) -> tuple[str, str]:
    """(version, body text) for each payload kind."""
    if isinstance(payload, GithubReleasePayload):
        return payload.tag_name, payload.body or ""
    if isinstance(payload, RegistryPayload):
        return payload.version, payload.description or ""
    if isinstance(payload, RssPayload):
        return "", payload.description or ""
    return "", ""


def _scan(body: str) -> tuple[list[str], list[str], list[str]]:
    """(highlights, risk, ecosystem) signalled by the release text."""
    text = body.lower()
    highlights: list[str] = []
    risk: list[str] = []
    ecosystem: list[str] = []
    if not text:
        return highlights, risk, ecosystem

    if contains_any(text, BREAKING_WORDS):
        risk.append("Breaking changes detected")
    if contains_any(text, SECURITY_WORDS):
        highlights.append("Security updates")
    if contains_any(text, PERFORMANCE_WORDS):
        highlights.append("Performance improvements")
    if contains_any(text, NEW_FEATURE_WORDS):
        highlights.append("New features")

    for terms, label in ECOSYSTEMS:
        if any(contains_term(text, term) for term in terms):
            ecosystem.append(label)
    return highlights, risk, ecosystem


def build_facts_pack(
    item,
    audience: str = "experienced web developers",
    language: str = "en",
) -> FactsPack:
    """Normalize a ranked item into the generation brief.

    Total: missing fields fall back to defaults ("" date, the generic
    highlight), never an exception.
    """
    payload = payload_from_dict(item.payload if isinstance(item.payload, dict) else None)
    version, body = _payload_fields(payload)
    highlights, risk, ecosystem = _scan(body)

    title = item.title or ""
    return FactsPack(
        topic=title or DEFAULT_TOPIC,
        sources=[SourceRef(url=item.url or "", title=title)],
        key_facts=KeyFacts(
            version=version,
            date=iso_date(item.published_at),
            highlights=highlights or [DEFAULT_HIGHLIGHT],
            risk=risk,
            ecosystem=ecosystem,
        ),
        audience=audience,
        language=language,
    )
