"""Editorial and structural checks on sanitized article content."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from generate_articles.models import ArticleContent, FactsPack, ValidationResult

logger = logging.getLogger(__name__)

MIN_HEADLINE_LENGTH = 10
MIN_DEK_LENGTH = 20
MIN_SUMMARY_LENGTH = 50

FORBIDDEN_PHRASES = (
    "as we all know",
    "in today's world",
    "it's no secret",
    "everyone knows",
    "obviously",
    "clearly",
    "undoubtedly",
)


def _is_trusted_domain(url: str, trusted_domains) -> bool:
    host = (urlparse(url).hostname or "").lower()
    if not host:
        return False
    return any(host == domain or host.endswith("." + domain) for domain in trusted_domains)


def _matches_source(url: str, source_urls: list[str]) -> bool:
    return any(url == source or (source and source in url) for source in source_urls)


def find_forbidden_phrases(text: str) -> list[str]:
    lowered = text.lower()
    return [phrase for phrase in FORBIDDEN_PHRASES if phrase in lowered]


def _article_text(content: ArticleContent) -> str:
    sections = content.body_sections
    parts = [content.headline, content.dek, sections.summary_150w]
    for entries in (
        sections.what_changed,
        sections.why_it_matters,
        sections.actions,
        sections.breaking_changes,
    ):
        parts.extend(entries)
    return " ".join(parts)


def validate_article(
    content: ArticleContent,
    facts_pack: FactsPack,
    trusted_domains,
) -> ValidationResult:
    """Collect every issue with the content. Never raises.

    Citation-source issues go into both `issues` and `soft_issues`; the
    orchestrator persists such articles flagged for review.
    """
    result = ValidationResult()
    sections = content.body_sections

    if len(content.headline) < MIN_HEADLINE_LENGTH:
        result.issues.append(f"Headline too short (minimum {MIN_HEADLINE_LENGTH} characters)")
    if len(content.dek) < MIN_DEK_LENGTH:
        result.issues.append(f"Dek too short (minimum {MIN_DEK_LENGTH} characters)")
    if len(sections.summary_150w) < MIN_SUMMARY_LENGTH:
        result.issues.append(f"Summary too short (minimum {MIN_SUMMARY_LENGTH} characters)")

    for name in ("what_changed", "why_it_matters"):
        entries = getattr(sections, name)
        if not entries:
            result.issues.append(f"Missing {name} entries")
        elif any(not entry or not entry.strip() for entry in entries):
            result.issues.append(f"Blank entries in {name}")

    if not content.citations:
        result.issues.append("At least one citation is required")

    source_urls = [source.url for source in facts_pack.sources if source.url]
    for citation in content.citations:
        if _matches_source(citation.url, source_urls):
            continue
        if _is_trusted_domain(citation.url, trusted_domains):
            continue
        issue = f"Citation URL not from facts pack or trusted domain: {citation.url}"
        result.issues.append(issue)
        result.soft_issues.append(issue)

    for phrase in find_forbidden_phrases(_article_text(content)):
        result.issues.append(f"Contains forbidden phrase: {phrase}")

    if result.issues:
        logger.debug("Validation issues for %r: %s", content.headline, result.issues)
    return result
