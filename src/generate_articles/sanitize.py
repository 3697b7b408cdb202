"""Coerce raw LLM output into a fully populated ArticleContent."""

from __future__ import annotations

from typing import Any

from generate_articles.models import ArticleContent, BodySections, CitationRef, CodeSnippet

PLACEHOLDERS = frozenset({"null", "none", "undefined", "n/a", "nan"})


def clean_string(value: Any, default: str = "") -> str:
    """Strings stripped; None, non-strings and placeholder literals become `default`."""
    if value is None:
        return default
    if not isinstance(value, str):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return default
    value = value.strip()
    if not value or value.lower() in PLACEHOLDERS:
        return default
    return value


def clean_list(value: Any) -> list[str]:
    """Non-blank string entries; a bare string becomes a one-element list."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    cleaned = (clean_string(entry) for entry in value)
    return [entry for entry in cleaned if entry]


def _clean_tags(value: Any) -> list[str]:
    tags = []
    for tag in clean_list(value):
        tag = tag.lower().lstrip("#").strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def _clean_citations(value: Any) -> list[CitationRef]:
    citations = []
    seen = set()
    for entry in value if isinstance(value, list) else []:
        if isinstance(entry, str):
            entry = {"url": entry}
        if not isinstance(entry, dict):
            continue
        url = clean_string(entry.get("url"))
        if not url or url in seen:
            continue
        seen.add(url)
        citations.append(CitationRef(url=url, title=clean_string(entry.get("title")) or None))
    return citations


def _clean_code_snippet(value: Any) -> CodeSnippet | None:
    if not isinstance(value, dict):
        return None
    code = clean_string(value.get("code"))
    if not code:
        return None
    return CodeSnippet(
        lang=clean_string(value.get("lang"), "bash"),
        title=clean_string(value.get("title"), "Example"),
        code=code,
    )


def sanitize_article_content(data: dict[str, Any]) -> ArticleContent:
    """Never leaves None or placeholder literals in fields that get persisted."""
    sections = data.get("body_sections")
    sections = sections if isinstance(sections, dict) else {}

    return ArticleContent(
        headline=clean_string(data.get("headline")),
        dek=clean_string(data.get("dek")),
        body_sections=BodySections(
            summary_150w=clean_string(sections.get("summary_150w")),
            what_changed=clean_list(sections.get("what_changed")),
            why_it_matters=clean_list(sections.get("why_it_matters")),
            actions=clean_list(sections.get("actions")),
            breaking_changes=clean_list(sections.get("breaking_changes")),
        ),
        citations=_clean_citations(data.get("citations")),
        tags=_clean_tags(data.get("tags")),
        code_snippet=_clean_code_snippet(data.get("code_snippet")),
    )
