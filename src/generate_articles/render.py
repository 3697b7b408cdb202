"""Render article body sections to HTML."""

from __future__ import annotations

import html
import re

from generate_articles.models import ArticleContent

_TAG_PATTERN = re.compile(r"<[^>]+>")


def _list_section(heading: str, entries: list[str]) -> list[str]:
    if not entries:
        return []
    items = "".join(f"<li>{html.escape(entry)}</li>" for entry in entries)
    return [f"<h2>{heading}</h2>", f"<ul>{items}</ul>"]


def render_body_html(content: ArticleContent) -> str:
    sections = content.body_sections
    parts: list[str] = []

    if sections.summary_150w:
        parts.append(f"<p>{html.escape(sections.summary_150w)}</p>")
    parts.extend(_list_section("What Changed", sections.what_changed))
    parts.extend(_list_section("Why It Matters", sections.why_it_matters))
    parts.extend(_list_section("Action Items", sections.actions))
    parts.extend(_list_section("Breaking Changes", sections.breaking_changes))

    snippet = content.code_snippet
    if snippet:
        parts.append(f"<h3>{html.escape(snippet.title)}</h3>")
        parts.append(
            f'<pre><code class="language-{html.escape(snippet.lang)}">'
            f"{html.escape(snippet.code)}</code></pre>"
        )

    return "\n".join(parts)


def strip_html(body_html: str) -> str:
    return html.unescape(_TAG_PATTERN.sub(" ", body_html or ""))


def count_words(body_html: str) -> int:
    """Word count of the rendered text with markup removed."""
    return len(strip_html(body_html).split())
