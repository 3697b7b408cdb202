"""Text helpers shared by ranking, selection and duplicate detection."""

from __future__ import annotations

import hashlib
import re
from functools import lru_cache

STOPWORDS = frozenset({
    "the", "and", "for", "with", "from", "this", "that", "are", "was", "were",
    "have", "has", "had", "will", "would", "could", "should", "may", "might",
    "can", "must", "shall", "what", "your", "into", "about", "more", "than",
    "now", "new",
})

MIN_SIGNIFICANT_WORD_LENGTH = 4
MAX_SLUG_LENGTH = 80


@lru_cache(maxsize=512)
def _term_pattern(term: str) -> re.Pattern:
    # \b fails next to non-word chars such as "." in "next.js", so anchor on
    # "not preceded/followed by a word char" instead.
    return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)")


def contains_term(text: str, term: str) -> bool:
    """Whole-word (or whole-phrase) match of `term` in already-lowercased text."""
    return _term_pattern(term.lower()).search(text) is not None


def contains_any(text: str, terms) -> bool:
    return any(contains_term(text, term) for term in terms)


def extract_significant_words(text: str | None) -> set[str]:
    """Stopword- and length-filtered lowercase tokens of a title or slug."""
    if not text:
        return set()
    tokens = re.split(r"[^a-z0-9]+", text.lower())
    return {
        token
        for token in tokens
        if len(token) >= MIN_SIGNIFICANT_WORD_LENGTH and token not in STOPWORDS
    }


def word_overlap(a: set[str], b: set[str]) -> int:
    return len(a & b)


def slugify(title: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Deterministic URL slug: lowercase ascii, runs of non-alnum become "-".

    Titles with no ascii letters or digits get "article-" plus a short hash
    of the title, so distinct non-English headlines keep distinct slugs.
    """
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    if len(slug) > max_length:
        slug = slug[:max_length].rstrip("-")
    if not slug:
        slug = "article-" + hashlib.sha1(title.encode()).hexdigest()[:8]
    return slug


def normalize_title(title: str | None) -> str | None:
    if not title:
        return None
    normalized = title.lower().strip()
    return normalized or None
