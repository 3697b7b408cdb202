"""Helper functions for generate_articles CLI."""

from __future__ import annotations

import argparse
from typing import Any

from common.datetime import ensure_utc
from generate_articles.models import CandidateOutcome


def parse_generate_articles_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for generate_articles."""

    parser = argparse.ArgumentParser()
    parser.add_argument("--count", type=int, default=None, help="Articles to attempt (default: config batch_size)")
    parser.add_argument("--model", default=None, help="OpenAI model to use (default: config model)")
    parser.add_argument("--config", default=None, help="Config name under configs/ (default: CONFIG_ENV or prod)")

    # Output options
    parser.add_argument("--load-local", action="store_true", help="Also save outcomes to a local JSONL file")

    return parser.parse_args(argv)


def build_outcome_record(outcome: CandidateOutcome) -> dict[str, Any]:
    """Build a JSON-ready record for one candidate outcome."""
    record: dict[str, Any] = {
        "item_id": outcome.item_id,
        "title": outcome.title,
        "state": outcome.state.value,
        "issues": outcome.issues,
        "error": outcome.error,
    }
    article = outcome.article
    if article is not None:
        published_at = ensure_utc(article.published_at)
        record["article"] = {
            "id": article.id,
            "slug": article.slug,
            "title": article.title,
            "review_status": article.review_status,
            "published_at": published_at.isoformat() if published_at else None,
        }
    return record
