"""Helper functions for review_articles CLI."""

from __future__ import annotations

import argparse


def parse_review_articles_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for review_articles."""

    parser = argparse.ArgumentParser()
    parser.add_argument("--limit", type=int, default=None, help="Articles to review (default: config batch_limit)")
    parser.add_argument("--config", default=None, help="Config name under configs/ (default: CONFIG_ENV or prod)")
    return parser.parse_args(argv)
