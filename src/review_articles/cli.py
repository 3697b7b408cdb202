"""CLI for the quality review of articles flagged for review."""

from __future__ import annotations

import logging

from common.cli_helpers import setup_logging
from common.settings import load_config
from review_articles.helpers import parse_review_articles_args
from review_articles.quality_review import run_quality_checks
from storage.connection import build_engine, build_session_factory, session_scope

setup_logging()
logger = logging.getLogger(__name__)


def main() -> None:
    args = parse_review_articles_args()
    config = load_config(args.config)
    limit = args.limit if args.limit is not None else config.review.batch_limit

    session_factory = build_session_factory(build_engine())
    with session_scope(session_factory) as session:
        summary = run_quality_checks(
            session,
            limit=limit,
            promote_threshold=config.review.promote_threshold,
            timeout=config.review.link_timeout,
        )

    logger.info("Review summary: %s", summary.to_dict())


if __name__ == "__main__":
    main()
