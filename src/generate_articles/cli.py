"""CLI for generating articles from the ranked raw-item snapshot."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timezone

from common.cli_helpers import save_jsonl_local, setup_logging
from common.settings import load_config
from generate_articles.generate_articles import generate_articles
from generate_articles.helpers import build_outcome_record, parse_generate_articles_args
from storage.connection import build_engine, build_session_factory, create_tables, session_scope

setup_logging()
logger = logging.getLogger(__name__)


def main() -> None:
    args = parse_generate_articles_args()
    config = load_config(args.config)
    if args.model:
        config.generation = dataclasses.replace(config.generation, model=args.model)
    count = args.count if args.count is not None else config.generation.batch_size

    engine = build_engine()
    create_tables(engine)
    session_factory = build_session_factory(engine)

    with session_scope(session_factory) as session:
        outcomes = generate_articles(session, count, config)
        records = [build_outcome_record(outcome) for outcome in outcomes]

    for record in records:
        logger.info("%s: %s", record["state"], record["title"])

    if args.load_local:
        path = save_jsonl_local(records, "generated_articles", datetime.now(timezone.utc))
        logger.info("Saved %d outcomes to %s", len(records), path)


if __name__ == "__main__":
    main()
