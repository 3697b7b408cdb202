"""CLI for ingesting raw items from configured sources."""

from __future__ import annotations

import logging

from common.cli_helpers import setup_logging
from common.settings import load_config
from ingest_items.fetch_items.sources import SOURCE_CATALOG
from ingest_items.helpers import parse_ingest_items_args
from ingest_items.ingest_items import run_ingest
from storage.connection import build_engine, build_session_factory, create_tables, session_scope
from storage.raw_items import count_raw_items, prune_raw_items
from storage.sources import seed_sources

setup_logging()
logger = logging.getLogger(__name__)


def main() -> None:
    args = parse_ingest_items_args()
    config = load_config(args.config)

    engine = build_engine()
    create_tables(engine)
    session_factory = build_session_factory(engine)

    with session_scope(session_factory) as session:
        if args.seed:
            seed_sources(session, SOURCE_CATALOG)

        settings = config.fast_ingest if args.fast else config.full_ingest
        saved = run_ingest(session, settings, fast=args.fast)
        logger.info("Ingested %d new items", saved)

        if args.prune_days is not None:
            prune_raw_items(session, args.prune_days)

        logger.info("Raw items stored: %d", count_raw_items(session))


if __name__ == "__main__":
    main()
