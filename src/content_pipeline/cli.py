"""CLI for one full or fast content pipeline run."""

from __future__ import annotations

import argparse
import logging

from common.cli_helpers import setup_logging
from common.settings import load_config
from content_pipeline.run import run_content_pipeline, run_fast_pipeline
from storage.connection import build_engine, build_session_factory, create_tables, session_scope

setup_logging()
logger = logging.getLogger(__name__)


def parse_content_pipeline_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument("--fast", action="store_true", help="Fast allow-list ingest under the time budget")
    parser.add_argument("--count", type=int, default=None, help="Articles to attempt (default: config batch_size)")
    parser.add_argument("--config", default=None, help="Config name under configs/ (default: CONFIG_ENV or prod)")
    return parser.parse_args(argv)


def main() -> None:
    args = parse_content_pipeline_args()
    config = load_config(args.config)

    engine = build_engine()
    create_tables(engine)
    session_factory = build_session_factory(engine)

    if args.fast:
        summary = run_fast_pipeline(session_factory, config, count=args.count)
    else:
        with session_scope(session_factory) as session:
            summary = run_content_pipeline(session, config, count=args.count).to_summary()

    logger.info("Pipeline summary: %s", summary)


if __name__ == "__main__":
    main()
