"""Helper functions for ingest_items CLI."""

from __future__ import annotations

import argparse

from common.cli_helpers import parse_days


def parse_ingest_items_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for ingest_items.'''

    parser = argparse.ArgumentParser()
    parser.add_argument("--fast", action="store_true", help="Only ingest the fast allow-list")
    parser.add_argument("--config", default=None, help="Config name under configs/ (default: CONFIG_ENV or prod)")
    parser.add_argument(
        "--prune-days",
        type=parse_days,
        default=None,
        help="Delete raw items older than this many days after ingesting",
    )
    parser.add_argument("--seed", action="store_true", help="Seed the source catalog before ingesting")
    return parser.parse_args(argv)
