"""Ingest raw items from every active source (full) or the fast allow-list."""

import logging
import time
from typing import Callable, Iterable

from sqlalchemy.orm import Session

from common.errors import DuplicateItemError, SourceFetchError
from common.settings import IngestSettings
from ingest_items.fetch_items.fetch_items import fetch_source_items
from ingest_items.fetch_items.sources import FAST_SOURCE_NAMES
from ingest_items.models import IngestedItem
from storage.models import RawItem, Source
from storage.raw_items import insert_raw_item
from storage.sources import get_active_sources

logger = logging.getLogger(__name__)


def ingest_sources(
    session: Session,
    sources: Iterable[Source],
    settings: IngestSettings,
    sleep: Callable[[float], None] = time.sleep,
) -> list[IngestedItem]:
    """Fetch sources one at a time, pausing between them to stay under rate limits.

    A failing source is logged and skipped; the batch continues.
    """
    sources = list(sources)
    logger.info("Ingesting items from %d sources", len(sources))

    items: list[IngestedItem] = []
    for index, source in enumerate(sources):
        try:
            items.extend(fetch_source_items(session, source, settings))
        except SourceFetchError as e:
            logger.error("Failed to ingest source %s", e)
        except Exception as e:
            logger.error("Unexpected error ingesting source %s: %s", source.name, e)

        if index < len(sources) - 1 and settings.source_delay_seconds > 0:
            sleep(settings.source_delay_seconds)

    logger.info("Total new items collected: %d", len(items))
    return items


def ingest_all_sources(session: Session, settings: IngestSettings, **kwargs) -> list[IngestedItem]:
    return ingest_sources(session, get_active_sources(session), settings, **kwargs)


def ingest_fast_sources(session: Session, settings: IngestSettings, **kwargs) -> list[IngestedItem]:
    sources = [s for s in get_active_sources(session) if s.name in FAST_SOURCE_NAMES]
    return ingest_sources(session, sources, settings, **kwargs)


def save_ingested_items(session: Session, items: list[IngestedItem]) -> list[RawItem]:
    """Insert items in fetch order. Known fingerprints are skipped silently."""
    saved = []
    for item in items:
        try:
            saved.append(insert_raw_item(session, item.to_row()))
        except DuplicateItemError:
            logger.debug("Skipping known item %s", item.uniq_hash)
        except Exception as e:
            session.rollback()
            logger.error("Failed to save item %s: %s", item.uniq_hash, e)
    return saved


def run_ingest(session: Session, settings: IngestSettings, fast: bool = False, **kwargs) -> int:
    """Fetch and store new raw items. Returns the number stored."""
    logger.info("Starting %s ingest", "fast" if fast else "full")
    if fast:
        items = ingest_fast_sources(session, settings, **kwargs)
    else:
        items = ingest_all_sources(session, settings, **kwargs)

    saved = save_ingested_items(session, items)
    logger.info("Saved %d of %d new items", len(saved), len(items))
    return len(saved)
