"""Per-source fetch with the fingerprint dedup gate."""

import logging
from typing import Callable

from sqlalchemy.orm import Session

from common.settings import IngestSettings
from ingest_items.fetch_items.fetch_github_releases import fetch_github_releases
from ingest_items.fetch_items.fetch_registry_versions import fetch_registry_versions
from ingest_items.fetch_items.fetch_rss_items import fetch_rss_items
from ingest_items.models import IngestedItem
from storage.models import Source, SourceKind
from storage.raw_items import raw_item_exists

logger = logging.getLogger(__name__)

Adapter = Callable[[Source, IngestSettings], list[IngestedItem]]

ADAPTERS: dict[str, Adapter] = {
    SourceKind.RSS.value: fetch_rss_items,
    SourceKind.BLOG.value: fetch_rss_items,
    SourceKind.GITHUB.value: fetch_github_releases,
    SourceKind.REGISTRY.value: fetch_registry_versions,
}


def fetch_source_items(
    session: Session,
    source: Source,
    settings: IngestSettings,
) -> list[IngestedItem]:
    """Fetch one source and drop items whose fingerprint is already stored.

    Raises:
        SourceFetchError: Propagated from the adapter for the caller to log.
    """
    adapter = ADAPTERS.get(source.kind)
    if adapter is None:
        logger.warning("Unknown source kind %s for %s", source.kind, source.name)
        return []

    fetched = adapter(source, settings)

    new_items = []
    seen_in_batch = set()
    for item in fetched:
        if item.uniq_hash in seen_in_batch or raw_item_exists(session, item.uniq_hash):
            continue
        seen_in_batch.add(item.uniq_hash)
        new_items.append(item)

    logger.info(
        "Fetched %d items from %s (%d new)", len(fetched), source.name, len(new_items)
    )
    return new_items
