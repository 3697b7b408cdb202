"""RSS/Atom feed adapter."""

import logging
from datetime import datetime, timezone, timedelta
from typing import Any

import feedparser
import requests
from dateutil.parser import parse as parse_date

from common.errors import SourceFetchError
from common.hashing import generate_fingerprint
from common.settings import IngestSettings
from common.utils import json_safe
from ingest_items.models import IngestedItem, RssPayload
from storage.models import Source

logger = logging.getLogger(__name__)

# Timezone abbreviations for date parsing
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
}


def fetch_rss_items(source: Source, settings: IngestSettings) -> list[IngestedItem]:
    """Fetch a feed and normalize up to `settings.max_entries` entries.

    Raises:
        SourceFetchError: The feed could not be downloaded or parsed at all.
    """
    try:
        response = requests.get(
            source.url,
            timeout=settings.request_timeout,
            headers={"User-Agent": settings.user_agent},
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise SourceFetchError(source.name, f"feed request failed: {e}") from e

    feed = feedparser.parse(response.content)
    if feed.bozo and not feed.entries:
        raise SourceFetchError(source.name, f"unparseable feed: {feed.get('bozo_exception')}")

    items = []
    for entry in feed.entries[: settings.max_entries]:
        try:
            item = _parse_entry(entry, source)
            if item is not None:
                items.append(item)
        except Exception as e:
            logger.warning("Failed to parse entry from %s: %s", source.name, e)
            continue

    return items


def _parse_entry(entry, source: Source) -> IngestedItem | None:
    """Parse a single feed entry. Entries without link or title are skipped."""
    url = (entry.get("link") or "").strip()
    title = (entry.get("title") or "").strip()
    if not url or not title:
        return None

    published = entry.get("published") or entry.get("updated")
    payload = RssPayload(
        description=_entry_description(entry),
        categories=[t.get("term") for t in entry.get("tags", []) if t.get("term")],
        author=entry.get("author"),
        published=published,
        raw=json_safe(dict(entry)),
    )

    return IngestedItem(
        source_id=source.id,
        external_id=entry.get("id") or url,
        title=title,
        url=url,
        published_at=_parse_published_date(published),
        payload=payload,
        uniq_hash=generate_fingerprint(source.url, url, title),
    )


def _entry_description(entry) -> str | None:
    summary = entry.get("summary")
    if summary:
        return summary.strip()
    content: list[Any] = entry.get("content") or []
    if content:
        return (content[0].get("value") or "").strip() or None
    return None


def _parse_published_date(published: str | None) -> datetime | None:
    """Parse a feed date string. Naive dates are taken as UTC."""
    if not published:
        return None

    try:
        dt = parse_date(published, tzinfos=TZINFOS)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt
    except (ValueError, OverflowError):
        return None
