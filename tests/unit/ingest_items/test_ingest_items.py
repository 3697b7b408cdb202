"""Tests for ingest_items.ingest_items and fetch_items.fetch_items modules."""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from common.errors import SourceFetchError
from common.hashing import generate_fingerprint
from common.settings import IngestSettings
from ingest_items.fetch_items.fetch_items import fetch_source_items
from ingest_items.ingest_items import ingest_sources, run_ingest
from ingest_items.models import GithubReleasePayload, IngestedItem, RssPayload, payload_from_dict
from storage.raw_items import count_raw_items, get_recent_raw_items
from storage.sources import seed_sources

SETTINGS = IngestSettings(source_delay_seconds=0.5)


def _release(source, tag: str) -> IngestedItem:
    return IngestedItem(
        source_id=source.id,
        external_id=tag,
        title=f"react {tag}",
        url=f"https://github.com/facebook/react/releases/tag/{tag}",
        published_at=datetime(2024, 12, 5, tzinfo=timezone.utc),
        payload=GithubReleasePayload(tag_name=tag, body="notes"),
        uniq_hash=generate_fingerprint(source.url, tag, f"react {tag}"),
    )


def fake_github(source, settings):
    return [_release(source, "v19.0.0"), _release(source, "v18.3.1"), _release(source, "v19.0.0")]


def failing_rss(source, settings):
    raise SourceFetchError(source.name, "timed out")


class TestFetchSourceItems:
    @patch.dict("ingest_items.fetch_items.fetch_items.ADAPTERS", {"github": fake_github})
    def test_drops_in_batch_duplicates(self, session, make_source) -> None:
        source = make_source()
        items = fetch_source_items(session, source, SETTINGS)
        assert [i.external_id for i in items] == ["v19.0.0", "v18.3.1"]

    def test_unknown_kind_returns_empty(self, session) -> None:
        source = SimpleNamespace(id=1, name="Pigeon", kind="carrier-pigeon", url="coop")
        assert fetch_source_items(session, source, SETTINGS) == []


class TestIngestSources:
    @patch.dict(
        "ingest_items.fetch_items.fetch_items.ADAPTERS",
        {"github": fake_github, "rss": failing_rss},
    )
    def test_failing_source_is_skipped(self, session, make_source) -> None:
        broken = make_source(name="Broken Feed", kind="rss", url="https://example.com/feed")
        good = make_source()
        sleeps = []

        items = ingest_sources(session, [broken, good], SETTINGS, sleep=sleeps.append)

        assert len(items) == 2
        assert sleeps == [0.5]


class TestRunIngest:
    @patch.dict("ingest_items.fetch_items.fetch_items.ADAPTERS", {"github": fake_github})
    def test_second_run_stores_nothing_new(self, session) -> None:
        seed_sources(session, [{"name": "React GitHub", "kind": "github", "url": "facebook/react"}])

        assert run_ingest(session, SETTINGS, sleep=lambda _: None) == 2
        assert run_ingest(session, SETTINGS, sleep=lambda _: None) == 0
        assert count_raw_items(session) == 2

    @patch.dict("ingest_items.fetch_items.fetch_items.ADAPTERS", {"github": fake_github})
    def test_payload_round_trips_through_storage(self, session) -> None:
        seed_sources(session, [{"name": "React GitHub", "kind": "github", "url": "facebook/react"}])
        run_ingest(session, SETTINGS, sleep=lambda _: None)

        payload = payload_from_dict(get_recent_raw_items(session)[0].payload)
        assert isinstance(payload, GithubReleasePayload)
        assert payload.body == "notes"

    @patch.dict("ingest_items.fetch_items.fetch_items.ADAPTERS", {"github": fake_github})
    def test_fast_run_only_uses_allow_list(self, session) -> None:
        seed_sources(session, [
            {"name": "React GitHub", "kind": "github", "url": "facebook/react"},
            {"name": "Deno GitHub", "kind": "github", "url": "denoland/deno"},
        ])
        assert run_ingest(session, SETTINGS, fast=True, sleep=lambda _: None) == 2
        assert {r.source.name for r in get_recent_raw_items(session)} == {"React GitHub"}


class TestPayloadFromDict:
    def test_rss(self) -> None:
        assert isinstance(payload_from_dict({"kind": "rss", "description": "x"}), RssPayload)

    def test_github_requires_tag(self) -> None:
        assert payload_from_dict({"kind": "github"}) is None

    @pytest.mark.parametrize("data", [None, {}, {"kind": "carrier-pigeon"}])
    def test_unknown(self, data) -> None:
        assert payload_from_dict(data) is None

    def test_ignores_unknown_fields(self) -> None:
        payload = payload_from_dict({"kind": "registry", "version": "1.0.0", "extra": 1})
        assert payload.version == "1.0.0"


DUPLICATE_FEED = b"""<?xml version="1.0"?>
<rss version="2.0"><channel><title>Changelog</title>
<item><title>Vite 6.0 is out</title><link>https://vite.dev/blog/announcing-vite6</link></item>
<item><title>Vite 6.0 is out</title><link>https://vite.dev/blog/announcing-vite6</link></item>
</channel></rss>"""


class TestRssDeduplication:
    @patch("ingest_items.fetch_items.fetch_rss_items.requests.get")
    def test_identical_entries_fetched_twice_store_one_item(self, mock_get, session) -> None:
        mock_get.return_value.content = DUPLICATE_FEED
        seed_sources(session, [{"name": "Vite Blog", "kind": "rss", "url": "https://vite.dev/blog.rss"}])

        run_ingest(session, SETTINGS, sleep=lambda _: None)
        run_ingest(session, SETTINGS, sleep=lambda _: None)

        assert count_raw_items(session) == 1
