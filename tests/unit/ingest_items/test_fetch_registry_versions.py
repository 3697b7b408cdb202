"""Tests for ingest_items.fetch_items.fetch_registry_versions module."""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest

from common.errors import SourceFetchError
from common.settings import IngestSettings
from ingest_items.fetch_items.fetch_registry_versions import fetch_registry_versions, newest_versions

SOURCE = SimpleNamespace(id=3, name="Vite npm", kind="registry", url="vite")

DOCUMENT = {
    "name": "vite",
    "versions": {
        "5.0.0": {"description": "Next generation frontend tooling", "keywords": ["frontend"]},
        "5.1.0": {"description": "Next generation frontend tooling", "dependencies": {"esbuild": "^0.20"}},
        "6.0.0": {"description": "Next generation frontend tooling"},
    },
    "time": {
        "created": "2020-01-01T00:00:00Z",
        "modified": "2024-12-01T00:00:00Z",
        "5.0.0": "2023-11-16T00:00:00Z",
        "5.1.0": "2024-02-08T00:00:00Z",
        "6.0.0": "2024-11-26T00:00:00Z",
    },
}


def _response(payload) -> Mock:
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class TestNewestVersions:
    def test_orders_by_publish_time(self) -> None:
        assert newest_versions(DOCUMENT["versions"], DOCUMENT["time"], 2) == ["6.0.0", "5.1.0"]

    def test_untimed_versions_last(self) -> None:
        versions = {"1.0.0": {}, "2.0.0": {}}
        assert newest_versions(versions, {"1.0.0": "2024-01-01T00:00:00Z"}, 5) == ["1.0.0", "2.0.0"]


class TestFetchRegistryVersions:
    @patch("ingest_items.fetch_items.fetch_registry_versions.requests.get")
    def test_normalizes_versions(self, mock_get) -> None:
        mock_get.return_value = _response(DOCUMENT)
        items = fetch_registry_versions(SOURCE, IngestSettings(registry_versions=2))

        assert [i.title for i in items] == ["vite v6.0.0", "vite v5.1.0"]
        assert items[0].url == "https://www.npmjs.com/package/vite/v/6.0.0"
        assert items[1].payload.dependencies == {"esbuild": "^0.20"}
        assert items[0].payload.time == "2024-11-26T00:00:00Z"
        assert mock_get.call_args.args[0] == "https://registry.npmjs.org/vite"

    @patch("ingest_items.fetch_items.fetch_registry_versions.requests.get")
    def test_document_without_versions_raises(self, mock_get) -> None:
        mock_get.return_value = _response({"error": "Not found"})
        with pytest.raises(SourceFetchError):
            fetch_registry_versions(SOURCE, IngestSettings())

    @patch("ingest_items.fetch_items.fetch_registry_versions.requests.get")
    def test_invalid_json_raises(self, mock_get) -> None:
        response = _response(None)
        response.json.side_effect = ValueError("no json")
        mock_get.return_value = response
        with pytest.raises(SourceFetchError):
            fetch_registry_versions(SOURCE, IngestSettings())
