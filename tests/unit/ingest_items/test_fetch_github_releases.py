"""Tests for ingest_items.fetch_items.fetch_github_releases module."""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest
import requests

from common.errors import SourceFetchError
from common.settings import IngestSettings
from ingest_items.fetch_items.fetch_github_releases import fetch_github_releases, parse_repo

SOURCE = SimpleNamespace(id=7, name="React GitHub", kind="github", url="facebook/react")

RELEASES = [
    {
        "tag_name": "v19.0.0",
        "name": "19.0.0 (December 5, 2024)",
        "body": "## Breaking changes\n- Removed legacy APIs",
        "html_url": "https://github.com/facebook/react/releases/tag/v19.0.0",
        "published_at": "2024-12-05T18:00:00Z",
        "prerelease": False,
        "draft": False,
        "author": {"login": "rickhanlonii"},
        "assets": [{"name": "big.zip"}],
    },
    {
        "tag_name": "v19.1.0-canary",
        "name": "",
        "html_url": "https://github.com/facebook/react/releases/tag/v19.1.0-canary",
        "published_at": "2024-12-06T00:00:00Z",
        "prerelease": True,
    },
    {"tag_name": "v20.0.0", "html_url": "https://github.com/x", "draft": True},
    {"name": "no tag", "html_url": "https://github.com/y"},
]


def _response(payload) -> Mock:
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class TestParseRepo:
    def test_owner_repo(self) -> None:
        assert parse_repo("facebook/react") == ("facebook", "react")

    def test_url(self) -> None:
        assert parse_repo("https://github.com/vercel/next.js.git") == ("vercel", "next.js")

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_repo("https://github.com/facebook")


class TestFetchGithubReleases:
    @patch("ingest_items.fetch_items.fetch_github_releases.requests.get")
    def test_normalizes_releases(self, mock_get) -> None:
        mock_get.return_value = _response(RELEASES)
        items = fetch_github_releases(SOURCE, IngestSettings(github_page_size=5))

        assert len(items) == 2
        first, second = items
        assert first.title == "19.0.0 (December 5, 2024)"
        assert first.published_at == datetime(2024, 12, 5, 18, tzinfo=timezone.utc)
        assert first.payload.tag_name == "v19.0.0"
        assert first.payload.author == "rickhanlonii"
        assert "assets" not in first.payload.raw
        assert second.title == "react v19.1.0-canary"
        assert second.payload.prerelease is True

        args, kwargs = mock_get.call_args
        assert args[0] == "https://api.github.com/repos/facebook/react/releases"
        assert kwargs["params"] == {"per_page": 5}

    @patch("ingest_items.fetch_items.fetch_github_releases.requests.get")
    def test_token_sent_when_configured(self, mock_get, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "tok")
        mock_get.return_value = _response([])
        fetch_github_releases(SOURCE, IngestSettings())
        assert mock_get.call_args.kwargs["headers"]["Authorization"] == "Bearer tok"

    @patch("ingest_items.fetch_items.fetch_github_releases.requests.get")
    def test_http_error_raises_source_error(self, mock_get) -> None:
        mock_get.side_effect = requests.HTTPError("403 rate limited")
        with pytest.raises(SourceFetchError):
            fetch_github_releases(SOURCE, IngestSettings())

    @patch("ingest_items.fetch_items.fetch_github_releases.requests.get")
    def test_non_list_payload_raises(self, mock_get) -> None:
        mock_get.return_value = _response({"message": "Not Found"})
        with pytest.raises(SourceFetchError):
            fetch_github_releases(SOURCE, IngestSettings())

    def test_bad_repo_url_raises(self) -> None:
        source = SimpleNamespace(id=1, name="Broken", kind="github", url="nope")
        with pytest.raises(SourceFetchError):
            fetch_github_releases(source, IngestSettings())
