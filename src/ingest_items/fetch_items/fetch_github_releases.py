"""GitHub releases adapter."""

import logging
import os
from urllib.parse import urlparse

import requests

from common.datetime import parse_datetime
from common.errors import SourceFetchError
from common.hashing import generate_fingerprint
from common.settings import IngestSettings
from common.utils import json_safe
from ingest_items.models import GithubReleasePayload, IngestedItem
from storage.models import Source

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


def parse_repo(url: str) -> tuple[str, str]:
    """Extract (owner, repo) from "owner/repo" or a github.com URL.

    Raises:
        ValueError: If the URL does not name an owner and a repo.
    """
    path = urlparse(url).path if "://" in url else url
    parts = [part for part in path.strip("/").split("/") if part]
    if len(parts) < 2:
        raise ValueError(f"Not a GitHub repository: {url}")
    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[:-4]
    return owner, repo


def fetch_github_releases(source: Source, settings: IngestSettings) -> list[IngestedItem]:
    """Fetch the latest releases of the source's repository.

    Raises:
        SourceFetchError: Bad repository URL, request failure or non-list response.
    """
    try:
        owner, repo = parse_repo(source.url)
    except ValueError as e:
        raise SourceFetchError(source.name, str(e)) from e

    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": settings.user_agent,
    }
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        response = requests.get(
            f"{GITHUB_API_URL}/repos/{owner}/{repo}/releases",
            params={"per_page": settings.github_page_size},
            headers=headers,
            timeout=settings.request_timeout,
        )
        response.raise_for_status()
        releases = response.json()
    except (requests.RequestException, ValueError) as e:
        raise SourceFetchError(source.name, f"GitHub API error: {e}") from e

    if not isinstance(releases, list):
        raise SourceFetchError(source.name, "GitHub API returned an unexpected payload")

    items = []
    for release in releases:
        try:
            item = _parse_release(release, source, repo)
            if item is not None:
                items.append(item)
        except Exception as e:
            logger.warning("Failed to parse release from %s: %s", source.name, e)
            continue

    return items


def _parse_release(release: dict, source: Source, repo: str) -> IngestedItem | None:
    tag_name = release.get("tag_name")
    html_url = release.get("html_url")
    if not tag_name or not html_url or release.get("draft"):
        return None

    name = (release.get("name") or "").strip() or None
    published = release.get("published_at")
    author = (release.get("author") or {}).get("login")

    return IngestedItem(
        source_id=source.id,
        external_id=tag_name,
        title=name or f"{repo} {tag_name}",
        url=html_url,
        published_at=parse_datetime(published),
        payload=GithubReleasePayload(
            tag_name=tag_name,
            name=name,
            body=release.get("body"),
            prerelease=bool(release.get("prerelease")),
            draft=bool(release.get("draft")),
            author=author,
            raw=json_safe({k: v for k, v in release.items() if k not in ("assets", "author")}),
        ),
        uniq_hash=generate_fingerprint(source.url, tag_name, name or published),
    )
