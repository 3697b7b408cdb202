"""npm registry adapter."""

import logging
from urllib.parse import quote

import requests

from common.datetime import parse_datetime
from common.errors import SourceFetchError
from common.hashing import generate_fingerprint
from common.settings import IngestSettings
from common.utils import json_safe
from ingest_items.models import IngestedItem, RegistryPayload
from storage.models import Source

logger = logging.getLogger(__name__)

REGISTRY_URL = "https://registry.npmjs.org"
PACKAGE_PAGE_URL = "https://www.npmjs.com/package"

# Keys of the registry "time" map that are not versions
_TIME_META_KEYS = {"created", "modified"}


def fetch_registry_versions(source: Source, settings: IngestSettings) -> list[IngestedItem]:
    """Fetch package metadata and normalize the newest published versions.

    Raises:
        SourceFetchError: Request failure or a document without versions.
    """
    package = source.url.strip().strip("/")
    try:
        response = requests.get(
            f"{REGISTRY_URL}/{quote(package, safe='@')}",
            headers={"Accept": "application/json", "User-Agent": settings.user_agent},
            timeout=settings.request_timeout,
        )
        response.raise_for_status()
        document = response.json()
    except (requests.RequestException, ValueError) as e:
        raise SourceFetchError(source.name, f"registry error: {e}") from e

    versions = document.get("versions") if isinstance(document, dict) else None
    if not isinstance(versions, dict):
        raise SourceFetchError(source.name, "registry document has no versions")

    times = document.get("time") or {}
    items = []
    for version in newest_versions(versions, times, settings.registry_versions):
        published = times.get(version)
        version_data = versions.get(version) or {}
        items.append(
            IngestedItem(
                source_id=source.id,
                external_id=version,
                title=f"{package} v{version}",
                url=f"{PACKAGE_PAGE_URL}/{package}/v/{version}",
                published_at=parse_datetime(published),
                payload=RegistryPayload(
                    version=version,
                    description=version_data.get("description"),
                    keywords=list(version_data.get("keywords") or []),
                    dependencies=dict(version_data.get("dependencies") or {}),
                    time=published,
                    raw=json_safe(version_data),
                ),
                uniq_hash=generate_fingerprint(source.url, version, published),
            )
        )
    return items


def newest_versions(versions: dict, times: dict, count: int) -> list[str]:
    """The `count` most recently published versions, newest first.

    Versions without a publish time sort after timed ones, in document order.
    """
    timed = [
        (times[v], v) for v in versions if v in times and v not in _TIME_META_KEYS
    ]
    timed.sort(reverse=True)
    ordered = [v for _, v in timed]
    ordered += [v for v in versions if v not in times]
    return ordered[:count]
