"""Data models for the ingest_items pipeline stage.

Payloads are a tagged union keyed by source kind. They are stored in the
raw item's JSON column with a "kind" field and rebuilt with
`payload_from_dict`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Optional, Union


@dataclass
class RssPayload:
    """Feed entry details (RSS/Atom, also used for blog sources)."""
    description: Optional[str] = None
    categories: list[str] = field(default_factory=list)
    author: Optional[str] = None
    published: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict)
    kind: str = "rss"


@dataclass
class GithubReleasePayload:
    """GitHub release from the REST releases endpoint."""
    tag_name: str
    name: Optional[str] = None
    body: Optional[str] = None
    prerelease: bool = False
    draft: bool = False
    author: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict)
    kind: str = "github"


@dataclass
class RegistryPayload:
    """One published npm package version."""
    version: str
    description: Optional[str] = None
    keywords: list[str] = field(default_factory=list)
    dependencies: dict[str, str] = field(default_factory=dict)
    time: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict)
    kind: str = "registry"


ItemPayload = Union[RssPayload, GithubReleasePayload, RegistryPayload]


def payload_to_dict(payload: ItemPayload) -> dict[str, Any]:
    return asdict(payload)


def payload_from_dict(data: dict[str, Any] | None) -> ItemPayload | None:
    """Rebuild a typed payload from its stored dict. Unknown kinds return None."""
    if not data:
        return None
    kind = data.get("kind")
    fields = {k: v for k, v in data.items() if k != "kind"}
    if kind in ("rss", "blog"):
        return RssPayload(**_known(RssPayload, fields))
    if kind == "github" and fields.get("tag_name"):
        return GithubReleasePayload(**_known(GithubReleasePayload, fields))
    if kind == "registry" and fields.get("version"):
        return RegistryPayload(**_known(RegistryPayload, fields))
    return None


def _known(cls, fields: dict[str, Any]) -> dict[str, Any]:
    names = cls.__dataclass_fields__.keys()
    return {k: v for k, v in fields.items() if k in names}


@dataclass
class IngestedItem:
    """Normalized item produced by an adapter, not yet stored."""
    source_id: int
    uniq_hash: str
    payload: ItemPayload
    external_id: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    published_at: Optional[datetime] = None

    def to_row(self) -> dict[str, Any]:
        return {
            "source_id": self.source_id,
            "external_id": self.external_id,
            "title": self.title,
            "url": self.url,
            "published_at": self.published_at,
            "payload": payload_to_dict(self.payload),
            "uniq_hash": self.uniq_hash,
        }
