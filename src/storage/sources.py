"""Source registry queries."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from storage.models import Source

logger = logging.getLogger(__name__)


def get_active_sources(session: Session) -> list[Source]:
    stmt = select(Source).where(Source.active.is_(True)).order_by(Source.name)
    return list(session.scalars(stmt))


def get_source_by_id(session: Session, source_id: int) -> Source | None:
    return session.get(Source, source_id)


def get_source_by_name(session: Session, name: str) -> Source | None:
    return session.scalars(select(Source).where(Source.name == name)).first()


def set_source_active(session: Session, name: str, active: bool) -> bool:
    """Toggle a source's active flag. Returns False if no source has that name."""
    source = get_source_by_name(session, name)
    if source is None:
        return False
    source.active = active
    session.commit()
    return True


def seed_sources(session: Session, catalog: list[dict]) -> int:
    """Insert catalog sources whose name is not stored yet. Returns inserted count."""
    existing = set(session.scalars(select(Source.name)))
    inserted = 0
    for entry in catalog:
        if entry["name"] in existing:
            continue
        session.add(
            Source(
                name=entry["name"],
                kind=entry["kind"],
                url=entry["url"],
                active=entry.get("active", True),
            )
        )
        existing.add(entry["name"])
        inserted += 1
    session.commit()
    logger.info("Seeded %d new sources (%d already present)", inserted, len(catalog) - inserted)
    return inserted
