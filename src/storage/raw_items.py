"""Deduplication store: raw items keyed by fingerprint."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from common.errors import DuplicateItemError
from storage.models import RawItem
from storage.upsert import insert_ignore_conflicts

logger = logging.getLogger(__name__)

MAX_RETENTION_DAYS = 365


def raw_item_exists(session: Session, uniq_hash: str) -> bool:
    stmt = select(RawItem.id).where(RawItem.uniq_hash == uniq_hash).limit(1)
    return session.execute(stmt).first() is not None


def get_raw_item_by_hash(session: Session, uniq_hash: str) -> RawItem | None:
    return session.scalars(select(RawItem).where(RawItem.uniq_hash == uniq_hash)).first()


def insert_raw_item(session: Session, values: dict[str, Any]) -> RawItem:
    """Insert one raw item and commit.

    Raises:
        DuplicateItemError: The fingerprint is already stored (a concurrent
            run got there first).
    """
    stmt = insert_ignore_conflicts(
        session,
        RawItem.__table__,
        {"created_at": datetime.now(timezone.utc), **values},
        index_elements=["uniq_hash"],
    )
    result = session.execute(stmt)
    session.commit()
    if result.rowcount == 0:
        raise DuplicateItemError(values["uniq_hash"])
    return get_raw_item_by_hash(session, values["uniq_hash"])


def get_recent_raw_items(session: Session, limit: int = 100) -> list[RawItem]:
    """Snapshot of raw items for ranking, newest published first, unknown dates last."""
    stmt = (
        select(RawItem)
        .order_by(RawItem.published_at.desc().nulls_last(), RawItem.id.desc())
        .limit(limit)
    )
    return list(session.scalars(stmt))


def count_raw_items(session: Session) -> int:
    return session.execute(select(func.count()).select_from(RawItem)).scalar_one()


def prune_raw_items(session: Session, days_to_keep: int = 7, now: datetime | None = None) -> int:
    """Delete raw items created more than `days_to_keep` days ago."""
    if isinstance(days_to_keep, bool) or not isinstance(days_to_keep, int):
        raise ValueError("days_to_keep must be an integer")
    if not 0 <= days_to_keep <= MAX_RETENTION_DAYS:
        raise ValueError(f"days_to_keep must be between 0 and {MAX_RETENTION_DAYS}")

    cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=days_to_keep)
    result = session.execute(delete(RawItem).where(RawItem.created_at < cutoff))
    session.commit()
    logger.info("Pruned %d raw items older than %d days", result.rowcount, days_to_keep)
    return result.rowcount
