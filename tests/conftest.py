"""Shared fixtures: an in-memory SQLite database with the full schema."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from storage.connection import build_session_factory, create_tables
from storage.models import RawItem, Source


@pytest.fixture
def engine():
    # One shared connection so worker threads see the same in-memory database
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_source(session):
    def _make(name: str = "React GitHub", kind: str = "github", url: str = "facebook/react", active: bool = True):
        source = Source(name=name, kind=kind, url=url, active=active)
        session.add(source)
        session.commit()
        return source

    return _make


@pytest.fixture
def make_raw_item(session):
    counter = {"n": 0}

    def _make(source: Source, title: str = "Item", payload: dict | None = None, **fields):
        counter["n"] += 1
        item = RawItem(
            source_id=source.id,
            title=title,
            url=fields.pop("url", f"https://example.com/{counter['n']}"),
            published_at=fields.pop("published_at", datetime(2024, 6, 1, tzinfo=timezone.utc)),
            payload=payload if payload is not None else {"kind": "rss", "description": ""},
            uniq_hash=fields.pop("uniq_hash", f"hash-{counter['n']}"),
            **fields,
        )
        session.add(item)
        session.commit()
        return item

    return _make
