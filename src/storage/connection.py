"""Engine and session construction.

There is no module-level engine: callers build a session factory once (CLI
entry point, API startup, test fixture) and pass sessions down explicitly.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from storage.models import Base

load_dotenv()


def build_engine(database_url: str | None = None, **kwargs) -> Engine:
    """Create an engine from `database_url` or DATABASE_URL."""
    url = database_url or os.environ["DATABASE_URL"]
    return create_engine(url, pool_pre_ping=True, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


def create_tables(engine: Engine) -> None:
    """Create all tables if they don't exist."""
    Base.metadata.create_all(engine)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Context manager for a session with rollback on error and close on exit.

    Commits are left to the operations themselves so that each unit of work
    (one raw item, one article) decides its own transaction boundary.
    """
    session = session_factory()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
