"""Shared FastAPI dependencies: database sessions, config and the cron secret."""

from __future__ import annotations

import hmac
from typing import Annotated, Iterator

from fastapi import Depends, Header
from sqlalchemy.orm import Session, sessionmaker

from common.errors import AuthorizationError
from common.settings import PipelineConfig, get_config
from storage.connection import build_engine, build_session_factory, session_scope

_session_factory: sessionmaker | None = None


def get_session_factory() -> sessionmaker:
    """Get the global session factory, building it from DATABASE_URL on first use."""
    global _session_factory
    if _session_factory is None:
        _session_factory = build_session_factory(build_engine())
    return _session_factory


def set_session_factory(factory: sessionmaker | None) -> None:
    """Set the global session factory (for testing)."""
    global _session_factory
    _session_factory = factory


def get_db(
    factory: Annotated[sessionmaker, Depends(get_session_factory)],
) -> Iterator[Session]:
    with session_scope(factory) as session:
        yield session


def get_pipeline_config() -> PipelineConfig:
    return get_config()


def verify_cron_secret(
    config: Annotated[PipelineConfig, Depends(get_pipeline_config)],
    authorization: Annotated[str | None, Header()] = None,
) -> None:
    """Require `Authorization: Bearer <CRON_SECRET>` when a secret is configured."""
    if not config.cron_secret:
        return
    expected = f"Bearer {config.cron_secret}"
    if not hmac.compare_digest((authorization or "").encode(), expected.encode()):
        raise AuthorizationError("Missing or invalid cron secret")
