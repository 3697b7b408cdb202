"""Full and fast content pipeline runs: ingest, then generate."""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from sqlalchemy.orm import Session, sessionmaker

from common.datetime import ensure_utc
from common.errors import PipelineTimeoutError
from common.settings import PipelineConfig
from generate_articles.generate_articles import generate_articles
from generate_articles.models import CandidateOutcome, CandidateState
from ingest_items.ingest_items import run_ingest
from storage.connection import session_scope

logger = logging.getLogger(__name__)

T = TypeVar("T")


def summarize_outcomes(outcomes: list[CandidateOutcome]) -> dict[str, Any]:
    """Persisted articles plus a count of candidates per terminal state."""
    articles = []
    for outcome in outcomes:
        if outcome.state != CandidateState.PERSISTED:
            continue
        article = outcome.article
        published_at = ensure_utc(article.published_at)
        articles.append({
            "id": article.id,
            "title": article.title,
            "slug": article.slug,
            "published_at": published_at.isoformat() if published_at else None,
            "review_status": article.review_status,
        })
    return {
        "articles_generated": len(articles),
        "articles": articles,
        "outcomes": dict(Counter(o.state.value for o in outcomes)),
    }


@dataclass
class PipelineResult:
    ingested_count: int
    outcomes: list[CandidateOutcome] = field(default_factory=list)
    fast: bool = False

    @property
    def articles(self) -> list:
        return [o.article for o in self.outcomes if o.state == CandidateState.PERSISTED]

    @property
    def message(self) -> str:
        name = "Fast pipeline" if self.fast else "Content pipeline"
        count = len(self.articles)
        if count:
            return f"{name} completed successfully - generated {count} articles"
        return f"{name} completed - no articles generated"

    def to_summary(self) -> dict[str, Any]:
        return {
            "ingested_count": self.ingested_count,
            "message": self.message,
            **summarize_outcomes(self.outcomes),
        }


def run_content_pipeline(
    session: Session,
    config: PipelineConfig,
    fast: bool = False,
    count: int | None = None,
    **kwargs,
) -> PipelineResult:
    """Ingest (full or fast allow-list) and then generate a batch of articles.

    Keyword arguments `generate_fn`, `image_fn` and `now` go to
    generate_articles; `sleep` goes to the ingest loop.
    """
    count = count if count is not None else config.generation.batch_size
    settings = config.fast_ingest if fast else config.full_ingest

    logger.info("Step 1: ingesting new data (%s)", "fast" if fast else "full")
    ingest_kwargs = {"sleep": kwargs.pop("sleep")} if "sleep" in kwargs else {}
    ingested = run_ingest(session, settings, fast=fast, **ingest_kwargs)
    logger.info("Ingested %d new items", ingested)

    logger.info("Step 2: generating up to %d articles", count)
    outcomes = generate_articles(session, count, config, **kwargs)

    result = PipelineResult(ingested_count=ingested, outcomes=outcomes, fast=fast)
    logger.info(result.message)
    return result


def run_with_budget(fn: Callable[[], T], budget_seconds: float) -> T:
    """Run `fn` in a worker thread and wait at most `budget_seconds` for it.

    On expiry the caller gets PipelineTimeoutError right away; the worker is
    left to finish in the background since threads cannot be killed.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pipeline")
    future = executor.submit(fn)
    try:
        return future.result(timeout=budget_seconds)
    except FutureTimeoutError as e:
        raise PipelineTimeoutError(f"Pipeline exceeded its {budget_seconds:g}s budget") from e
    finally:
        executor.shutdown(wait=False)


def run_fast_pipeline(
    session_factory: sessionmaker,
    config: PipelineConfig,
    budget_seconds: float | None = None,
    **kwargs,
) -> dict[str, Any]:
    """Fast run under the configured wall-clock budget. Returns the summary.

    The worker opens its own session so nothing is shared across threads.
    """
    budget = budget_seconds if budget_seconds is not None else config.fast_budget_seconds

    def work() -> dict[str, Any]:
        with session_scope(session_factory) as session:
            return run_content_pipeline(session, config, fast=True, **kwargs).to_summary()

    return run_with_budget(work, budget)
