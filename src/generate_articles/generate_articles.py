"""Turn the top ranked raw items into persisted articles."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from common.errors import (
    DuplicateArticleError,
    GenerationCapabilityError,
    PersistenceError,
    ValidationError,
)
from common.settings import GenerationSettings, PipelineConfig
from common.text import slugify
from generate_articles.facts_pack import build_facts_pack
from generate_articles.generate_article import generate_article_content
from generate_articles.hero_image import build_image_prompt, generate_hero_image
from generate_articles.models import (
    ArticleContent,
    CandidateOutcome,
    CandidateState,
    FactsPack,
)
from generate_articles.render import count_words, render_body_html
from generate_articles.sanitize import sanitize_article_content
from generate_articles.validate import validate_article
from rank_items.models import RankedItem
from rank_items.rank_items import rank_items, ranking_config_from_settings
from rank_items.select_items import select_top_candidates
from review_articles.quality_review import fact_check_article
from storage.articles import find_similar_articles, save_article, slug_exists, update_hero_url
from storage.models import Article, AuthorType, ReviewStatus
from storage.raw_items import get_recent_raw_items

logger = logging.getLogger(__name__)

GenerateFn = Callable[[FactsPack, str], dict[str, Any]]
ImageFn = Callable[[str, str], Optional[str]]


def check_duplicate(
    session: Session,
    slug: str,
    headline: str,
    window_days: int = 7,
    now: datetime | None = None,
) -> None:
    """Raise DuplicateArticleError for a taken slug or a recent similar article."""
    if slug_exists(session, slug):
        raise DuplicateArticleError(f"Slug already exists: {slug}")

    now = now or datetime.now(timezone.utc)
    similar = find_similar_articles(session, headline, since=now - timedelta(days=window_days))
    if similar:
        raise DuplicateArticleError(
            f"Similar article published within {window_days} days: {similar[0].slug}"
        )


def persist_article(
    session: Session,
    content: ArticleContent,
    facts_pack: FactsPack,
    review_status: ReviewStatus = ReviewStatus.AUTO,
    now: datetime | None = None,
) -> Article:
    """Write the article with its citations and tags in one transaction.

    Raises:
        DuplicateArticleError: The slug was taken concurrently.
        PersistenceError: The write failed; nothing was kept.
    """
    body_html = render_body_html(content)
    primary_source = facts_pack.sources[0].url if facts_pack.sources else None
    values = {
        "slug": slugify(content.headline),
        "title": content.headline,
        "dek": content.dek,
        "body_html": body_html,
        "word_count": count_words(body_html),
        "lang": facts_pack.language,
        "author_type": AuthorType.AI.value,
        "review_status": review_status.value,
        "primary_source_url": primary_source or None,
        "published_at": now or datetime.now(timezone.utc),
    }
    citations = [{"url": c.url, "title": c.title} for c in content.citations]
    return save_article(session, values, citations, content.tags)


def _attach_hero_image(
    session: Session,
    article: Article,
    topic: str,
    settings: GenerationSettings,
    image_fn: ImageFn,
) -> None:
    try:
        url = image_fn(build_image_prompt(topic), settings.image_model)
    except Exception as e:
        logger.warning("Hero image failed for %s: %s", article.slug, e)
        return
    if not url:
        return
    try:
        update_hero_url(session, article, url)
    except Exception as e:
        session.rollback()
        logger.warning("Could not store hero image for %s: %s", article.slug, e)


def process_candidate(
    session: Session,
    item: RankedItem,
    settings: GenerationSettings,
    generate_fn: GenerateFn,
    image_fn: ImageFn | None = None,
    now: datetime | None = None,
) -> CandidateOutcome:
    """Run one candidate through facts, generation, validation and persistence.

    Every failure ends in a terminal state on the returned outcome; nothing
    raises out of here for an individual candidate.
    """
    outcome = CandidateOutcome(item_id=item.id, title=item.title)

    facts_pack = build_facts_pack(item, audience=settings.audience, language=settings.language)
    outcome.state = CandidateState.FACTS_BUILT

    outcome.state = CandidateState.GENERATING
    try:
        data = generate_fn(facts_pack, settings.model)
    except GenerationCapabilityError as e:
        logger.error("Generation failed for item %s: %s", item.id, e)
        outcome.state = CandidateState.GENERATION_FAILED
        outcome.error = str(e)
        return outcome
    content = sanitize_article_content(data)
    outcome.state = CandidateState.GENERATED

    outcome.state = CandidateState.VALIDATING
    result = validate_article(content, facts_pack, settings.trusted_domains)
    outcome.issues = list(result.issues)
    try:
        result.raise_for_blocking()
    except ValidationError as e:
        logger.warning("Rejected %r: %s", content.headline, e)
        outcome.state = CandidateState.REJECTED
        outcome.error = str(e)
        return outcome

    slug = slugify(content.headline)
    try:
        check_duplicate(session, slug, content.headline, settings.duplicate_window_days, now)
    except DuplicateArticleError as e:
        logger.info("Skipping duplicate %r: %s", content.headline, e)
        outcome.state = CandidateState.REJECTED
        outcome.error = str(e)
        return outcome

    review_status = ReviewStatus.NEEDS_REVIEW if result.soft_issues else ReviewStatus.AUTO
    try:
        article = persist_article(session, content, facts_pack, review_status, now)
    except DuplicateArticleError as e:
        logger.info("Skipping duplicate %r: %s", content.headline, e)
        outcome.state = CandidateState.REJECTED
        outcome.error = str(e)
        return outcome
    except PersistenceError as e:
        logger.error("Failed to persist %r: %s", content.headline, e)
        outcome.state = CandidateState.PERSISTENCE_FAILED
        outcome.error = str(e)
        return outcome

    outcome.state = CandidateState.PERSISTED
    outcome.article = article

    notes = fact_check_article(article.body_html, facts_pack)
    for note in notes:
        logger.info("Fact check note for %s: %s", article.slug, note.message)

    if settings.image_enabled and image_fn is not None:
        _attach_hero_image(session, article, facts_pack.topic, settings, image_fn)

    return outcome


def generate_articles(
    session: Session,
    count: int,
    config: PipelineConfig,
    generate_fn: GenerateFn | None = None,
    image_fn: ImageFn | None = None,
    now: datetime | None = None,
) -> list[CandidateOutcome]:
    """Rank the recent snapshot, pick `count` diverse items and process each in order."""
    generate_fn = generate_fn or generate_article_content
    image_fn = image_fn or generate_hero_image

    snapshot = get_recent_raw_items(session, limit=config.ranking.snapshot_size)
    ranked = rank_items(snapshot, ranking_config_from_settings(config.ranking), now=now)
    candidates = select_top_candidates(ranked, count)
    logger.info("Generating articles for %d of %d ranked items", len(candidates), len(ranked))

    outcomes = []
    for item in candidates:
        try:
            outcome = process_candidate(session, item, config.generation, generate_fn, image_fn, now)
        except Exception as e:
            session.rollback()
            logger.error("Unexpected error processing item %s: %s", item.id, e)
            outcome = CandidateOutcome(
                item_id=item.id,
                title=item.title,
                state=CandidateState.GENERATION_FAILED,
                error=str(e),
            )
        outcomes.append(outcome)

    persisted = sum(1 for o in outcomes if o.state == CandidateState.PERSISTED)
    logger.info("Persisted %d of %d candidates", persisted, len(outcomes))
    return outcomes
