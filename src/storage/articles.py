"""Article, citation and tag persistence and read queries."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from common.errors import DuplicateArticleError, PersistenceError
from common.text import extract_significant_words, word_overlap
from storage.models import Article, Citation, ReviewStatus, Tag, article_tags
from storage.upsert import insert_ignore_conflicts

logger = logging.getLogger(__name__)

MIN_SHARED_WORDS = 2


def get_article_by_slug(session: Session, slug: str) -> Article | None:
    return session.scalars(select(Article).where(Article.slug == slug)).first()


def slug_exists(session: Session, slug: str) -> bool:
    return session.execute(select(Article.id).where(Article.slug == slug).limit(1)).first() is not None


def find_similar_articles(
    session: Session,
    title: str,
    since: datetime,
    min_shared_words: int = MIN_SHARED_WORDS,
) -> list[Article]:
    """Articles published since `since` whose title or slug shares enough significant words.

    The slug is compared separately because it can be truncated or carry
    words the stored title lost.
    """
    words = extract_significant_words(title)
    if len(words) < min_shared_words:
        return []

    stmt = select(Article).where(Article.published_at >= since).order_by(Article.published_at.desc())
    similar = []
    for article in session.scalars(stmt):
        title_overlap = word_overlap(words, extract_significant_words(article.title))
        slug_overlap = word_overlap(words, extract_significant_words(article.slug))
        if max(title_overlap, slug_overlap) >= min_shared_words:
            similar.append(article)
    return similar


def get_or_create_tag(session: Session, name: str) -> Tag:
    """Return the tag with `name`, inserting it first if needed. Does not commit."""
    session.execute(
        insert_ignore_conflicts(
            session,
            Tag.__table__,
            {"name": name, "created_at": datetime.now(timezone.utc)},
            index_elements=["name"],
        )
    )
    return session.scalars(select(Tag).where(Tag.name == name)).one()


def attach_tags(session: Session, article_id: int, tag_names: list[str]) -> int:
    """Get-or-create each tag and link it to the article. Does not commit.

    Attaching an already-attached tag is a no-op. Returns new links created.
    """
    attached = 0
    for name in tag_names:
        tag = get_or_create_tag(session, name)
        result = session.execute(
            insert_ignore_conflicts(
                session,
                article_tags,
                {"article_id": article_id, "tag_id": tag.id},
                index_elements=["article_id", "tag_id"],
            )
        )
        attached += result.rowcount
    return attached


def save_article(
    session: Session,
    values: dict[str, Any],
    citations: list[dict[str, Any]],
    tag_names: list[str],
) -> Article:
    """Persist an article with its citations and tags as one transaction.

    Either everything commits or nothing does: a failure at any step rolls
    back the article row too, so no orphaned article/citation/tag state
    remains.

    Raises:
        DuplicateArticleError: The slug is already taken (lost a race).
        PersistenceError: Any other database failure.
    """
    try:
        article = Article(**values)
        session.add(article)
        session.flush()

        for citation in citations:
            session.add(Citation(article_id=article.id, url=citation["url"], title=citation.get("title")))
        session.flush()

        attach_tags(session, article.id, tag_names)
        session.commit()
    except IntegrityError as e:
        session.rollback()
        if slug_exists(session, values["slug"]):
            raise DuplicateArticleError(f"Slug already exists: {values['slug']}") from e
        raise PersistenceError(f"Failed to save article {values['slug']}: {e}") from e
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceError(f"Failed to save article {values['slug']}: {e}") from e

    session.refresh(article)
    logger.info(
        "Saved article %s with %d citations and %d tags", article.slug, len(citations), len(tag_names)
    )
    return article


def update_hero_url(session: Session, article: Article, hero_url: str) -> None:
    article.hero_url = hero_url
    session.commit()


def get_articles(
    session: Session,
    limit: int = 10,
    offset: int = 0,
    tag: str | None = None,
    published_before: datetime | None = None,
) -> list[Article]:
    stmt = select(Article)
    if tag:
        stmt = stmt.join(article_tags, Article.id == article_tags.c.article_id).join(
            Tag, Tag.id == article_tags.c.tag_id
        ).where(Tag.name == tag)
    if published_before is not None:
        stmt = stmt.where(Article.published_at <= published_before)
    stmt = stmt.order_by(Article.published_at.desc(), Article.id.desc()).limit(limit).offset(offset)
    return list(session.scalars(stmt))


def count_articles(session: Session, tag: str | None = None) -> int:
    if not tag:
        return session.execute(select(func.count()).select_from(Article)).scalar_one()
    stmt = (
        select(func.count(func.distinct(article_tags.c.article_id)))
        .select_from(article_tags)
        .join(Tag, Tag.id == article_tags.c.tag_id)
        .where(Tag.name == tag)
    )
    return session.execute(stmt).scalar_one()


def get_all_tags(session: Session) -> list[Tag]:
    return list(session.scalars(select(Tag).order_by(Tag.name)))


def get_articles_needing_review(session: Session, limit: int = 10) -> list[Article]:
    stmt = (
        select(Article)
        .where(Article.review_status == ReviewStatus.NEEDS_REVIEW.value)
        .order_by(Article.created_at.desc(), Article.id.desc())
        .limit(limit)
    )
    return list(session.scalars(stmt))


def update_review_status(session: Session, article: Article, status: ReviewStatus) -> None:
    article.review_status = status.value
    session.commit()
