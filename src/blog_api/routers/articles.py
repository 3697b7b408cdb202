"""Read-only article and tag endpoints."""

from __future__ import annotations

import math
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from blog_api.dependencies import get_db
from blog_api.models.article import (
    ArticleDetailResponse,
    ArticleListResponse,
    ArticleSummaryResponse,
    TagListResponse,
    TagResponse,
)
from storage.articles import count_articles, get_all_tags, get_article_by_slug, get_articles

router = APIRouter(prefix="/api", tags=["articles"])


@router.get("/articles", response_model=ArticleListResponse)
def list_articles(
    session: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Articles per page")] = 10,
    tag: Annotated[str | None, Query(description="Filter by tag name")] = None,
):
    """List articles newest first, optionally filtered by tag."""
    offset = (page - 1) * limit
    articles = get_articles(session, limit=limit, offset=offset, tag=tag)
    total = count_articles(session, tag=tag)
    total_pages = math.ceil(total / limit)

    return ArticleListResponse(
        articles=[ArticleSummaryResponse.model_validate(a) for a in articles],
        total_count=total,
        current_page=page,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


@router.get("/tags", response_model=TagListResponse)
def list_tags(session: Annotated[Session, Depends(get_db)]):
    return TagListResponse(tags=[TagResponse.model_validate(t) for t in get_all_tags(session)])


@router.get("/articles/{slug}", response_model=ArticleDetailResponse)
def get_article(slug: str, session: Annotated[Session, Depends(get_db)]):
    """Get a single article with its citations and tags."""
    article = get_article_by_slug(session, slug)
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return ArticleDetailResponse.model_validate(article)
