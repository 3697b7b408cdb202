"""Article Pydantic models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from common.datetime import ensure_utc


class TagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CitationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    url: str
    title: str | None = None


class ArticleSummaryResponse(BaseModel):
    """Article as shown in listings."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    dek: str | None = None
    hero_url: str | None = None
    word_count: int | None = None
    lang: str
    author_type: str
    review_status: str
    primary_source_url: str | None = None
    published_at: datetime

    @field_validator("published_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class ArticleDetailResponse(ArticleSummaryResponse):
    """Full article with body, citations and tags."""

    body_html: str
    citations: list[CitationResponse] = Field(default_factory=list)
    tags: list[TagResponse] = Field(default_factory=list)


class ArticleListResponse(BaseModel):
    """Page of articles with page-number pagination metadata."""

    model_config = ConfigDict(populate_by_name=True)

    articles: list[ArticleSummaryResponse]
    total_count: int = Field(alias="totalCount")
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    has_next_page: bool = Field(alias="hasNextPage")
    has_prev_page: bool = Field(alias="hasPrevPage")


class TagListResponse(BaseModel):
    tags: list[TagResponse]
