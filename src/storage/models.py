"""SQLAlchemy models for the blog's six relations."""

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# SQLite only autoincrements INTEGER PRIMARY KEY
BigId = BigInteger().with_variant(Integer(), "sqlite")
Payload = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SourceKind(str, enum.Enum):
    RSS = "rss"
    GITHUB = "github"
    REGISTRY = "registry"
    BLOG = "blog"


class AuthorType(str, enum.Enum):
    AI = "ai"
    HUMAN = "human"


class ReviewStatus(str, enum.Enum):
    AUTO = "auto"
    NEEDS_REVIEW = "needs_review"
    REVIEWED = "reviewed"


article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", BigId, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id"), primary_key=True),
)


class Source(Base):
    __tablename__ = "sources"
    __table_args__ = (
        CheckConstraint("kind IN ('rss','github','registry','blog')", name="ck_sources_kind"),
    )

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    kind = Column(String(16), nullable=False)
    url = Column(Text, nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self) -> str:
        return f"<Source {self.id} {self.name!r} {self.kind}>"


class RawItem(Base):
    __tablename__ = "items_raw"
    __table_args__ = (
        Index("idx_items_raw_source_id", "source_id"),
        Index("idx_items_raw_published_at", "published_at"),
    )

    id = Column(BigId, primary_key=True, autoincrement=True)
    source_id = Column(Integer, ForeignKey("sources.id"), nullable=False)
    external_id = Column(Text)
    title = Column(Text)
    url = Column(Text)
    published_at = Column(DateTime(timezone=True))
    payload = Column(Payload)
    uniq_hash = Column(Text, nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    source = relationship("Source")

    def __repr__(self) -> str:
        return f"<RawItem {self.id} {self.title!r}>"


class Article(Base):
    __tablename__ = "articles"
    __table_args__ = (
        CheckConstraint("author_type IN ('ai','human')", name="ck_articles_author_type"),
        CheckConstraint(
            "review_status IN ('auto','needs_review','reviewed')", name="ck_articles_review_status"
        ),
        Index("idx_articles_published_at", "published_at"),
    )

    id = Column(BigId, primary_key=True, autoincrement=True)
    slug = Column(Text, nullable=False, unique=True)
    title = Column(Text, nullable=False)
    dek = Column(Text)
    body_html = Column(Text, nullable=False)
    word_count = Column(Integer)
    hero_url = Column(Text)
    lang = Column(String(8), nullable=False, default="en")
    author_type = Column(String(8), nullable=False, default=AuthorType.AI.value)
    review_status = Column(String(16), nullable=False, default=ReviewStatus.AUTO.value)
    primary_source_url = Column(Text)
    published_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    citations = relationship(
        "Citation",
        back_populates="article",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Citation.id",
    )
    tags = relationship("Tag", secondary=article_tags, order_by="Tag.name")

    def __repr__(self) -> str:
        return f"<Article {self.id} {self.slug!r}>"


class Citation(Base):
    __tablename__ = "citations"
    __table_args__ = (Index("idx_citations_article_id", "article_id"),)

    id = Column(BigId, primary_key=True, autoincrement=True)
    article_id = Column(BigId, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False)
    url = Column(Text, nullable=False)
    title = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    article = relationship("Article", back_populates="citations")


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self) -> str:
        return f"<Tag {self.name!r}>"
