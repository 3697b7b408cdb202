"""Tests for storage.articles module."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from common.errors import DuplicateArticleError, PersistenceError
from storage import articles as articles_module
from storage.articles import (
    attach_tags,
    count_articles,
    find_similar_articles,
    get_all_tags,
    get_article_by_slug,
    get_articles,
    get_articles_needing_review,
    save_article,
    slug_exists,
    update_review_status,
)
from storage.models import Article, Citation, ReviewStatus, Tag, article_tags

NOW = datetime(2024, 6, 10, tzinfo=timezone.utc)


def _values(slug: str = "react-19-compiler-lands", title: str = "React 19 Compiler Lands", **overrides) -> dict:
    values = {
        "slug": slug,
        "title": title,
        "dek": "What the new compiler means for your components",
        "body_html": "<p>Body</p>",
        "word_count": 1,
        "primary_source_url": "https://github.com/facebook/react/releases/tag/v19.0.0",
        "published_at": NOW,
    }
    values.update(overrides)
    return values


CITATIONS = [{"url": "https://github.com/facebook/react/releases/tag/v19.0.0", "title": "React v19.0.0"}]


class TestSaveArticle:
    def test_persists_article_citations_and_tags(self, session) -> None:
        article = save_article(session, _values(), CITATIONS, ["react", "release"])

        stored = get_article_by_slug(session, "react-19-compiler-lands")
        assert stored.id == article.id
        assert [c.url for c in stored.citations] == [CITATIONS[0]["url"]]
        assert [t.name for t in stored.tags] == ["react", "release"]
        assert stored.review_status == "auto"
        assert stored.author_type == "ai"

    def test_reuses_existing_tags(self, session) -> None:
        save_article(session, _values(), CITATIONS, ["react"])
        save_article(session, _values(slug="vue-3-5", title="Vue 3.5 Arrives"), CITATIONS, ["react", "vue"])
        assert [t.name for t in get_all_tags(session)] == ["react", "vue"]

    def test_duplicate_slug_raises(self, session) -> None:
        save_article(session, _values(), CITATIONS, [])
        with pytest.raises(DuplicateArticleError):
            save_article(session, _values(title="Another title"), CITATIONS, [])
        assert count_articles(session) == 1

    def test_failure_rolls_back_everything(self, session, monkeypatch: pytest.MonkeyPatch) -> None:
        def failing_attach(*args, **kwargs):
            raise OperationalError("INSERT INTO article_tags", {}, Exception("disk I/O error"))

        monkeypatch.setattr(articles_module, "attach_tags", failing_attach)

        with pytest.raises(PersistenceError):
            save_article(session, _values(), CITATIONS, ["react"])

        assert session.query(Article).count() == 0
        assert session.query(Citation).count() == 0
        assert not slug_exists(session, "react-19-compiler-lands")


class TestAttachTags:
    def test_attaching_twice_is_noop(self, session) -> None:
        article = save_article(session, _values(), CITATIONS, ["react"])
        assert attach_tags(session, article.id, ["react"]) == 0
        session.commit()
        assert session.execute(article_tags.select()).fetchall() == [(article.id, session.query(Tag).one().id)]


class TestFindSimilarArticles:
    def test_matches_shared_significant_words(self, session) -> None:
        save_article(session, _values(), CITATIONS, [])
        similar = find_similar_articles(session, "React Compiler Lands In Stable", since=NOW - timedelta(days=7))
        assert [a.slug for a in similar] == ["react-19-compiler-lands"]

    def test_ignores_articles_outside_window(self, session) -> None:
        save_article(session, _values(published_at=NOW - timedelta(days=30)), CITATIONS, [])
        assert find_similar_articles(session, "React Compiler Lands", since=NOW - timedelta(days=7)) == []

    def test_single_shared_word_is_not_similar(self, session) -> None:
        save_article(session, _values(), CITATIONS, [])
        assert find_similar_articles(session, "Vue Compiler Rewrite", since=NOW - timedelta(days=7)) == []


class TestListing:
    def test_pagination_and_tag_filter(self, session) -> None:
        for i in range(3):
            save_article(
                session,
                _values(slug=f"post-{i}", title=f"Post {i}", published_at=NOW - timedelta(days=i)),
                [],
                ["react"] if i < 2 else ["vue"],
            )
        assert [a.slug for a in get_articles(session, limit=2)] == ["post-0", "post-1"]
        assert [a.slug for a in get_articles(session, limit=2, offset=2)] == ["post-2"]
        assert [a.slug for a in get_articles(session, tag="vue")] == ["post-2"]
        assert count_articles(session) == 3
        assert count_articles(session, tag="react") == 2


class TestReviewQueue:
    def test_needs_review_and_promotion(self, session) -> None:
        flagged = save_article(session, _values(review_status="needs_review"), CITATIONS, [])
        save_article(session, _values(slug="other", title="Other"), CITATIONS, [])

        assert [a.id for a in get_articles_needing_review(session)] == [flagged.id]
        update_review_status(session, flagged, ReviewStatus.REVIEWED)
        assert get_articles_needing_review(session) == []
