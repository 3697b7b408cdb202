"""Tests for generate_articles.generate_articles module."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from common.errors import GenerationCapabilityError, PersistenceError
from common.settings import PipelineConfig
from generate_articles import generate_articles as orchestrator_module
from generate_articles.generate_articles import generate_articles
from generate_articles.models import CandidateState
from storage.articles import count_articles, get_article_by_slug
from storage.models import Article, Citation

NOW = datetime(2024, 12, 10, 12, 0, tzinfo=timezone.utc)
RELEASE_URL = "https://github.com/vitejs/vite/releases/tag/v6.0.0"


def _document(facts_pack, headline: str = "Vite 6 Ships The Environment API", citation_url: str | None = None) -> dict:
    return {
        "headline": headline,
        "dek": "A new extension point for framework authors targeting multiple runtimes",
        "body_sections": {
            "summary_150w": "Vite 6 introduces the Environment API so frameworks can run code in several runtimes at once.",
            "what_changed": ["Environment API", "Sass modern API by default"],
            "why_it_matters": ["Edge runtimes become first class"],
            "actions": ["npm install vite@6"],
            "breaking_changes": ["resolve.conditions defaults changed"],
        },
        "code_snippet": {"lang": "bash", "title": "Upgrade", "code": "npm install vite@6"},
        "citations": [{"url": citation_url or facts_pack.sources[0].url, "title": "Vite 6.0"}],
        "tags": ["vite", "Release", "vite"],
    }


def fake_generate(facts_pack, model):
    return _document(facts_pack)


@pytest.fixture
def release(make_source, make_raw_item):
    source = make_source(name="Vite GitHub", url="vitejs/vite")
    return make_raw_item(
        source,
        title="Vite v6.0.0 released",
        url=RELEASE_URL,
        published_at=NOW - timedelta(hours=6),
        payload={
            "kind": "github",
            "tag_name": "v6.0.0",
            "body": "Environment API, breaking changes to resolve.conditions and performance improvements. " * 3,
        },
    )


@pytest.fixture
def config() -> PipelineConfig:
    return PipelineConfig()


class TestGenerateArticles:
    def test_persists_valid_article(self, session, release, config) -> None:
        outcomes = generate_articles(session, 1, config, generate_fn=fake_generate, now=NOW)

        assert [o.state for o in outcomes] == [CandidateState.PERSISTED]
        article = get_article_by_slug(session, "vite-6-ships-the-environment-api")
        assert article.review_status == "auto"
        assert article.author_type == "ai"
        assert article.primary_source_url == RELEASE_URL
        assert article.word_count > 0
        assert "<h2>What Changed</h2>" in article.body_html
        assert [t.name for t in article.tags] == ["release", "vite"]
        assert [c.url for c in article.citations] == [RELEASE_URL]

    def test_second_run_is_rejected_as_duplicate(self, session, release, config) -> None:
        generate_articles(session, 1, config, generate_fn=fake_generate, now=NOW)
        outcomes = generate_articles(session, 1, config, generate_fn=fake_generate, now=NOW + timedelta(hours=1))

        assert [o.state for o in outcomes] == [CandidateState.REJECTED]
        assert "already exists" in outcomes[0].error
        assert count_articles(session) == 1

    def test_similar_headline_within_window_rejected(self, session, release, config) -> None:
        generate_articles(session, 1, config, generate_fn=fake_generate, now=NOW)

        def reworded(facts_pack, model):
            return _document(facts_pack, headline="Environment API Arrives In Vite 6")

        outcomes = generate_articles(session, 1, config, generate_fn=reworded, now=NOW + timedelta(days=1))
        assert outcomes[0].state == CandidateState.REJECTED
        assert count_articles(session) == 1

    def test_similar_headline_after_window_persists(self, session, release, config) -> None:
        generate_articles(session, 1, config, generate_fn=fake_generate, now=NOW)

        def reworded(facts_pack, model):
            return _document(facts_pack, headline="Environment API Arrives In Vite 6")

        later = NOW + timedelta(days=8)
        outcomes = generate_articles(session, 1, config, generate_fn=reworded, now=later)
        assert outcomes[0].state == CandidateState.PERSISTED

    def test_untrusted_citation_flags_for_review(self, session, release, config) -> None:
        def untrusted(facts_pack, model):
            return _document(facts_pack, citation_url="https://random-blog.example/vite-6")

        outcomes = generate_articles(session, 1, config, generate_fn=untrusted, now=NOW)

        assert outcomes[0].state == CandidateState.PERSISTED
        assert any("https://random-blog.example/vite-6" in i for i in outcomes[0].issues)
        assert outcomes[0].article.review_status == "needs_review"

    def test_invalid_content_rejected(self, session, release, config) -> None:
        def thin(facts_pack, model):
            document = _document(facts_pack)
            document["body_sections"]["what_changed"] = []
            return document

        outcomes = generate_articles(session, 1, config, generate_fn=thin, now=NOW)
        assert outcomes[0].state == CandidateState.REJECTED
        assert "Missing what_changed entries" in outcomes[0].issues
        assert "Missing what_changed entries" in outcomes[0].error
        assert count_articles(session) == 0

    def test_generation_failure(self, session, release, config) -> None:
        def broken(facts_pack, model):
            raise GenerationCapabilityError("quota exceeded")

        outcomes = generate_articles(session, 1, config, generate_fn=broken, now=NOW)
        assert outcomes[0].state == CandidateState.GENERATION_FAILED
        assert outcomes[0].error == "quota exceeded"

    def test_persistence_failure(self, session, release, config, monkeypatch: pytest.MonkeyPatch) -> None:
        def failing_save(*args, **kwargs):
            raise PersistenceError("connection lost")

        monkeypatch.setattr(orchestrator_module, "save_article", failing_save)

        outcomes = generate_articles(session, 1, config, generate_fn=fake_generate, now=NOW)
        assert outcomes[0].state == CandidateState.PERSISTENCE_FAILED
        assert session.query(Article).count() == 0
        assert session.query(Citation).count() == 0

    def test_every_outcome_is_terminal(self, session, make_source, make_raw_item, config) -> None:
        source = make_source(name="React GitHub")
        for tag in ("v19.0.0", "v18.3.0"):
            make_raw_item(
                source,
                title=f"React {tag} released",
                published_at=NOW - timedelta(hours=1),
                payload={"kind": "github", "tag_name": tag, "body": "Breaking changes and security fixes. " * 4},
            )
        calls = []

        def flaky(facts_pack, model):
            calls.append(facts_pack.topic)
            if len(calls) == 1:
                raise GenerationCapabilityError("timeout")
            return _document(facts_pack, headline=f"{facts_pack.topic} analysis for teams")

        outcomes = generate_articles(session, 2, config, generate_fn=flaky, now=NOW)
        assert len(outcomes) == 2
        assert all(o.is_terminal for o in outcomes)
        assert [o.state for o in outcomes] == [CandidateState.GENERATION_FAILED, CandidateState.PERSISTED]

    def test_no_candidates(self, session, config) -> None:
        assert generate_articles(session, 3, config, generate_fn=fake_generate, now=NOW) == []


class TestHeroImage:
    def test_hero_url_stored_when_enabled(self, session, release, config) -> None:
        config.generation = dataclasses.replace(config.generation, image_enabled=True)
        prompts = []

        def image(prompt, model):
            prompts.append((prompt, model))
            return "https://images.example/hero.png"

        outcomes = generate_articles(session, 1, config, generate_fn=fake_generate, image_fn=image, now=NOW)

        assert outcomes[0].article.hero_url == "https://images.example/hero.png"
        assert "Vite v6.0.0 released" in prompts[0][0]
        assert prompts[0][1] == "dall-e-3"

    def test_image_failure_keeps_article(self, session, release, config) -> None:
        config.generation = dataclasses.replace(config.generation, image_enabled=True)

        def image(prompt, model):
            raise RuntimeError("content policy")

        outcomes = generate_articles(session, 1, config, generate_fn=fake_generate, image_fn=image, now=NOW)
        assert outcomes[0].state == CandidateState.PERSISTED
        assert outcomes[0].article.hero_url is None

    def test_disabled_by_default(self, session, release, config) -> None:
        def image(prompt, model):
            raise AssertionError("image generation should not run")

        outcomes = generate_articles(session, 1, config, generate_fn=fake_generate, image_fn=image, now=NOW)
        assert outcomes[0].article.hero_url is None
