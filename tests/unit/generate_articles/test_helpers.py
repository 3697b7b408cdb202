"""Tests for generate_articles.helpers module."""

from datetime import datetime
from types import SimpleNamespace

from generate_articles.helpers import build_outcome_record, parse_generate_articles_args
from generate_articles.models import CandidateOutcome, CandidateState


class TestParseGenerateArticlesArgs:
    def test_defaults(self) -> None:
        args = parse_generate_articles_args([])
        assert args.count is None
        assert args.model is None
        assert args.load_local is False

    def test_overrides(self) -> None:
        args = parse_generate_articles_args(["--count", "2", "--model", "gpt-4o", "--load-local"])
        assert args.count == 2
        assert args.model == "gpt-4o"
        assert args.load_local is True


class TestBuildOutcomeRecord:
    def test_rejected_outcome_has_no_article(self) -> None:
        outcome = CandidateOutcome(
            item_id=5, title="Vue 3.5", state=CandidateState.REJECTED, issues=["Headline too short (minimum 10 characters)"]
        )
        record = build_outcome_record(outcome)
        assert record == {
            "item_id": 5,
            "title": "Vue 3.5",
            "state": "rejected",
            "issues": ["Headline too short (minimum 10 characters)"],
            "error": None,
        }

    def test_persisted_outcome_includes_article(self) -> None:
        article = SimpleNamespace(
            id=1, slug="vue-3-5", title="Vue 3.5", review_status="auto", published_at=datetime(2024, 9, 1)
        )
        outcome = CandidateOutcome(item_id=5, title="Vue 3.5", state=CandidateState.PERSISTED, article=article)

        record = build_outcome_record(outcome)

        assert record["article"]["slug"] == "vue-3-5"
        assert record["article"]["published_at"] == "2024-09-01T00:00:00+00:00"
