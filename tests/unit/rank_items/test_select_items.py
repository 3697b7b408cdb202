"""Tests for rank_items.select_items module."""

from rank_items.models import RankedItem
from rank_items.select_items import extract_topic_keywords, select_best_candidate, select_top_candidates


def _ranked(item_id: int, title: str, score: float = 0.9, payload: dict | None = None) -> RankedItem:
    return RankedItem(
        id=item_id,
        source_id=1,
        title=title,
        url=f"https://example.com/{item_id}",
        published_at=None,
        payload=payload or {},
        score=score,
    )


class TestExtractTopicKeywords:
    def test_frameworks_version_and_release_type(self) -> None:
        item = _ranked(1, "React 19.0.0 security update")
        assert extract_topic_keywords(item) == {"react", "19.0.0", "security", "update"}

    def test_payload_text_included(self) -> None:
        item = _ranked(1, "Weekly notes", payload={"body": "Changes for vue users"})
        assert "vue" in extract_topic_keywords(item)


class TestSelectTopCandidates:
    def test_prefers_items_without_topic_overlap(self) -> None:
        react_a = _ranked(1, "React 19.0.0 update", 0.9)
        react_b = _ranked(2, "React 19.1.0 update", 0.8)
        vue = _ranked(3, "Vue 3.5.0 arrives", 0.7)
        assert [i.id for i in select_top_candidates([react_a, react_b, vue], 2)] == [1, 3]

    def test_falls_back_to_rank_order(self) -> None:
        react_a = _ranked(1, "React 19.0.0 update", 0.9)
        react_b = _ranked(2, "React 19.1.0 update", 0.8)
        vue = _ranked(3, "Vue 3.5.0 arrives", 0.7)
        assert [i.id for i in select_top_candidates([react_a, react_b, vue], 3)] == [1, 3, 2]

    def test_exact_title_duplicates_never_selected(self) -> None:
        first = _ranked(1, "Vite 6 Is Out", 0.9)
        dup = _ranked(2, "vite 6 is out ", 0.8)
        assert [i.id for i in select_top_candidates([first, dup], 2)] == [1]

    def test_count_bounds(self) -> None:
        items = [_ranked(i, f"Item {i}") for i in range(5)]
        assert select_top_candidates(items, 0) == []
        assert select_top_candidates([], 3) == []
        assert len(select_top_candidates(items, 3)) == 3


class TestSelectBestCandidate:
    def test_first_or_none(self) -> None:
        items = [_ranked(1, "A"), _ranked(2, "B")]
        assert select_best_candidate(items).id == 1
        assert select_best_candidate([]) is None
