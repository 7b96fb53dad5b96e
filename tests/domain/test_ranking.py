"""Tests for result ranking."""

from creator_match.domain.ranking import rank_results
from tests.support.results import make_result


class TestRankResults:
    """Threshold, ordering and limit policy."""

    def test_sorts_best_first(self) -> None:
        results = [make_result("a", 0.4), make_result("b", 0.9), make_result("c", 0.6)]

        ranked = rank_results(results)

        assert [r.candidate_id for r in ranked] == ["b", "c", "a"]

    def test_threshold_is_exclusive(self) -> None:
        results = [make_result("at", 0.3), make_result("above", 0.31)]

        ranked = rank_results(results, min_score=0.3)

        assert [r.candidate_id for r in ranked] == ["above"]

    def test_ties_keep_input_order(self) -> None:
        results = [make_result("first", 0.5), make_result("second", 0.5)]

        ranked = rank_results(results)

        assert [r.candidate_id for r in ranked] == ["first", "second"]

    def test_limit_keeps_top_results(self) -> None:
        results = [make_result(f"k{i}", 0.4 + i / 100) for i in range(30)]

        ranked = rank_results(results, limit=20)

        assert len(ranked) == 20
        assert ranked[0].candidate_id == "k29"
        assert ranked[-1].candidate_id == "k10"

    def test_nothing_above_threshold(self) -> None:
        assert rank_results([make_result("a", 0.1)]) == []
