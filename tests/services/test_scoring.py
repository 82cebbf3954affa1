"""Tests for the composite score and Overall sort order."""

import pytest

from ranktable.services.leaderboard.scoring import (
    calc_weighted_score,
    overall_rank,
    overall_value,
    sort_records,
)


class TestCalcWeightedScore:
    """The score divides by six no matter how many metrics are present."""

    def test_missing_metrics_still_divide_by_six(self) -> None:
        record = {"EC": 60, "ED": 30, "QA": None}

        assert calc_weighted_score(record) == pytest.approx(15.0)

    def test_all_metrics_present(self) -> None:
        record = {"EC": 60, "ED": 60, "QA": 60, "MC-4": 60, "ES": 60, "EE": 60}

        assert calc_weighted_score(record) == pytest.approx(60.0)

    def test_alternate_spellings_and_strings(self) -> None:
        record = {"ec": "12", "mc4": 24, "Es": "6", "ee": "n/a"}

        assert calc_weighted_score(record) == pytest.approx(7.0)

    def test_no_metrics_scores_zero(self) -> None:
        assert calc_weighted_score({"team": "x"}) == 0.0


class TestOverallValue:
    @pytest.mark.parametrize(
        ("record", "expected"),
        [
            pytest.param({"Overall": 42}, 42.0, id="exact"),
            pytest.param({"overall_score": "49.64"}, 49.64, id="string"),
            pytest.param({"Score": 7}, 7.0, id="score_alias"),
            pytest.param({"Overall": "n/a"}, None, id="non_numeric"),
            pytest.param({}, None, id="missing"),
        ],
    )
    def test_supplied_overall(self, record: dict, expected: float | None) -> None:
        assert overall_value(record) == expected

    def test_no_fallback_by_default(self) -> None:
        assert overall_value({"EC": 60}) is None

    def test_computed_fallback(self) -> None:
        assert overall_value({"EC": 60}, compute_missing=True) == pytest.approx(10.0)

    def test_computed_fallback_needs_a_metric(self) -> None:
        assert overall_value({"team": "x"}, compute_missing=True) is None

    def test_supplied_overall_wins_over_computed(self) -> None:
        record = {"EC": 60, "Overall": 1}

        assert overall_value(record, compute_missing=True) == 1.0


class TestSortRecords:
    def test_descending_with_missing_last(self) -> None:
        records = [{"Overall": 10}, {"Overall": None}, {"Overall": 50}]

        ordered = sort_records(records)

        assert [r["Overall"] for r in ordered] == [50, 10, None]

    def test_non_numeric_overall_sorts_last(self) -> None:
        records = [{"id": "a", "Overall": "tbd"}, {"id": "b", "Overall": -5}]

        assert [r["id"] for r in sort_records(records)] == ["b", "a"]

    def test_computed_overall_participates_in_sort(self) -> None:
        records = [{"id": "a", "Overall": 5}, {"id": "b", "EC": 60, "ED": 60}]

        ordered = sort_records(records, compute_missing=True)

        assert [r["id"] for r in ordered] == ["b", "a"]

    def test_rank_key_shape(self) -> None:
        assert overall_rank({"Overall": 3}) == (False, -3.0)
        assert overall_rank({}) == (True, 0.0)
