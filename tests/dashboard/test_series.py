"""Tests for chart series derivation."""

from callboard.dashboard.series import derive_series, project_series
from callboard.models.call_log import CategoryScores
from callboard.models.common import SCORE_CATEGORIES, ScoreCategory
from tests.factories import make_record, make_records


class TestDeriveSeries:

    def test_one_point_per_record(self) -> None:
        records = make_records(4)
        series = derive_series(records)
        assert len(series.success) == 4
        for category in SCORE_CATEGORIES:
            assert len(series.categories[category]) == 4

    def test_ordinals_follow_ascending_order(self) -> None:
        records = make_records(3)
        series = derive_series(records)
        assert [p.ordinal for p in series.success] == [1, 2, 3]
        assert [p.date for p in series.success] == [r.call_date for r in records]

    def test_success_uses_overall_effectiveness(self) -> None:
        record = make_record(1, scores=CategoryScores(overall_effectiveness=77, average_success=10))
        series = derive_series((record,))
        assert series.success[0].value == 77.0

    def test_absent_scores_project_to_zero(self) -> None:
        record = make_record(1, scores=CategoryScores(engagement=40))
        series = derive_series((record,))
        assert series.categories[ScoreCategory.ENGAGEMENT][0].value == 40.0
        assert series.categories[ScoreCategory.CLOSING_SKILLS][0].value == 0.0
        assert series.success[0].value == 0.0

    def test_points_link_to_records(self) -> None:
        records = (make_record(7, call_number=3), make_record(9, call_number=4))
        points = project_series(records, ScoreCategory.ENGAGEMENT)
        assert [(p.record_id, p.call_number) for p in points] == [(7, 3), (9, 4)]

    def test_memoised_per_snapshot(self) -> None:
        records = make_records(3)
        assert derive_series(records) is derive_series(tuple(records))

    def test_empty_snapshot(self) -> None:
        series = derive_series(())
        assert series.success == ()
