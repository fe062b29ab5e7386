"""Chart series derivation.

Projects an ascending-by-date snapshot of call records into one
"Average Success" trend (driven by ``overall_effectiveness``) and six
per-category trends. Ordinals are 1-based positions in the ascending order
and are independent of the reverse-chronological card listing.

Absent scores project to 0 so every series has one point per record.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache

from callboard.models.call_log import CallRecord
from callboard.models.common import SCORE_CATEGORIES, ScoreCategory

SUCCESS_SERIES_KEY = "average_success"
SUCCESS_SERIES_LABEL = "Average Success"


@dataclass(frozen=True)
class ChartSeriesPoint:
    """One plotted call."""

    ordinal: int
    date: datetime
    value: float
    record_id: int
    call_number: int


@dataclass(frozen=True)
class SeriesSet:
    """All chart series for one record snapshot."""

    success: tuple[ChartSeriesPoint, ...]
    categories: Mapping[ScoreCategory, tuple[ChartSeriesPoint, ...]]


def project_series(
    records: tuple[CallRecord, ...],
    category: ScoreCategory,
) -> tuple[ChartSeriesPoint, ...]:
    """Series of one category's scores, in the given (ascending) order."""
    points = []
    for position, record in enumerate(records, start=1):
        value = getattr(record.scores, category.value)
        points.append(ChartSeriesPoint(
            ordinal=position,
            date=record.call_date,
            value=value if value is not None else 0.0,
            record_id=record.id,
            call_number=record.call_number,
        ))
    return tuple(points)


@lru_cache(maxsize=32)
def derive_series(records: tuple[CallRecord, ...]) -> SeriesSet:
    """Derive every chart series for a snapshot. Memoised per snapshot."""
    return SeriesSet(
        success=project_series(records, ScoreCategory.OVERALL_EFFECTIVENESS),
        categories={
            category: project_series(records, category)
            for category in SCORE_CATEGORIES
        },
    )
