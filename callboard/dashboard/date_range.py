"""Date-range filtering and windowed averages for chart series.

A ``DateRange`` is inclusive and always spans whole days: the first day from
00:00:00 and the last day to 23:59:59.999999, in the dashboard timezone.
``None`` means "all time". A range whose start is after its end is valid
and simply matches nothing.
"""

import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import StrEnum
from functools import lru_cache
from zoneinfo import ZoneInfo

from callboard.dashboard.series import ChartSeriesPoint
from callboard.models.common import ensure_utc


class DateRangePreset(StrEnum):
    """Quick picks offered next to the calendar."""

    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    LAST_7_DAYS = "last_7_days"
    THIS_MONTH = "this_month"
    LAST_14_DAYS = "last_14_days"
    LAST_30_DAYS = "last_30_days"


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    @classmethod
    def for_days(cls, first: date, last: date, tz: str = "UTC") -> "DateRange":
        """Span ``first`` 00:00 through ``last`` 23:59:59.999999 in ``tz``."""
        zone = ZoneInfo(tz)
        return cls(
            start=datetime.combine(first, time.min, tzinfo=zone),
            end=datetime.combine(last, time.max, tzinfo=zone),
        )

    @classmethod
    def single_day(cls, day: date, tz: str = "UTC") -> "DateRange":
        return cls.for_days(day, day, tz)

    def contains(self, moment: datetime) -> bool:
        return self.start <= ensure_utc(moment) <= self.end


def _start_of_week(day: date) -> date:
    # Weeks start on Sunday.
    return day - timedelta(days=(day.weekday() + 1) % 7)


def preset_range(preset: DateRangePreset, today: date, tz: str = "UTC") -> DateRange:
    """Resolve a preset relative to ``today``."""
    if preset is DateRangePreset.THIS_WEEK:
        first = _start_of_week(today)
        return DateRange.for_days(first, first + timedelta(days=6), tz)
    if preset is DateRangePreset.LAST_WEEK:
        first = _start_of_week(today - timedelta(days=7))
        return DateRange.for_days(first, first + timedelta(days=6), tz)
    if preset is DateRangePreset.THIS_MONTH:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return DateRange.for_days(today.replace(day=1), today.replace(day=last_day), tz)

    lookback = {
        DateRangePreset.LAST_7_DAYS: 7,
        DateRangePreset.LAST_14_DAYS: 14,
        DateRangePreset.LAST_30_DAYS: 30,
    }[preset]
    return DateRange.for_days(today - timedelta(days=lookback), today, tz)


def filter_points(
    points: tuple[ChartSeriesPoint, ...],
    date_range: DateRange | None,
) -> tuple[ChartSeriesPoint, ...]:
    """Points whose date falls inside the range; everything for ``None``."""
    if date_range is None:
        return tuple(points)
    return tuple(point for point in points if date_range.contains(point.date))


@dataclass(frozen=True)
class SeriesWindow:
    """A filtered series and its mean.

    ``has_data`` separates "no calls in this period" from "calls averaging 0".
    """

    points: tuple[ChartSeriesPoint, ...]
    average: float
    has_data: bool

    @property
    def display_average(self) -> int | None:
        """Average rounded half-up for the "N/100" label, or None when empty."""
        if not self.has_data:
            return None
        return math.floor(self.average + 0.5)


@lru_cache(maxsize=256)
def window_series(
    points: tuple[ChartSeriesPoint, ...],
    date_range: DateRange | None,
) -> SeriesWindow:
    """Filter a series to a range and average it. Memoised on its inputs."""
    selected = filter_points(points, date_range)
    if not selected:
        return SeriesWindow(points=(), average=0.0, has_data=False)
    average = sum(point.value for point in selected) / len(selected)
    return SeriesWindow(points=selected, average=average, has_data=True)
