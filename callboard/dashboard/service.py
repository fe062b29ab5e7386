"""Dashboard view assembly.

Builds the complete dashboard for one member from an ascending-by-date
snapshot of call records plus the caller's view state (page, date range,
expanded cards, note drafts, saved flags):

- Average Success chart + six category charts, each windowed to the date
  range with its average and colour tier
- The current page of record cards, newest first
- Pagination metadata

Pure and deterministic. Series and windows are memoised on the snapshot.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime

from pydantic import Field

from callboard.dashboard.colors import ScoreTier, classify_score, score_color
from callboard.dashboard.date_range import DateRange, SeriesWindow, window_series
from callboard.dashboard.pagination import (
    DEFAULT_RECORDS_PER_PAGE,
    PageWindow,
    page_numbers,
    paginate,
)
from callboard.dashboard.series import (
    SUCCESS_SERIES_KEY,
    SUCCESS_SERIES_LABEL,
    ChartSeriesPoint,
    derive_series,
)
from callboard.dashboard.transcript import TranscriptTurn, parse_transcript
from callboard.models.call_log import CallRecord
from callboard.models.common import (
    CATEGORY_DESCRIPTIONS,
    CATEGORY_LABELS,
    SCORE_CATEGORIES,
    CallboardBase,
)

NO_DATA_MESSAGE = "No data for selected time period"
NO_CALLS_MESSAGE = "No call data found"
NO_POWER_MOMENT_MESSAGE = "No power moment recorded"
NO_DETAILS_MESSAGE = "No detailed analysis available"
NO_PLAN_MESSAGE = "No Plan"


# ---------------------------------------------------------------------------
# View models
# ---------------------------------------------------------------------------


class ChartView(CallboardBase):
    key: str
    label: str
    description: str | None = None
    points: list[ChartSeriesPoint]
    average: float
    display_average: int | None
    has_data: bool
    tier: ScoreTier
    color: str
    empty_message: str | None = None


class ScoreView(CallboardBase):
    key: str
    label: str
    score: float | None
    display: str
    tier: ScoreTier
    color: str
    feedback: str | None = None


class CallCardView(CallboardBase):
    id: int
    call_number: int
    label: int
    title: str
    call_date: datetime
    agent_name: str | None
    agent_picture_url: str | None
    call_duration: float | None
    scores: list[ScoreView]
    overall: ScoreView
    power_moment: str
    details: str
    level_up: list[str]
    level_up_message: str | None
    strong_points: str | None
    areas_for_improvement: str | None
    recording_url: str | None
    transcript: list[TranscriptTurn]
    notes: str
    expanded: bool
    saved: bool
    save_error: str | None = None


class PaginationView(CallboardBase):
    page: int
    per_page: int
    total_pages: int
    total_records: int
    pages: list[int]
    has_previous: bool
    has_next: bool


class DateRangeView(CallboardBase):
    start: datetime
    end: datetime


class DashboardView(CallboardBase):
    member_id: str
    empty: bool
    message: str | None = None
    date_range: DateRangeView | None = None
    charts: list[ChartView] = Field(default_factory=list)
    records: list[CallCardView] = Field(default_factory=list)
    pagination: PaginationView


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _format_score(score: float | None) -> str:
    if score is None:
        return "N/A"
    if float(score).is_integer():
        return f"{int(score)}/100"
    return f"{score:g}/100"


def _chart_view(
    *,
    key: str,
    label: str,
    description: str | None,
    window: SeriesWindow,
) -> ChartView:
    return ChartView(
        key=key,
        label=label,
        description=description,
        points=list(window.points),
        average=window.average,
        display_average=window.display_average,
        has_data=window.has_data,
        tier=classify_score(window.average),
        color=score_color(window.average),
        empty_message=None if window.has_data else NO_DATA_MESSAGE,
    )


def _pagination_view(window: PageWindow) -> PaginationView:
    return PaginationView(
        page=window.page,
        per_page=window.per_page,
        total_pages=window.total_pages,
        total_records=window.total_records,
        pages=page_numbers(window.total_pages),
        has_previous=window.has_previous,
        has_next=window.has_next,
    )


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class DashboardService:
    """Assemble dashboard views from a record snapshot."""

    def __init__(self, records_per_page: int = DEFAULT_RECORDS_PER_PAGE) -> None:
        self._per_page = records_per_page

    @property
    def records_per_page(self) -> int:
        return self._per_page

    def build_charts(
        self,
        records: Sequence[CallRecord],
        date_range: DateRange | None = None,
    ) -> list[ChartView]:
        """Average Success chart followed by the six category charts."""
        series = derive_series(tuple(records))
        charts = [
            _chart_view(
                key=SUCCESS_SERIES_KEY,
                label=SUCCESS_SERIES_LABEL,
                description=None,
                window=window_series(series.success, date_range),
            ),
        ]
        for category in SCORE_CATEGORIES:
            charts.append(_chart_view(
                key=category.value,
                label=CATEGORY_LABELS[category],
                description=CATEGORY_DESCRIPTIONS[category],
                window=window_series(series.categories[category], date_range),
            ))
        return charts

    def category_feedback(self, record: CallRecord) -> dict[str, str]:
        """Feedback per category, falling back to descriptions then defaults."""
        result = {}
        for category in SCORE_CATEGORIES:
            result[category.value] = (
                getattr(record.feedback, category.value)
                or getattr(record.descriptions, category.value)
                or CATEGORY_DESCRIPTIONS[category]
            )
        return result

    def build_card(
        self,
        record: CallRecord,
        *,
        label: int,
        expanded: bool = False,
        draft: str | None = None,
        saved: bool = False,
        save_error: str | None = None,
    ) -> CallCardView:
        feedback = self.category_feedback(record)
        scores = [
            ScoreView(
                key=category.value,
                label=CATEGORY_LABELS[category],
                score=getattr(record.scores, category.value),
                display=_format_score(getattr(record.scores, category.value)),
                tier=classify_score(getattr(record.scores, category.value)),
                color=score_color(getattr(record.scores, category.value)),
                feedback=feedback[category.value],
            )
            for category in SCORE_CATEGORIES
        ]
        average = record.scores.average_success
        level_up = [
            step for step in (record.level_up_1, record.level_up_2, record.level_up_3) if step
        ]
        return CallCardView(
            id=record.id,
            call_number=record.call_number,
            label=label,
            title=f"Call #{label}",
            call_date=record.call_date,
            agent_name=record.agent_name,
            agent_picture_url=record.agent_picture_url,
            call_duration=record.call_duration,
            scores=scores,
            overall=ScoreView(
                key="average_success",
                label="Overall Score",
                score=average,
                display=_format_score(average),
                tier=classify_score(average),
                color=score_color(average),
            ),
            power_moment=record.power_moment or NO_POWER_MOMENT_MESSAGE,
            details=record.call_details or NO_DETAILS_MESSAGE,
            level_up=level_up,
            level_up_message=None if level_up else NO_PLAN_MESSAGE,
            strong_points=record.strong_points,
            areas_for_improvement=record.areas_for_improvement,
            recording_url=record.call_recording_url,
            transcript=parse_transcript(
                record.call_transcript,
                agent_name=record.agent_name,
                agent_picture_url=record.agent_picture_url,
                user_name=record.user_name,
                user_picture_url=record.user_picture_url,
            ),
            notes=draft if draft is not None else (record.call_notes or ""),
            expanded=expanded,
            saved=saved,
            save_error=save_error,
        )

    def build_view(
        self,
        member_id: str,
        records: Sequence[CallRecord],
        *,
        page: int = 1,
        date_range: DateRange | None = None,
        expanded: Mapping[int, bool] | None = None,
        drafts: Mapping[int, str] | None = None,
        saved: Mapping[int, bool] | None = None,
        save_errors: Mapping[int, str] | None = None,
    ) -> DashboardView:
        """Assemble the full dashboard for one member."""
        expanded = expanded or {}
        drafts = drafts or {}
        saved = saved or {}
        save_errors = save_errors or {}

        window = paginate(records, page, self._per_page)
        pagination = _pagination_view(window)
        range_view = (
            DateRangeView(start=date_range.start, end=date_range.end)
            if date_range is not None else None
        )

        if not records:
            return DashboardView(
                member_id=member_id,
                empty=True,
                message=NO_CALLS_MESSAGE,
                date_range=range_view,
                pagination=pagination,
            )

        cards = [
            self.build_card(
                entry.item,
                label=entry.label,
                expanded=expanded.get(entry.item.id, False),
                draft=drafts.get(entry.item.id),
                saved=saved.get(entry.item.id, False),
                save_error=save_errors.get(entry.item.id),
            )
            for entry in window.entries
        ]
        return DashboardView(
            member_id=member_id,
            empty=False,
            date_range=range_view,
            charts=self.build_charts(records, date_range),
            records=cards,
            pagination=pagination,
        )
