"""FastAPI dashboard page endpoint.

GET /dashboard?memberId=<id>&page=&from=&to=&preset=&expanded=

Returns the assembled dashboard (charts, current page of call cards,
pagination) for one member. Deterministic; reads the call log store once.
"""

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError

from callboard.api.dependencies import get_call_log_repo, get_dashboard_service
from callboard.config.settings import Settings, get_settings
from callboard.dashboard.date_range import DateRange, DateRangePreset, preset_range
from callboard.dashboard.service import DashboardService, DashboardView
from callboard.models.call_log import CallRecord
from callboard.repositories.call_logs import CallLogRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard-view"])


def resolve_date_range(
    *,
    preset: DateRangePreset | None,
    date_from: date | None,
    date_to: date | None,
    tz: str,
    today: date | None = None,
) -> DateRange | None:
    """Preset wins over explicit days; no ``from`` means all time."""
    if preset is not None:
        today = today or datetime.now(tz=ZoneInfo(tz)).date()
        return preset_range(preset, today, tz)
    if date_from is None:
        return None
    return DateRange.for_days(date_from, date_to or date_from, tz)


@router.get("/dashboard", response_model=DashboardView)
async def get_dashboard(
    member_id: str | None = Query(default=None, alias="memberId"),
    page: int = Query(default=1),
    date_from: date | None = Query(default=None, alias="from"),
    date_to: date | None = Query(default=None, alias="to"),
    preset: DateRangePreset | None = Query(default=None),
    expanded: list[int] = Query(default=[]),
    repo: CallLogRepository = Depends(get_call_log_repo),
    service: DashboardService = Depends(get_dashboard_service),
    settings: Settings = Depends(get_settings),
) -> DashboardView:
    """Render one member's dashboard."""
    if not member_id:
        raise HTTPException(status_code=400, detail="No member ID provided")

    try:
        rows = await repo.list_by_member(member_id)
    except SQLAlchemyError:
        logger.exception("Error loading dashboard for member %s", member_id)
        raise HTTPException(status_code=500, detail="Failed to load calls")

    records = [CallRecord.from_row(row) for row in rows]
    date_range = resolve_date_range(
        preset=preset,
        date_from=date_from,
        date_to=date_to,
        tz=settings.DASHBOARD_TIMEZONE,
    )
    return service.build_view(
        member_id,
        records,
        page=page,
        date_range=date_range,
        expanded={call_id: True for call_id in expanded},
    )
