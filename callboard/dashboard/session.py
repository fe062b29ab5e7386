"""Interactive dashboard session for one member.

Holds the fetched record snapshot and the session-local view state:

- current page and date range
- expanded cards, note drafts, "saved" flags and save errors, each a dict
  keyed by record id so state follows the record across pages

Only note saves talk back to the store. A successful save folds the draft
into the snapshot and raises a "saved" flag that clears itself after a short
delay. A failed save leaves the draft untouched so the user can retry.
Concurrent saves of the same card are last-writer-wins.
"""

import asyncio
import logging

from callboard.config.settings import get_settings
from callboard.dashboard.client import DashboardClient, DashboardLoadError, NoteSaveError
from callboard.dashboard.date_range import DateRange
from callboard.dashboard.pagination import clamp_page, page_for_call_number, total_pages
from callboard.dashboard.series import ChartSeriesPoint
from callboard.dashboard.service import DashboardService, DashboardView
from callboard.models.call_log import CallRecord

logger = logging.getLogger(__name__)

NO_MEMBER_ID_MESSAGE = "No member ID provided"


class DashboardSession:
    """Client-side state for one member's dashboard."""

    def __init__(
        self,
        member_id: str | None,
        client: DashboardClient,
        *,
        records_per_page: int | None = None,
        saved_reset_seconds: float | None = None,
    ) -> None:
        settings = get_settings()
        self.member_id = member_id
        self._client = client
        self._service = DashboardService(records_per_page or settings.RECORDS_PER_PAGE)
        self._saved_reset_seconds = (
            settings.NOTE_SAVED_RESET_SECONDS
            if saved_reset_seconds is None else saved_reset_seconds
        )

        self.records: tuple[CallRecord, ...] = ()
        self.error: str | None = None
        self.is_loading = False
        self.current_page = 1
        self.date_range: DateRange | None = None

        self.expanded: dict[int, bool] = {}
        self.drafts: dict[int, str] = {}
        self.saved: dict[int, bool] = {}
        self.save_errors: dict[int, str] = {}
        self._saved_timers: dict[int, asyncio.TimerHandle] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Fetch the member's calls once. Failures put the dashboard in an error state."""
        if not self.member_id:
            self.error = NO_MEMBER_ID_MESSAGE
            return

        self.is_loading = True
        try:
            records = await self._client.list_calls(self.member_id)
        except DashboardLoadError as exc:
            self.error = str(exc)
            return
        finally:
            self.is_loading = False

        self.records = tuple(records)
        self.error = None

    def _record(self, call_id: int) -> CallRecord | None:
        for record in self.records:
            if record.id == call_id:
                return record
        return None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def total_pages(self) -> int:
        return total_pages(len(self.records), self._service.records_per_page)

    def go_to_page(self, page: int) -> int:
        self.current_page = clamp_page(page, self.total_pages)
        return self.current_page

    def next_page(self) -> int:
        return self.go_to_page(self.current_page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.current_page - 1)

    def set_date_range(self, date_range: DateRange | None) -> None:
        self.date_range = date_range

    def focus_point(self, point: ChartSeriesPoint) -> int:
        """Chart-point click: jump to the call number's page and expand its card."""
        page = self.go_to_page(page_for_call_number(
            point.call_number, len(self.records), self._service.records_per_page,
        ))
        self.expanded[point.record_id] = True
        return page

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    def toggle_expanded(self, call_id: int) -> bool:
        self.expanded[call_id] = not self.expanded.get(call_id, False)
        return self.expanded[call_id]

    def set_draft(self, call_id: int, notes: str) -> None:
        self.drafts[call_id] = notes

    def note_value(self, call_id: int) -> str:
        """Draft if one exists, else the last saved notes."""
        if call_id in self.drafts:
            return self.drafts[call_id]
        record = self._record(call_id)
        if record is None or record.call_notes is None:
            return ""
        return record.call_notes

    async def save_notes(self, call_id: int) -> bool:
        """Persist the card's notes. Returns True on success."""
        notes = self.note_value(call_id)
        try:
            await self._client.update_notes(call_id, notes)
        except NoteSaveError as exc:
            logger.error("Error saving notes for call %s: %s", call_id, exc)
            self.save_errors[call_id] = str(exc)
            return False

        self.records = tuple(
            record.model_copy(update={"call_notes": notes}) if record.id == call_id else record
            for record in self.records
        )
        self.save_errors.pop(call_id, None)
        self._mark_saved(call_id)
        return True

    def _mark_saved(self, call_id: int) -> None:
        previous = self._saved_timers.pop(call_id, None)
        if previous is not None:
            previous.cancel()
        self.saved[call_id] = True
        loop = asyncio.get_running_loop()
        self._saved_timers[call_id] = loop.call_later(
            self._saved_reset_seconds, self._clear_saved, call_id,
        )

    def _clear_saved(self, call_id: int) -> None:
        self._saved_timers.pop(call_id, None)
        self.saved[call_id] = False

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def view(self) -> DashboardView:
        return self._service.build_view(
            self.member_id or "",
            self.records,
            page=self.current_page,
            date_range=self.date_range,
            expanded=self.expanded,
            drafts=self.drafts,
            saved=self.saved,
            save_errors=self.save_errors,
        )
