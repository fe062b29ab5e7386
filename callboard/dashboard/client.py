"""HTTP client for the call log API, used by the dashboard session.

Two calls: fetch a member's calls once on load, and save one card's notes.
Failures surface as ``DashboardLoadError`` (whole dashboard) or
``NoteSaveError`` (one card). Nothing is retried automatically.
"""

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from callboard.config.settings import get_settings
from callboard.models.call_log import CallRecord

logger = logging.getLogger(__name__)

DASHBOARD_PATH = "/api/dashboard"

_records_adapter = TypeAdapter(list[CallRecord])


class DashboardClientError(Exception):
    """Base class for dashboard client failures."""


class DashboardLoadError(DashboardClientError):
    """The member's call list could not be fetched or was malformed."""


class NoteSaveError(DashboardClientError):
    """A note save was rejected or never reached the store."""


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP error! status: {response.status_code}"


class DashboardClient:
    """Async client for ``/api/dashboard``.

    Pass ``transport`` (e.g. ``httpx.ASGITransport``) to talk to an
    in-process app; otherwise requests go to ``base_url``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout or settings.REQUEST_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "DashboardClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def list_calls(self, member_id: str) -> list[CallRecord]:
        """All calls for a member, oldest first."""
        try:
            response = await self._http.get(DASHBOARD_PATH, params={"memberId": member_id})
        except httpx.HTTPError as exc:
            logger.error("Fetching calls for member %s failed: %s", member_id, exc)
            raise DashboardLoadError("Failed to load calls") from exc

        if response.is_error:
            message = _error_message(response)
            logger.error("API error fetching calls for member %s: %s", member_id, message)
            raise DashboardLoadError(message)

        try:
            records = _records_adapter.validate_json(response.content)
        except ValidationError as exc:
            logger.error("Invalid data format for member %s: %s", member_id, exc)
            raise DashboardLoadError("Invalid data format received from server") from exc

        logger.info("Received %d calls for member %s", len(records), member_id)
        return records

    async def update_notes(self, call_id: int, notes: str) -> CallRecord:
        """Partial update of exactly ``call_notes`` for one call."""
        try:
            response = await self._http.put(
                DASHBOARD_PATH,
                params={"id": call_id},
                json={"call_notes": notes},
            )
        except httpx.HTTPError as exc:
            raise NoteSaveError("Failed to save notes") from exc

        if response.is_error:
            raise NoteSaveError(_error_message(response))

        try:
            return CallRecord.model_validate_json(response.content)
        except ValidationError as exc:
            raise NoteSaveError("Invalid data format received from server") from exc
