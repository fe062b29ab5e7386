"""FastAPI call log endpoints.

GET    /api/dashboard?memberId=<id>  — list a member's calls, oldest first
POST   /api/dashboard                — insert one call for a member
PUT    /api/dashboard?id=<callId>    — partial, null-coalescing update
DELETE /api/dashboard?id=<callId>    — delete one call

Errors are ``{"error": "<message>"}``. Store failures are logged with their
cause and reported to the client as a generic 500.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from callboard.api.dependencies import get_call_log_repo
from callboard.models.call_log import CallFields, CallRecord
from callboard.repositories.call_logs import CallLogRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["dashboard"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class CreateCallLogRequest(BaseModel):
    memberId: str | int | None = None
    callData: CallFields | None = None


class UpdateCallLogRequest(CallFields):
    """Any subset of the writable call fields. Absent or null keeps the stored value."""


class DeleteCallLogResponse(BaseModel):
    success: bool


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/dashboard", response_model=list[CallRecord])
async def list_call_logs(
    member_id: str | None = Query(default=None, alias="memberId"),
    repo: CallLogRepository = Depends(get_call_log_repo),
) -> list[CallRecord]:
    """All calls for a member ordered by call date, scores coerced to numbers."""
    if not member_id:
        raise HTTPException(status_code=400, detail="Member ID required")

    try:
        rows = await repo.list_by_member(member_id)
    except SQLAlchemyError:
        logger.exception("Error getting call logs for member %s", member_id)
        raise HTTPException(status_code=500, detail="Failed to get call logs")

    return [CallRecord.from_row(row) for row in rows]


@router.post("/dashboard", response_model=CallRecord)
async def create_call_log(
    body: CreateCallLogRequest | None = None,
    repo: CallLogRepository = Depends(get_call_log_repo),
) -> CallRecord:
    """Insert a call. The store assigns ``id`` and the next ``call_number``."""
    if body is None or not body.memberId or body.callData is None:
        raise HTTPException(status_code=400, detail="Member ID and call data required")

    member_id = str(body.memberId)
    call_data = body.callData
    columns = call_data.to_columns(include_none=True)
    columns["average_success_score"] = call_data.derived_average()

    try:
        row = await repo.create(
            member_id=member_id,
            call_date=call_data.call_date,
            columns=columns,
        )
    except SQLAlchemyError:
        logger.exception("Error adding call log for member %s", member_id)
        raise HTTPException(status_code=500, detail="Failed to add call log")

    logger.info("Added call %s (#%s) for member %s", row.id, row.call_number, row.member_id)
    return CallRecord.from_row(row)


@router.put("/dashboard", response_model=CallRecord)
async def update_call_log(
    call_id: int | None = Query(default=None, alias="id"),
    body: UpdateCallLogRequest | None = None,
    repo: CallLogRepository = Depends(get_call_log_repo),
) -> CallRecord:
    """Merge the given fields into a call; absent or null fields are left alone."""
    if call_id is None:
        raise HTTPException(status_code=400, detail="Call ID required")

    changes = body.to_columns(include_none=False) if body is not None else {}

    try:
        row = await repo.update(call_id, changes)
    except SQLAlchemyError:
        logger.exception("Error updating call log %s", call_id)
        raise HTTPException(status_code=500, detail="Failed to update call log")

    if row is None:
        raise HTTPException(status_code=404, detail="Call log not found")

    return CallRecord.from_row(row)


@router.delete("/dashboard", response_model=DeleteCallLogResponse)
async def delete_call_log(
    call_id: int | None = Query(default=None, alias="id"),
    repo: CallLogRepository = Depends(get_call_log_repo),
) -> DeleteCallLogResponse:
    """Hard-delete a call. Remaining call numbers are not renumbered."""
    if call_id is None:
        raise HTTPException(status_code=400, detail="Call ID required")

    try:
        deleted = await repo.delete(call_id)
    except SQLAlchemyError:
        logger.exception("Error deleting call log %s", call_id)
        raise HTTPException(status_code=500, detail="Failed to delete call log")

    if not deleted:
        raise HTTPException(status_code=404, detail="Call log not found")

    return DeleteCallLogResponse(success=True)
