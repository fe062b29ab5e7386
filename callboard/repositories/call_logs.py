"""Call log repository — the four store operations behind /api/dashboard.

Repos take AsyncSession, call add()/flush()/refresh() only, never commit().
The session dependency handles commit/rollback (Unit-of-Work).
"""

from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from callboard.db.tables import CallLogRow, MemberCallCounterRow
from callboard.models.common import utc_now


class CallLogRepository:
    """DB-backed store for per-member call evaluations."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_by_member(self, member_id: str) -> list[CallLogRow]:
        """All calls for a member, oldest first."""
        result = await self._session.execute(
            select(CallLogRow)
            .where(CallLogRow.member_id == member_id)
            .order_by(CallLogRow.call_date.asc(), CallLogRow.call_number.asc())
        )
        return list(result.scalars().all())

    async def next_call_number(self, member_id: str) -> int:
        """1 + the highest call number ever issued to the member (1 for a new member).

        Rows inserted without going through the counter are still respected.
        """
        result = await self._session.execute(
            select(func.coalesce(func.max(CallLogRow.call_number), 0))
            .where(CallLogRow.member_id == member_id)
        )
        highest = int(result.scalar_one())
        counter = await self._session.get(MemberCallCounterRow, member_id)
        if counter is not None:
            highest = max(highest, counter.last_call_number)
        return highest + 1

    async def _issue_call_number(self, member_id: str) -> int:
        number = await self.next_call_number(member_id)
        counter = await self._session.get(MemberCallCounterRow, member_id)
        if counter is None:
            self._session.add(MemberCallCounterRow(member_id=member_id, last_call_number=number))
        else:
            counter.last_call_number = number
        return number

    async def create(
        self,
        *,
        member_id: str,
        call_date: datetime | None = None,
        columns: dict[str, Any] | None = None,
    ) -> CallLogRow:
        """Insert one call. ``id`` and ``call_number`` are always store-assigned."""
        values = {
            name: value
            for name, value in (columns or {}).items()
            if name not in ("id", "member_id", "call_number", "call_date")
        }
        row = CallLogRow(
            member_id=member_id,
            call_number=await self._issue_call_number(member_id),
            call_date=call_date or utc_now(),
            **values,
        )
        self._session.add(row)
        await self._session.flush()
        await self._session.refresh(row)
        return row

    async def get(self, call_id: int) -> CallLogRow | None:
        return await self._session.get(CallLogRow, call_id)

    async def update(self, call_id: int, changes: dict[str, Any]) -> CallLogRow | None:
        """Null-coalescing merge: a ``None`` value keeps the stored value.

        Returns ``None`` when no call has this id; nothing is written then.
        """
        row = await self.get(call_id)
        if row is None:
            return None
        for name, value in changes.items():
            if value is None or name in ("id", "member_id", "call_number"):
                continue
            setattr(row, name, value)
        await self._session.flush()
        await self._session.refresh(row)
        return row

    async def delete(self, call_id: int) -> bool:
        """Hard-delete one call. Returns False when no call has this id."""
        row = await self.get(call_id)
        if row is None:
            return False
        await self._session.delete(row)
        await self._session.flush()
        return True
