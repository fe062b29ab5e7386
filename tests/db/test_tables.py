"""Tests for the SQLAlchemy ORM model: callboard/db/tables.py.

Tests verify:
- call_logs is created with per-category score/feedback/description columns
- (member_id, call_number) is unique
- Naive timestamps read back from SQLite are treated as UTC by CallRecord
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from callboard.db.tables import CallLogRow
from callboard.models.call_log import CallRecord
from callboard.models.common import SCORE_CATEGORIES, utc_now


class TestCallLogsTable:

    @pytest.mark.anyio
    async def test_table_created(self, db_engine) -> None:
        async with db_engine.connect() as conn:
            tables = await conn.run_sync(lambda c: inspect(c).get_table_names())
        assert "call_logs" in tables
        assert "member_call_counters" in tables

    @pytest.mark.anyio
    async def test_category_columns(self, db_engine) -> None:
        async with db_engine.connect() as conn:
            columns = await conn.run_sync(
                lambda c: {col["name"] for col in inspect(c).get_columns("call_logs")}
            )
        for category in SCORE_CATEGORIES:
            assert f"{category.value}_score" in columns
            assert f"{category.value}_feedback" in columns
            assert f"{category.value}_description" in columns
        assert "average_success_score" in columns
        assert "overall_performance_score" in columns

    @pytest.mark.anyio
    async def test_member_call_number_unique(self, db_session: AsyncSession) -> None:
        now = utc_now()
        db_session.add(CallLogRow(member_id="m1", call_number=1, call_date=now))
        await db_session.flush()
        with pytest.raises(IntegrityError):
            async with db_session.begin_nested():
                db_session.add(CallLogRow(member_id="m1", call_number=1, call_date=now))

    @pytest.mark.anyio
    async def test_same_call_number_other_member(self, db_session: AsyncSession) -> None:
        now = utc_now()
        db_session.add(CallLogRow(member_id="m1", call_number=1, call_date=now))
        db_session.add(CallLogRow(member_id="m2", call_number=1, call_date=now))
        await db_session.flush()

    @pytest.mark.anyio
    async def test_row_round_trips_to_utc_record(self, db_session: AsyncSession) -> None:
        row = CallLogRow(member_id="m1", call_number=1, call_date=utc_now(), engagement_score=72.5)
        db_session.add(row)
        await db_session.flush()
        await db_session.refresh(row)

        record = CallRecord.from_row(row)
        assert record.call_date.tzinfo is not None
        assert record.scores.engagement == 72.5
        assert record.scores.closing_skills is None
