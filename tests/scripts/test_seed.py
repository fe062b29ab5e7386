"""Seed script tests: demo history shape and idempotency."""

from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from callboard.repositories.call_logs import CallLogRepository
from scripts.seed import DEMO_CALL_COUNT, DEMO_MEMBER_ID, demo_call, seed_demo

NOW = datetime(2026, 4, 1, 12, 0, tzinfo=timezone.utc)


class TestSeedDemo:

    @pytest.mark.anyio
    async def test_creates_history(self, db_session: AsyncSession) -> None:
        result = await seed_demo(db_session, now=NOW)
        assert result == {"created": True, "member_id": DEMO_MEMBER_ID, "call_count": DEMO_CALL_COUNT}

        rows = await CallLogRepository(db_session).list_by_member(DEMO_MEMBER_ID)
        assert len(rows) == DEMO_CALL_COUNT
        assert [row.call_number for row in rows] == list(range(1, DEMO_CALL_COUNT + 1))

    @pytest.mark.anyio
    async def test_idempotent(self, db_session: AsyncSession) -> None:
        first = await seed_demo(db_session, now=NOW)
        second = await seed_demo(db_session, now=NOW)
        assert first["created"] is True
        assert second["created"] is False
        assert second["call_count"] == DEMO_CALL_COUNT

        rows = await CallLogRepository(db_session).list_by_member(DEMO_MEMBER_ID)
        assert len(rows) == DEMO_CALL_COUNT

    @pytest.mark.anyio
    async def test_average_success_stored(self, db_session: AsyncSession) -> None:
        await seed_demo(db_session, now=NOW)
        rows = await CallLogRepository(db_session).list_by_member(DEMO_MEMBER_ID)
        assert all(row.average_success_score is not None for row in rows)


class TestDemoCall:

    def test_dates_ascend(self) -> None:
        dates = [demo_call(index, NOW).call_date for index in range(DEMO_CALL_COUNT)]
        assert dates == sorted(dates)
        assert dates[-1] < NOW

    def test_scores_trend_upward(self) -> None:
        first = demo_call(0, NOW).scores.overall_effectiveness
        last = demo_call(DEMO_CALL_COUNT - 1, NOW).scores.overall_effectiveness
        assert last > first
