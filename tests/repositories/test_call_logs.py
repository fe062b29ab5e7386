"""Tests for CallLogRepository: list, insert numbering, coalescing update, delete."""

from datetime import datetime, timedelta, timezone

import pytest

from callboard.repositories.call_logs import CallLogRepository

JAN_1 = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def repo(db_session):
    return CallLogRepository(db_session)


class TestInsertNumbering:

    @pytest.mark.anyio
    async def test_first_call_is_number_one(self, repo: CallLogRepository) -> None:
        row = await repo.create(member_id="m1", call_date=JAN_1)
        assert row.call_number == 1
        assert row.id is not None

    @pytest.mark.anyio
    async def test_next_number_is_max_plus_one(self, repo: CallLogRepository) -> None:
        for _ in range(3):
            await repo.create(member_id="m1", call_date=JAN_1)
        row = await repo.create(member_id="m1", call_date=JAN_1)
        assert row.call_number == 4

    @pytest.mark.anyio
    async def test_numbering_is_per_member(self, repo: CallLogRepository) -> None:
        await repo.create(member_id="m1", call_date=JAN_1)
        await repo.create(member_id="m1", call_date=JAN_1)
        row = await repo.create(member_id="m2", call_date=JAN_1)
        assert row.call_number == 1

    @pytest.mark.anyio
    async def test_numbers_not_reused_after_delete(self, repo: CallLogRepository) -> None:
        await repo.create(member_id="m1", call_date=JAN_1)
        second = await repo.create(member_id="m1", call_date=JAN_1)
        third = await repo.create(member_id="m1", call_date=JAN_1)
        await repo.delete(second.id)

        row = await repo.create(member_id="m1", call_date=JAN_1)
        assert row.call_number == third.call_number + 1

    @pytest.mark.anyio
    async def test_newest_number_not_reused_after_delete(self, repo: CallLogRepository) -> None:
        await repo.create(member_id="m1", call_date=JAN_1)
        second = await repo.create(member_id="m1", call_date=JAN_1)
        await repo.delete(second.id)

        row = await repo.create(member_id="m1", call_date=JAN_1)
        assert row.call_number == 3

    @pytest.mark.anyio
    async def test_caller_cannot_choose_identity(self, repo: CallLogRepository) -> None:
        row = await repo.create(
            member_id="m1",
            call_date=JAN_1,
            columns={"id": 999, "call_number": 42, "member_id": "other", "agent_name": "Ava"},
        )
        assert row.id != 999
        assert row.call_number == 1
        assert row.member_id == "m1"
        assert row.agent_name == "Ava"

    @pytest.mark.anyio
    async def test_call_date_defaults_to_now(self, repo: CallLogRepository) -> None:
        row = await repo.create(member_id="m1")
        assert row.call_date is not None


class TestListByMember:

    @pytest.mark.anyio
    async def test_sorted_by_call_date(self, repo: CallLogRepository) -> None:
        await repo.create(member_id="m1", call_date=JAN_1 + timedelta(days=5))
        await repo.create(member_id="m1", call_date=JAN_1)
        await repo.create(member_id="m1", call_date=JAN_1 + timedelta(days=2))

        rows = await repo.list_by_member("m1")
        dates = [row.call_date for row in rows]
        assert dates == sorted(dates)
        assert [row.call_number for row in rows] == [2, 3, 1]

    @pytest.mark.anyio
    async def test_only_member_rows(self, repo: CallLogRepository) -> None:
        await repo.create(member_id="m1", call_date=JAN_1)
        await repo.create(member_id="m2", call_date=JAN_1)
        rows = await repo.list_by_member("m1")
        assert len(rows) == 1
        assert rows[0].member_id == "m1"

    @pytest.mark.anyio
    async def test_unknown_member_is_empty(self, repo: CallLogRepository) -> None:
        assert await repo.list_by_member("nobody") == []


class TestUpdate:

    @pytest.mark.anyio
    async def test_none_keeps_stored_value(self, repo: CallLogRepository) -> None:
        row = await repo.create(
            member_id="m1",
            call_date=JAN_1,
            columns={"engagement_score": 60.0, "call_notes": "first"},
        )
        updated = await repo.update(row.id, {"engagement_score": None, "call_notes": "second"})
        assert updated is not None
        assert updated.engagement_score == 60.0
        assert updated.call_notes == "second"

    @pytest.mark.anyio
    async def test_identity_fields_ignored(self, repo: CallLogRepository) -> None:
        row = await repo.create(member_id="m1", call_date=JAN_1)
        updated = await repo.update(row.id, {"call_number": 50, "member_id": "m2"})
        assert updated.call_number == 1
        assert updated.member_id == "m1"

    @pytest.mark.anyio
    async def test_unknown_id_returns_none(self, repo: CallLogRepository) -> None:
        await repo.create(member_id="m1", call_date=JAN_1, columns={"call_notes": "keep"})
        assert await repo.update(12345, {"call_notes": "changed"}) is None
        rows = await repo.list_by_member("m1")
        assert rows[0].call_notes == "keep"


class TestDelete:

    @pytest.mark.anyio
    async def test_delete_existing(self, repo: CallLogRepository) -> None:
        row = await repo.create(member_id="m1", call_date=JAN_1)
        assert await repo.delete(row.id) is True
        assert await repo.get(row.id) is None

    @pytest.mark.anyio
    async def test_delete_unknown(self, repo: CallLogRepository) -> None:
        assert await repo.delete(12345) is False
