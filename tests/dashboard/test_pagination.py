"""Tests for newest-first pagination and chart-point page lookup."""

import pytest

from callboard.dashboard.pagination import (
    clamp_page,
    page_for_call_number,
    page_numbers,
    paginate,
    total_pages,
)

ITEMS = [f"call-{n}" for n in range(1, 13)]  # ascending, 12 records


class TestTotalPages:

    @pytest.mark.parametrize("count, pages", [(0, 1), (1, 1), (5, 1), (6, 2), (12, 3), (15, 3)])
    def test_counts(self, count, pages) -> None:
        assert total_pages(count, 5) == pages

    def test_page_numbers(self) -> None:
        assert page_numbers(3) == [1, 2, 3]

    @pytest.mark.parametrize("page, expected", [(-3, 1), (0, 1), (2, 2), (7, 3)])
    def test_clamp(self, page, expected) -> None:
        assert clamp_page(page, 3) == expected


class TestPaginate:

    def test_first_page_newest_first(self) -> None:
        window = paginate(ITEMS, 1, 5)
        assert [e.label for e in window.entries] == [12, 11, 10, 9, 8]
        assert [e.item for e in window.entries] == [
            "call-12", "call-11", "call-10", "call-9", "call-8",
        ]
        assert window.has_previous is False
        assert window.has_next is True

    def test_last_page_partial(self) -> None:
        window = paginate(ITEMS, 3, 5)
        assert [e.label for e in window.entries] == [2, 1]
        assert window.has_next is False

    def test_out_of_range_clamps(self) -> None:
        assert paginate(ITEMS, 99, 5).page == 3
        assert paginate(ITEMS, 0, 5).page == 1

    def test_pages_cover_every_record_once(self) -> None:
        seen = []
        for page in range(1, total_pages(len(ITEMS), 5) + 1):
            seen.extend(e.item for e in paginate(ITEMS, page, 5).entries)
        assert sorted(seen) == sorted(ITEMS)
        assert len(seen) == len(ITEMS)

    def test_empty(self) -> None:
        window = paginate([], 1, 5)
        assert window.entries == ()
        assert window.total_pages == 1


class TestPageForCallNumber:

    @pytest.mark.parametrize("call_number, page", [(1, 1), (5, 1), (6, 2), (10, 2), (11, 3), (12, 3)])
    def test_ceil_of_call_number(self, call_number, page) -> None:
        assert page_for_call_number(call_number, 12, 5) == page

    def test_clamped_to_existing_pages(self) -> None:
        # Gaps left by deletes can push call numbers past the last page.
        assert page_for_call_number(40, 12, 5) == 3
        assert page_for_call_number(0, 12, 5) == 1
