"""Reverse-chronological pagination of call record cards.

Cards are listed newest first. The "Call #N" label counts down from the
total number of records and is independent of the persisted ``call_number``,
which counts up per member and keeps gaps after deletes.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_RECORDS_PER_PAGE = 5


@dataclass(frozen=True)
class PageEntry(Generic[T]):
    label: int
    item: T


@dataclass(frozen=True)
class PageWindow(Generic[T]):
    page: int
    per_page: int
    total_pages: int
    total_records: int
    entries: tuple[PageEntry[T], ...]

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def total_pages(total_records: int, per_page: int = DEFAULT_RECORDS_PER_PAGE) -> int:
    """Number of pages; never less than 1 so an empty list still has a page."""
    return max(1, math.ceil(total_records / per_page))


def clamp_page(page: int, pages: int) -> int:
    return max(1, min(page, pages))


def page_numbers(pages: int) -> list[int]:
    """Page buttons to render, 1..pages."""
    return list(range(1, pages + 1))


def paginate(
    items: Sequence[T],
    page: int,
    per_page: int = DEFAULT_RECORDS_PER_PAGE,
) -> PageWindow[T]:
    """Window onto ``items`` (ascending by date) shown newest first.

    Out-of-range pages clamp to the first or last page.
    """
    total = len(items)
    pages = total_pages(total, per_page)
    page = clamp_page(page, pages)
    first = (page - 1) * per_page
    newest_first = list(reversed(items))[first:first + per_page]
    return PageWindow(
        page=page,
        per_page=per_page,
        total_pages=pages,
        total_records=total,
        entries=tuple(
            PageEntry(label=total - (first + offset), item=item)
            for offset, item in enumerate(newest_first)
        ),
    )


def page_for_call_number(
    call_number: int,
    total_records: int,
    per_page: int = DEFAULT_RECORDS_PER_PAGE,
) -> int:
    """Page a chart-point click jumps to: ``ceil(call_number / per_page)``, clamped.

    Counts from the persisted ``call_number``, not from the record's position
    in the newest-first listing, so the card may sit on a different page.
    """
    return clamp_page(math.ceil(call_number / per_page), total_pages(total_records, per_page))
