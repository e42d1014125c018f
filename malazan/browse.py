"""Search, filter, group and sort helpers for the faction and timeline browsers."""

import logging
from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

from malazan.models import Faction, TimelineEvent

logger = logging.getLogger(__name__)

R = TypeVar("R")

ALL = "all"
ALL_FACTIONS = "All Factions"
SORT_ORDERS = ("chronological", "book")


def _is_active(value: Any) -> bool:
    return value not in (None, "", ALL)


def matches_search(record: Any, term: str, fields: Sequence[str]) -> bool:
    """Case-insensitive substring match on any of the named fields."""
    if not term:
        return True
    needle = term.lower()
    return any(needle in str(getattr(record, f, "") or "").lower() for f in fields)


def filter_records(
    records: Iterable[R],
    search: str = "",
    fields: Sequence[str] = ("name", "description"),
    **filters: Any,
) -> list[R]:
    """Keep records matching the search term AND every active exact filter.

    A filter value of None, "" or "all" is inactive.
    """
    active = {k: v for k, v in filters.items() if _is_active(v)}
    return [
        r for r in records
        if matches_search(r, search, fields)
        and all(getattr(r, k, None) == v for k, v in active.items())
    ]


def group_by(records: Iterable[R], field: str) -> dict[str, list[R]]:
    """Partition records by a field, labels in first-seen order."""
    groups: dict[str, list[R]] = {}
    for r in records:
        groups.setdefault(getattr(r, field), []).append(r)
    return groups


def unique_values(records: Iterable[Any], field: str) -> list[str]:
    """Sorted distinct values of a field, for building filter choices."""
    return sorted({getattr(r, field) for r in records})


# --- Factions ---


def browse_factions(
    factions: list[Faction],
    search: str = "",
    status: str | None = None,
    type: str | None = None,
    group_by_origin: bool = False,
) -> dict[str, list[Faction]]:
    matched = filter_records(
        factions, search, ("name", "description"), status=status, type=type,
    )
    if not group_by_origin:
        return {ALL_FACTIONS: matched}
    return group_by(matched, "origin")


# --- Timeline ---


def sort_timeline(
    events: Iterable[TimelineEvent],
    order: str = "chronological",
    book_order: Sequence[str] = (),
) -> list[TimelineEvent]:
    """Sort by year, or by publication order of the book and then year.

    Books missing from book_order sort ahead of every listed book.
    """
    if order == "chronological":
        return sorted(events, key=lambda e: e.year)
    if order == "book":
        positions = {book: i for i, book in enumerate(book_order)}
        return sorted(events, key=lambda e: (positions.get(e.book, -1), e.year))
    raise ValueError(f"Unknown sort order: {order} (expected one of {', '.join(SORT_ORDERS)})")


def browse_timeline(
    events: list[TimelineEvent],
    search: str = "",
    book: str | None = None,
    location: str | None = None,
    order: str = "chronological",
    book_order: Sequence[str] = (),
) -> list[TimelineEvent]:
    matched = filter_records(
        events, search, ("title", "description"), book=book, location=location,
    )
    logger.debug("Timeline filter matched %d of %d events", len(matched), len(events))
    return sort_timeline(matched, order, book_order)
