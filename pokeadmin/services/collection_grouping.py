"""
Collection grouping and natural card-number ordering.

Turns the flat list of collected cards returned by the backend into
display-ready sets. Pure and synchronous: every call builds a fresh
structure from its input and never raises on malformed records.
"""

import re
from collections.abc import Iterable
from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Any

from pokeadmin.models.collection import (
    CollectedCardRecord,
    CollectionSummary,
    DisplayCard,
    DisplaySet,
)

_SEGMENT_PATTERN = re.compile(r"\D+|\d+")


def split_segments(value: str | None) -> list[str]:
    """Split a card number into alternating digit and non-digit runs."""
    if not value:
        return []
    return _SEGMENT_PATTERN.findall(str(value))


def _compare_digits(a: str, b: str) -> int:
    a_stripped, b_stripped = a.lstrip("0"), b.lstrip("0")
    if len(a_stripped) != len(b_stripped):
        return -1 if len(a_stripped) < len(b_stripped) else 1
    if a_stripped == b_stripped:
        return 0
    return -1 if a_stripped < b_stripped else 1


def _compare_text(a: str, b: str) -> int:
    a_folded, b_folded = a.casefold(), b.casefold()
    if a_folded == b_folded:
        return 0
    return -1 if a_folded < b_folded else 1


def natural_compare(a: str | None, b: str | None) -> int:
    """
    Compare two printed card numbers in natural order.

    Digit runs compare by numeric value without int conversion, so runs of
    any length are safe. Everything else compares case-insensitively.
    The first differing segment decides; a prefix sorts first.

    >>> sorted(["10", "2", "1a", "1"], key=natural_sort_key)
    ['1', '1a', '2', '10']
    """
    a_parts = split_segments(a)
    b_parts = split_segments(b)

    for a_part, b_part in zip(a_parts, b_parts, strict=False):
        if a_part.isdecimal() and b_part.isdecimal():
            result = _compare_digits(a_part, b_part)
        else:
            result = _compare_text(a_part, b_part)
        if result:
            return result

    return (len(a_parts) > len(b_parts)) - (len(a_parts) < len(b_parts))


natural_sort_key = cmp_to_key(natural_compare)


def parse_release_date(value: str | None) -> datetime | None:
    """
    Parse a set release date.

    Accepts ISO dates and the `YYYY/MM/DD` form used by the public API.
    Returns None for missing or unparseable values, which sort as undated.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("/", "-"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def compare_sets(a: DisplaySet, b: DisplaySet) -> int:
    """
    Order sets newest first, undated last, then by name.

    A dated set always precedes an undated one; two undated sets, or two
    sets released the same day, fall back to name order.
    """
    a_date = parse_release_date(a.release_date)
    b_date = parse_release_date(b.release_date)

    if a_date and b_date:
        if a_date != b_date:
            return -1 if a_date > b_date else 1
    elif a_date:
        return -1
    elif b_date:
        return 1

    return _compare_text(a.name, b.name)


def _card_key(card: DisplayCard) -> Any:
    return natural_sort_key(card.number)


def group_collection(records: Iterable[CollectedCardRecord]) -> list[DisplaySet]:
    """
    Group collected cards by set.

    Args:
        records: Flat collection records, at most one per card within a set

    Returns:
        Sets ordered by release date then name, each with its cards in
        natural card-number order
    """
    grouped: dict[str, DisplaySet] = {}

    for record in records:
        display_set = grouped.get(record.set.id)
        if display_set is None:
            display_set = DisplaySet.from_set_info(record.set)
            grouped[record.set.id] = display_set
        display_set.add(record)

    sets = sorted(grouped.values(), key=cmp_to_key(compare_sets))
    for display_set in sets:
        display_set.cards.sort(key=_card_key)
    return sets


def parse_records(raw: Any) -> list[CollectedCardRecord]:
    """
    Build records from the `data` array of a backend collection response.

    Entries that are not JSON objects are skipped.
    """
    if not isinstance(raw, list):
        return []
    return [CollectedCardRecord.from_dict(item) for item in raw if isinstance(item, dict)]


def summarize_collection(response: Any) -> CollectionSummary:
    """
    Group a raw backend collection response.

    An absent, null or empty `data` field yields an empty summary.
    """
    raw = response.get("data") if isinstance(response, dict) else None
    return CollectionSummary(sets=group_collection(parse_records(raw)))
