"""Partition-style computations over record lists.

Both helpers group records into an explicit ``key -> list`` map and then
scan each group once:

- ``latest_per_key``: keep one record per natural key, the one with the
  greatest ordering value ("most recent wins").
- ``derive_end_dates``: for effective-dated records, set each record's end
  date to the day before the next record's start date within its key.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from datetime import timedelta
from typing import Any


def _rank(value: Any) -> tuple[bool, Any]:
    # Nulls rank below every real value.
    return (value is not None, value)


def latest_per_key(
    records: Iterable[dict[str, Any]],
    key: str,
    order_by: str,
) -> list[dict[str, Any]]:
    """Select one record per ``key``: the one with the maximum ``order_by``.

    Records whose key is None are dropped. When several records share the
    maximum ordering value, the first one in input order is kept, so the
    result is reproducible for identical input.

    Args:
        records: Records to deduplicate.
        key: Name of the grouping field.
        order_by: Name of the ordering field (compared with ``>``).

    Returns:
        One record per distinct non-null key, in order of each key's first
        appearance in the input.

    Examples:
        >>> from datetime import date
        >>> rows = [
        ...     {"id": 1, "d": date(2024, 1, 1)},
        ...     {"id": 1, "d": date(2024, 3, 1)},
        ...     {"id": None, "d": date(2025, 1, 1)},
        ... ]
        >>> latest_per_key(rows, "id", "d")
        [{'id': 1, 'd': datetime.date(2024, 3, 1)}]
    """
    best: dict[Hashable, dict[str, Any]] = {}
    for record in records:
        k = record.get(key)
        if k is None:
            continue
        current = best.get(k)
        if current is None or _rank(record.get(order_by)) > _rank(current.get(order_by)):
            best[k] = record
    return list(best.values())


def derive_end_dates(
    records: Iterable[dict[str, Any]],
    key: str,
    start: str,
    end: str,
) -> list[dict[str, Any]]:
    """Return copies of ``records`` with ``end`` set from the next record's start.

    Within each ``key`` group, records are ordered by ``start`` ascending
    (nulls first, ties kept in input order). Each record's ``end`` becomes the
    next record's ``start`` minus one day; the last record of a group, and any
    record followed by a null start, gets ``None``.

    The output preserves input order.

    Examples:
        >>> from datetime import date
        >>> rows = [
        ...     {"k": "A", "s": date(2012, 7, 1)},
        ...     {"k": "A", "s": date(2011, 7, 1)},
        ... ]
        >>> [r["e"] for r in derive_end_dates(rows, "k", "s", "e")]
        [None, datetime.date(2012, 6, 30)]
    """
    out = [dict(r) for r in records]

    groups: dict[Hashable, list[int]] = {}
    for i, record in enumerate(out):
        groups.setdefault(record.get(key), []).append(i)

    for positions in groups.values():
        ordered = sorted(positions, key=lambda i: _rank(out[i].get(start)))
        for current, following in zip(ordered, ordered[1:] + [None]):
            next_start = out[following].get(start) if following is not None else None
            out[current][end] = next_start - timedelta(days=1) if next_start is not None else None

    return out
