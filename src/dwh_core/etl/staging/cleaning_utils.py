"""Shared utilities for cleaning bronze records.

This module provides the scalar helpers used by every cleaner for trimming
text, parsing numbers and dates, and moving between DataFrames and plain
record dicts.

Key utilities:
- Missing-value detection across None/NaN/NA/NaT
- Number parsing: lenient int/float coercion that never raises
- Date parsing: ISO strings, timestamps and 8-digit integer dates
- Record conversion: DataFrame rows <-> dicts with ``None`` for nulls

Examples:
    >>> from dwh_core.etl.staging.cleaning_utils import parse_int_date, trim
    >>> trim("  Jon ")
    'Jon'
    >>> parse_int_date(20240101)
    datetime.date(2024, 1, 1)
    >>> parse_int_date(0) is None
    True
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

import numpy as np
import pandas as pd

_INT_DATE_RE = re.compile(r"^\d{8}$")


def is_missing(x: Any) -> bool:
    """Return True for None, NaN, pd.NA and pd.NaT.

    Examples:
        >>> is_missing(float("nan"))
        True
        >>> is_missing("")
        False
    """
    if x is None or x is pd.NA or x is pd.NaT:
        return True
    if isinstance(x, (float, np.floating)):
        return math.isnan(x)
    return False


def trim(x: Any) -> Optional[str]:
    """Strip leading/trailing whitespace; nulls stay null.

    Examples:
        >>> trim("  Maria  ")
        'Maria'
        >>> trim(None) is None
        True
    """
    if is_missing(x):
        return None
    return str(x).strip()


def to_float(x: Any) -> Optional[float]:
    """Parse a number, returning None when the value is missing or not numeric.

    Examples:
        >>> to_float("12.5")
        12.5
        >>> to_float("abc") is None
        True
    """
    if is_missing(x) or isinstance(x, bool):
        return None
    if isinstance(x, (int, float, np.integer, np.floating)):
        v = float(x)
    else:
        s = str(x).strip()
        if not s:
            return None
        try:
            v = float(s)
        except ValueError:
            return None
    if math.isinf(v):
        return None
    return v


def to_int(x: Any) -> Optional[int]:
    """Convert value to integer via float parsing and rounding.

    Args:
        x: Value to convert (string, number, or None).

    Returns:
        Integer value or None if conversion fails.

    Examples:
        >>> to_int("123")
        123
        >>> to_int(7.0)
        7
    """
    f = to_float(x)
    if f is None:
        return None
    return int(round(f))


def to_decimal(x: Any) -> Optional[Decimal]:
    """Parse a number as an exact ``Decimal`` (via its shortest repr).

    Examples:
        >>> to_decimal("0.1")
        Decimal('0.1')
        >>> to_decimal(2.5)
        Decimal('2.5')
    """
    f = to_float(x)
    if f is None:
        return None
    return Decimal(repr(f))


def plain_number(d: Optional[Decimal]) -> Optional[int | Decimal]:
    """Return ``d`` as an ``int`` when it is integral, else unchanged.

    Examples:
        >>> plain_number(Decimal("50.00"))
        50
        >>> plain_number(Decimal("0.28"))
        Decimal('0.28')
    """
    if d is None:
        return None
    if d == d.to_integral_value():
        return int(d)
    return d


def to_date(x: Any) -> Optional[date]:
    """Parse a calendar date from a date, timestamp or ISO-like string.

    Time components are dropped. Unparseable values become None.

    Examples:
        >>> to_date("2023-01-15 10:30:00")
        datetime.date(2023, 1, 15)
        >>> to_date("not a date") is None
        True
    """
    if is_missing(x):
        return None
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    s = str(x).strip()
    if not s:
        return None
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        pass
    # pandas covers the remaining formats but only within its Timestamp range
    ts = pd.to_datetime(s, errors="coerce")
    if pd.isna(ts):
        return None
    return ts.date()


def parse_int_date(x: Any) -> Optional[date]:
    """Parse an integer-encoded ``YYYYMMDD`` date.

    A value is a date only if it is non-zero, has exactly 8 digits and names
    a real calendar day. Anything else becomes None.

    Examples:
        >>> parse_int_date(20101229)
        datetime.date(2010, 12, 29)
        >>> parse_int_date(5489) is None
        True
        >>> parse_int_date(20241399) is None
        True
    """
    n = to_int(x)
    if n is None or n == 0:
        return None
    s = str(n)
    if not _INT_DATE_RE.match(s):
        return None
    try:
        return datetime.strptime(s, "%Y%m%d").date()
    except ValueError:
        return None


# ---------- DataFrame <-> records ----------


def frame_records(df: pd.DataFrame) -> list[dict[str, Any]]:
    """Return the rows of ``df`` as new dicts, with nulls as ``None``.

    Numeric values come back as Python scalars so downstream comparisons do
    not depend on numpy dtypes.
    """
    if df.empty:
        return []
    obj = df.astype(object)
    return obj.where(obj.notna(), None).to_dict("records")


def records_frame(
    rows: Iterable[Mapping[str, Any]],
    columns: list[str],
    int_columns: Iterable[str] = (),
) -> pd.DataFrame:
    """Build a DataFrame with exactly ``columns``, in order.

    Columns listed in ``int_columns`` use pandas' nullable ``Int64`` dtype so
    ids stay integers even when some rows are null.
    """
    df = pd.DataFrame([{c: row.get(c) for c in columns} for row in rows], columns=columns)
    for col in int_columns:
        df[col] = df[col].astype("Int64")
    return df
