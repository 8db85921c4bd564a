"""Tests for scalar cleaning helpers."""

from datetime import date, datetime
from decimal import Decimal

import numpy as np
import pandas as pd
import pytest

from dwh_core.etl.staging.cleaning_utils import (
    frame_records,
    is_missing,
    parse_int_date,
    plain_number,
    records_frame,
    to_date,
    to_decimal,
    to_int,
    trim,
)


class TestParseIntDate:
    """Integer dates are valid only when non-zero, 8 digits and a real day."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (20240101, date(2024, 1, 1)),
            ("20101229", date(2010, 12, 29)),
            (20240110.0, date(2024, 1, 10)),
            (np.int64(20230615), date(2023, 6, 15)),
        ],
    )
    def test_valid(self, raw: object, expected: date) -> None:
        assert parse_int_date(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [0, None, float("nan"), 5489, 320101229, -2024010, 20241399, 20230230, "abc", ""],
    )
    def test_invalid_becomes_none(self, raw: object) -> None:
        assert parse_int_date(raw) is None


class TestNumbers:
    def test_to_int(self) -> None:
        assert to_int("12") == 12
        assert to_int(12.0) == 12
        assert to_int(np.float64(3.0)) == 3
        assert to_int(None) is None
        assert to_int("x") is None
        assert to_int(True) is None

    def test_to_decimal_is_exact(self) -> None:
        assert to_decimal("0.1") == Decimal("0.1")
        assert to_decimal(0.28) * 25 == 7
        assert to_decimal(np.float64(2.5)) == Decimal("2.5")
        assert to_decimal(float("inf")) is None
        assert to_decimal(None) is None

    def test_plain_number_keeps_integral_values_as_int(self) -> None:
        assert plain_number(Decimal("50.00")) == 50
        assert isinstance(plain_number(Decimal("50.00")), int)
        assert plain_number(Decimal("0.28")) == Decimal("0.28")
        assert plain_number(None) is None


class TestTextAndDates:
    def test_trim(self) -> None:
        assert trim("  Jon  ") == "Jon"
        assert trim(None) is None
        assert trim(float("nan")) is None

    def test_to_date(self) -> None:
        assert to_date("2025-02-28") == date(2025, 2, 28)
        assert to_date("2012-07-01 00:00:00") == date(2012, 7, 1)
        assert to_date(datetime(2020, 5, 4, 13, 0)) == date(2020, 5, 4)
        assert to_date(pd.Timestamp("2019-01-31")) == date(2019, 1, 31)
        assert to_date(pd.NaT) is None
        assert to_date("garbage") is None

    def test_is_missing(self) -> None:
        assert is_missing(None)
        assert is_missing(pd.NA)
        assert is_missing(np.nan)
        assert not is_missing(0)
        assert not is_missing("")


class TestRecordConversion:
    def test_frame_records_uses_none_for_nulls(self) -> None:
        df = pd.DataFrame({"a": [1.0, np.nan], "b": ["x", None]})
        records = frame_records(df)
        assert records == [{"a": 1.0, "b": "x"}, {"a": None, "b": None}]

    def test_frame_records_empty(self) -> None:
        assert frame_records(pd.DataFrame({"a": []})) == []

    def test_records_frame_orders_columns_and_keeps_int_ids(self) -> None:
        df = records_frame([{"b": "x", "a": 1}, {"a": None, "b": "y"}], ["a", "b"], int_columns=["a"])
        assert list(df.columns) == ["a", "b"]
        assert str(df["a"].dtype) == "Int64"
        assert df.loc[0, "a"] == 1
        assert pd.isna(df.loc[1, "a"])

    def test_records_frame_empty_has_columns(self) -> None:
        df = records_frame([], ["a", "b"], int_columns=["a"])
        assert list(df.columns) == ["a", "b"]
        assert df.empty
