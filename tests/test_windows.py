"""Tests for latest-per-key selection and effective-date chaining."""

from datetime import date

from dwh_core.etl.staging.windows import derive_end_dates, latest_per_key


class TestLatestPerKey:
    def test_keeps_latest_per_key(self) -> None:
        rows = [
            {"id": 1, "d": date(2024, 1, 1), "tag": "old"},
            {"id": 2, "d": date(2024, 1, 5), "tag": "only"},
            {"id": 1, "d": date(2025, 1, 1), "tag": "new"},
            {"id": 1, "d": date(2024, 6, 1), "tag": "mid"},
        ]
        result = latest_per_key(rows, "id", "d")
        assert [(r["id"], r["tag"]) for r in result] == [(1, "new"), (2, "only")]

    def test_null_keys_are_excluded(self) -> None:
        rows = [{"id": None, "d": date(2030, 1, 1)}, {"id": 3, "d": date(2020, 1, 1)}]
        result = latest_per_key(rows, "id", "d")
        assert [r["id"] for r in result] == [3]

    def test_ties_keep_first_in_input_order(self) -> None:
        rows = [
            {"id": 7, "d": date(2024, 1, 1), "tag": "first"},
            {"id": 7, "d": date(2024, 1, 1), "tag": "second"},
        ]
        assert latest_per_key(rows, "id", "d")[0]["tag"] == "first"
        # Same input, same answer.
        assert latest_per_key(list(rows), "id", "d")[0]["tag"] == "first"

    def test_null_ordering_value_ranks_lowest(self) -> None:
        rows = [
            {"id": 1, "d": None, "tag": "undated"},
            {"id": 1, "d": date(2001, 1, 1), "tag": "dated"},
            {"id": 2, "d": None, "tag": "a"},
            {"id": 2, "d": None, "tag": "b"},
        ]
        result = {r["id"]: r["tag"] for r in latest_per_key(rows, "id", "d")}
        assert result == {1: "dated", 2: "a"}

    def test_empty_input(self) -> None:
        assert latest_per_key([], "id", "d") == []


class TestDeriveEndDates:
    def test_chains_versions_within_key(self) -> None:
        rows = [
            {"k": "A", "s": date(2013, 7, 1)},
            {"k": "B", "s": date(2012, 1, 1)},
            {"k": "A", "s": date(2011, 7, 1)},
            {"k": "A", "s": date(2012, 7, 1)},
        ]
        result = derive_end_dates(rows, "k", "s", "e")

        assert [r["e"] for r in result] == [
            None,
            None,
            date(2012, 6, 30),
            date(2013, 6, 30),
        ]

    def test_every_end_is_day_before_next_start(self) -> None:
        starts = [date(2020, 3, 1), date(2020, 1, 1), date(2021, 1, 1), date(2020, 2, 29)]
        rows = [{"k": "X", "s": s} for s in starts]
        result = sorted(derive_end_dates(rows, "k", "s", "e"), key=lambda r: r["s"])
        for current, following in zip(result, result[1:]):
            assert current["e"] == date.fromordinal(following["s"].toordinal() - 1)
            assert current["e"] < following["s"]
        assert result[-1]["e"] is None

    def test_does_not_mutate_input(self) -> None:
        rows = [{"k": "A", "s": date(2020, 1, 1)}, {"k": "A", "s": date(2020, 2, 1)}]
        derive_end_dates(rows, "k", "s", "e")
        assert all("e" not in r for r in rows)

    def test_null_start_sorts_first(self) -> None:
        rows = [{"k": "A", "s": date(2020, 2, 1)}, {"k": "A", "s": None}]
        result = derive_end_dates(rows, "k", "s", "e")
        assert result[1]["e"] == date(2020, 1, 31)
        assert result[0]["e"] is None
