"""Tests for ETL runner utilities."""

from dwh_core.etl.utils import banner, format_duration


class TestFormatDuration:
    def test_seconds_only(self) -> None:
        assert format_duration(45.24) == "45.2s"
        assert format_duration(0) == "0.0s"

    def test_minutes(self) -> None:
        assert format_duration(90.5) == "1m 30.5s"
        assert format_duration(605) == "10m 05.0s"


def test_banner() -> None:
    assert banner() == "=" * 48
    assert banner("-", 10) == "----------"
