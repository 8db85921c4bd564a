"""Tests for code-to-label normalizers.

Every normalizer must map any input into its fixed label set, ignoring case
and surrounding whitespace, and must never raise.
"""

import math

import pytest

from dwh_core.etl.staging.normalizers import (
    NOT_AVAILABLE,
    code_key,
    normalize_country,
    normalize_erp_gender,
    normalize_gender,
    normalize_marital_status,
    normalize_product_line,
)

ODD_INPUTS = [None, "", "   ", "X", "unknown", 0, 3.5, float("nan")]


class TestMaritalStatus:
    @pytest.mark.parametrize(
        "raw, expected",
        [("S", "Single"), (" s ", "Single"), ("M", "Married"), ("m\t", "Married")],
    )
    def test_known_codes(self, raw: str, expected: str) -> None:
        assert normalize_marital_status(raw) == expected

    @pytest.mark.parametrize("raw", ODD_INPUTS)
    def test_everything_else_is_not_available(self, raw: object) -> None:
        assert normalize_marital_status(raw) == NOT_AVAILABLE


class TestGender:
    def test_crm_codes(self) -> None:
        assert normalize_gender("F") == "Female"
        assert normalize_gender(" m ") == "Male"
        assert normalize_gender("Female") == NOT_AVAILABLE

    @pytest.mark.parametrize("raw", ODD_INPUTS)
    def test_output_stays_in_label_set(self, raw: object) -> None:
        assert normalize_gender(raw) in {"Female", "Male", NOT_AVAILABLE}

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("F", "Female"),
            ("FEMALE", "Female"),
            (" female ", "Female"),
            ("M", "Male"),
            ("Male", "Male"),
            ("", NOT_AVAILABLE),
            (None, NOT_AVAILABLE),
            ("other", NOT_AVAILABLE),
        ],
    )
    def test_erp_spellings(self, raw: object, expected: str) -> None:
        assert normalize_erp_gender(raw) == expected


class TestProductLine:
    @pytest.mark.parametrize(
        "raw, expected",
        [("M", "Mountain"), ("r ", "Road"), ("S", "Other Sales"), ("t", "Touring"), (None, "n/a")],
    )
    def test_codes(self, raw: object, expected: str) -> None:
        assert normalize_product_line(raw) == expected


class TestCountry:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("DE", "Germany"),
            (" de", "Germany"),
            ("US", "United States"),
            ("USA", "United States"),
            ("", NOT_AVAILABLE),
            ("   ", NOT_AVAILABLE),
            (None, NOT_AVAILABLE),
            ("  Australia ", "Australia"),
            ("United Kingdom", "United Kingdom"),
        ],
    )
    def test_country_names(self, raw: object, expected: str) -> None:
        assert normalize_country(raw) == expected


def test_code_key_handles_nan() -> None:
    assert code_key(math.nan) is None
    assert code_key(" abc ") == "ABC"
