"""Tests for the ERP cleaners (customers, locations, categories)."""

from datetime import date

import pandas as pd

from dwh_core.etl.staging.erp_cleaner import (
    CATEGORY_COLUMNS,
    clean_erp_cust_az12,
    clean_erp_loc_a101,
    clean_erp_px_cat_g1v2,
    strip_hyphens,
    strip_legacy_prefix,
)

AS_OF = date(2026, 10, 19)


class TestErpCustomers:
    def test_worked_example(self) -> None:
        df = clean_erp_cust_az12(
            pd.DataFrame({"cid": ["NAS12345"], "bdate": ["1980-05-17"], "gen": ["FEMALE"]}),
            as_of=AS_OF,
        )
        assert df.to_dict("records") == [{"cid": "12345", "bdate": date(1980, 5, 17), "gen": "Female"}]

    def test_prefix_only_stripped_when_present(self) -> None:
        assert strip_legacy_prefix("NASAW00011000") == "AW00011000"
        assert strip_legacy_prefix("nasAW1") == "AW1"
        assert strip_legacy_prefix("AW00011000") == "AW00011000"
        assert strip_legacy_prefix("NA") == "NA"
        assert strip_legacy_prefix(None) is None

    def test_future_birthdates_are_nulled(self) -> None:
        bronze = pd.DataFrame(
            {
                "cid": ["AW1", "AW2", "AW3", "AW4"],
                "bdate": ["2026-10-19", "2026-10-20", "2924-02-14", None],
                "gen": ["M", " male ", "", None],
            }
        )
        df = clean_erp_cust_az12(bronze, as_of=AS_OF)
        assert df["bdate"].tolist() == [date(2026, 10, 19), None, None, None]
        assert df["gen"].tolist() == ["Male", "Male", "n/a", "n/a"]

    def test_defaults_to_today(self) -> None:
        bronze = pd.DataFrame({"cid": ["AW1"], "bdate": ["2999-01-01"], "gen": ["F"]})
        df = clean_erp_cust_az12(bronze)
        assert df.loc[0, "bdate"] is None


class TestErpLocations:
    def test_worked_example(self) -> None:
        df = clean_erp_loc_a101(pd.DataFrame({"cid": ["US-001"], "cntry": [""]}))
        assert df.to_dict("records") == [{"cid": "US001", "cntry": "n/a"}]

    def test_countries(self) -> None:
        bronze = pd.DataFrame(
            {
                "cid": ["AW-00011000", "AW-00011001", "AW-00011002", "AW-00011003", "AW-00011004"],
                "cntry": ["DE", "USA", " US", None, "Australia  "],
            }
        )
        df = clean_erp_loc_a101(bronze)
        assert df["cid"].tolist() == ["AW00011000", "AW00011001", "AW00011002", "AW00011003", "AW00011004"]
        assert df["cntry"].tolist() == ["Germany", "United States", "United States", "n/a", "Australia"]

    def test_strip_hyphens(self) -> None:
        assert strip_hyphens("A-B-C") == "ABC"
        assert strip_hyphens("ABC") == "ABC"
        assert strip_hyphens(None) is None


class TestErpCategories:
    def test_pass_through_preserves_rows(self) -> None:
        bronze = pd.DataFrame(
            {
                "id": ["AC_BR", "AC_BC", "AC_BR"],
                "cat": ["Accessories", "Accessories", "Accessories"],
                "subcat": ["Bike Racks", "Bottles and Cages", "Bike Racks"],
                "maintenance": ["Yes", "No", None],
            }
        )
        df = clean_erp_px_cat_g1v2(bronze)
        assert list(df.columns) == CATEGORY_COLUMNS
        assert len(df) == len(bronze)
        assert df["id"].tolist() == ["AC_BR", "AC_BC", "AC_BR"]
        assert df.loc[2, "maintenance"] is None

    def test_returns_new_frame(self) -> None:
        bronze = pd.DataFrame({"id": ["X"], "cat": ["C"], "subcat": ["S"], "maintenance": ["No"]})
        df = clean_erp_px_cat_g1v2(bronze)
        df.loc[0, "cat"] = "changed"
        assert bronze.loc[0, "cat"] == "C"
