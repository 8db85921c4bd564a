"""Staging (Silver) layer: ERP table cleaners.

Cleans the three bronze ERP exports:

- ``erp_cust_az12``: customer ids lose their legacy ``NAS`` prefix, future
  birthdates are nulled, gender spellings are unified.
- ``erp_loc_a101``: customer ids lose their hyphens so they match CRM keys,
  country codes are expanded.
- ``erp_px_cat_g1v2``: copied through unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any, Optional

import pandas as pd

from dwh_core.etl.staging.cleaning_utils import frame_records, records_frame, to_date
from dwh_core.etl.staging.normalizers import normalize_country, normalize_erp_gender

ERP_CUSTOMER_COLUMNS = ["cid", "bdate", "gen"]
LOCATION_COLUMNS = ["cid", "cntry"]
CATEGORY_COLUMNS = ["id", "cat", "subcat", "maintenance"]

LEGACY_CUSTOMER_PREFIX = "NAS"


def strip_legacy_prefix(cid: Any) -> Optional[str]:
    """Drop a leading ``NAS`` (any case) from an ERP customer id.

    Examples:
        >>> strip_legacy_prefix("NASAW00011000")
        'AW00011000'
        >>> strip_legacy_prefix("AW00011000")
        'AW00011000'
    """
    if cid is None:
        return None
    s = str(cid)
    if s[: len(LEGACY_CUSTOMER_PREFIX)].upper() == LEGACY_CUSTOMER_PREFIX:
        return s[len(LEGACY_CUSTOMER_PREFIX):]
    return s


def strip_hyphens(cid: Any) -> Optional[str]:
    """Remove every ``-`` from an id.

    Examples:
        >>> strip_hyphens("AW-00011000")
        'AW00011000'
    """
    if cid is None:
        return None
    return str(cid).replace("-", "")


def clean_erp_customer_record(raw: Mapping[str, Any], as_of: date) -> dict[str, Any]:
    bdate = to_date(raw.get("bdate"))
    if bdate is not None and bdate > as_of:
        bdate = None
    return {
        "cid": strip_legacy_prefix(raw.get("cid")),
        "bdate": bdate,
        "gen": normalize_erp_gender(raw.get("gen")),
    }


def clean_erp_cust_az12(df: pd.DataFrame, as_of: date | None = None) -> pd.DataFrame:
    """Clean bronze ``erp_cust_az12``.

    Args:
        df: Bronze ERP customer rows.
        as_of: Birthdates after this day are treated as invalid. Defaults to
            today.

    Returns:
        Silver DataFrame with ``ERP_CUSTOMER_COLUMNS``.

    """
    as_of = as_of or date.today()
    rows = [clean_erp_customer_record(r, as_of) for r in frame_records(df)]
    return records_frame(rows, ERP_CUSTOMER_COLUMNS)


def clean_location_record(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "cid": strip_hyphens(raw.get("cid")),
        "cntry": normalize_country(raw.get("cntry")),
    }


def clean_erp_loc_a101(df: pd.DataFrame) -> pd.DataFrame:
    """Clean bronze ``erp_loc_a101``."""
    rows = [clean_location_record(r) for r in frame_records(df)]
    return records_frame(rows, LOCATION_COLUMNS)


def clean_erp_px_cat_g1v2(df: pd.DataFrame) -> pd.DataFrame:
    """Copy bronze ``erp_px_cat_g1v2`` into its silver shape unchanged."""
    return records_frame(frame_records(df), CATEGORY_COLUMNS)
