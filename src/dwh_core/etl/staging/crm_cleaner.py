"""Staging (Silver) layer: CRM table cleaners.

This module turns the three bronze CRM exports into their silver form.

Data directory mapping:
    Input: bronze.crm_* tables → Raw (Bronze) layer
    Output: silver.crm_* tables → Staging (Silver) layer

Cleaning rules:
1. ``crm_cust_info``: keep the latest record per customer id, trim names,
   expand marital status and gender codes.
2. ``crm_prd_info``: split the composite product key into category id and
   product key, default missing cost to 0, expand product line codes and
   derive each version's end date from the next version's start date.
3. ``crm_sales_details``: turn ``YYYYMMDD`` integers into dates (invalid ones
   become null) and reconcile sales, quantity and price.

Each ``clean_*`` function takes the bronze DataFrame and returns a new silver
DataFrame; the ``*_record`` functions do the same for a single row.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

import pandas as pd

from dwh_core.etl.staging.cleaning_utils import (
    frame_records,
    parse_int_date,
    plain_number,
    records_frame,
    to_date,
    to_decimal,
    to_int,
    trim,
)
from dwh_core.etl.staging.normalizers import (
    normalize_gender,
    normalize_marital_status,
    normalize_product_line,
)
from dwh_core.etl.staging.windows import derive_end_dates, latest_per_key

logger = logging.getLogger(__name__)

CUSTOMER_COLUMNS = [
    "cst_id",
    "cst_key",
    "cst_firstname",
    "cst_lastname",
    "cst_marital_status",
    "cst_gndr",
    "cst_create_date",
]

PRODUCT_COLUMNS = [
    "prd_id",
    "cat_id",
    "prd_key",
    "prd_nm",
    "prd_cost",
    "prd_line",
    "prd_start_dt",
    "prd_end_dt",
]

SALES_COLUMNS = [
    "sls_ord_num",
    "sls_prd_key",
    "sls_cust_id",
    "sls_order_dt",
    "sls_ship_dt",
    "sls_due_dt",
    "sls_sales",
    "sls_quantity",
    "sls_price",
]

# Composite product keys look like "CO-RF-FR-R92B-58": category, then product.
CATEGORY_ID_WIDTH = 5
PRODUCT_KEY_OFFSET = 6

# Derived unit prices are rounded to cents.
PRICE_PRECISION = Decimal("0.01")


# ---------- customers ----------


def clean_customer_record(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Cleanse one customer row (no deduplication)."""
    return {
        "cst_id": to_int(raw.get("cst_id")),
        "cst_key": raw.get("cst_key"),
        "cst_firstname": trim(raw.get("cst_firstname")),
        "cst_lastname": trim(raw.get("cst_lastname")),
        "cst_marital_status": normalize_marital_status(raw.get("cst_marital_status")),
        "cst_gndr": normalize_gender(raw.get("cst_gndr")),
        "cst_create_date": to_date(raw.get("cst_create_date")),
    }


def clean_crm_cust_info(df: pd.DataFrame) -> pd.DataFrame:
    """Clean bronze ``crm_cust_info`` into one row per customer id.

    Rows without a customer id are dropped. Among rows sharing an id, the one
    with the latest ``cst_create_date`` wins; on equal dates the earliest row
    in bronze order wins.

    Args:
        df: Bronze customer rows, in bronze insertion order.

    Returns:
        Silver customer DataFrame with ``CUSTOMER_COLUMNS``.

    """
    rows = [clean_customer_record(r) for r in frame_records(df)]
    latest = latest_per_key(rows, key="cst_id", order_by="cst_create_date")
    dropped = len(rows) - len(latest)
    if dropped:
        logger.debug("crm_cust_info: dropped %d duplicate or id-less rows", dropped)
    return records_frame(latest, CUSTOMER_COLUMNS, int_columns=["cst_id"])


# ---------- products ----------


def split_product_key(raw_key: Any) -> tuple[Optional[str], Optional[str]]:
    """Split a composite product key into ``(cat_id, prd_key)``.

    The category id is the first five characters with ``-`` replaced by
    ``_``; the product key is everything from the seventh character on.

    Examples:
        >>> split_product_key("CO-RF-FR-R92B-58")
        ('CO_RF', 'FR-R92B-58')
        >>> split_product_key(None)
        (None, None)
    """
    if raw_key is None:
        return None, None
    key = str(raw_key)
    return key[:CATEGORY_ID_WIDTH].replace("-", "_"), key[PRODUCT_KEY_OFFSET:]


def clean_product_record(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Cleanse one product row.

    ``prd_end_dt`` is carried over as a date; ``clean_crm_prd_info`` derives it
    before calling this function.
    """
    cat_id, prd_key = split_product_key(raw.get("prd_key"))
    cost = to_int(raw.get("prd_cost"))
    return {
        "prd_id": to_int(raw.get("prd_id")),
        "cat_id": cat_id,
        "prd_key": prd_key,
        "prd_nm": raw.get("prd_nm"),
        "prd_cost": 0 if cost is None else cost,
        "prd_line": normalize_product_line(raw.get("prd_line")),
        "prd_start_dt": to_date(raw.get("prd_start_dt")),
        "prd_end_dt": to_date(raw.get("prd_end_dt")),
    }


def clean_crm_prd_info(df: pd.DataFrame) -> pd.DataFrame:
    """Clean bronze ``crm_prd_info``.

    End dates are recomputed for every row: versions are grouped by the raw
    composite key and ordered by start date, and each version ends the day
    before the next one starts. The newest version is open-ended (null).

    Args:
        df: Bronze product rows.

    Returns:
        Silver product DataFrame with ``PRODUCT_COLUMNS``, in bronze order.

    """
    raw = frame_records(df)
    for record in raw:
        record["prd_start_dt"] = to_date(record.get("prd_start_dt"))
    dated = derive_end_dates(raw, key="prd_key", start="prd_start_dt", end="prd_end_dt")
    rows = [clean_product_record(r) for r in dated]
    return records_frame(rows, PRODUCT_COLUMNS, int_columns=["prd_id", "prd_cost"])


# ---------- sales ----------


def reconcile_sales(
    sales: Any,
    quantity: Any,
    price: Any,
) -> tuple[Optional[int | Decimal], Optional[int | Decimal]]:
    """Cross-check a sales line's amount against quantity and unit price.

    Rules:
    - If sales is null, not positive, or differs from ``quantity * |price|``,
      it is replaced by ``quantity * |price|``. A null or zero price gives no
      usable product, so sales is left alone in that case unless it is
      missing or not positive.
    - If price is null or not positive, it is derived as ``sales / quantity``
      from the reconciled sales, rounded to cents; a zero or null quantity
      yields null. When rounding was needed, sales is recomputed from the
      rounded price.

    Quantity is rounded to a whole number first, as it is stored. All
    arithmetic is done in ``Decimal`` so ``sales == quantity * price`` holds
    exactly on the returned values.

    Returns:
        Tuple of ``(sales, price)``; integral amounts come back as ``int``.

    Examples:
        >>> reconcile_sales(None, 5, 10)
        (50, 10)
        >>> reconcile_sales(60, 5, None)
        (60, 12)
        >>> reconcile_sales(7, 25, None)
        (7, Decimal('0.28'))
        >>> reconcile_sales(40, 0, None)
        (40, None)
    """
    sales = to_decimal(sales)
    qty = to_int(quantity)
    quantity = None if qty is None else Decimal(qty)
    price = to_decimal(price)

    expected = None
    if quantity is not None and price is not None and price != 0:
        expected = quantity * abs(price)

    if sales is None or sales <= 0:
        sales = expected
    elif expected is not None and sales != expected:
        sales = expected

    if price is None or price <= 0:
        if sales is None or not quantity:
            price = None
        else:
            price = (sales / quantity).quantize(PRICE_PRECISION, rounding=ROUND_HALF_UP)
            sales = quantity * price

    return plain_number(sales), plain_number(price)


def clean_sales_record(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Cleanse one sales line."""
    quantity = to_int(raw.get("sls_quantity"))
    sales, price = reconcile_sales(raw.get("sls_sales"), quantity, raw.get("sls_price"))
    return {
        "sls_ord_num": raw.get("sls_ord_num"),
        "sls_prd_key": raw.get("sls_prd_key"),
        "sls_cust_id": to_int(raw.get("sls_cust_id")),
        "sls_order_dt": parse_int_date(raw.get("sls_order_dt")),
        "sls_ship_dt": parse_int_date(raw.get("sls_ship_dt")),
        "sls_due_dt": parse_int_date(raw.get("sls_due_dt")),
        "sls_sales": sales,
        "sls_quantity": quantity,
        "sls_price": price,
    }


def clean_crm_sales_details(df: pd.DataFrame) -> pd.DataFrame:
    """Clean bronze ``crm_sales_details`` row by row.

    Args:
        df: Bronze sales lines.

    Returns:
        Silver sales DataFrame with ``SALES_COLUMNS``; one row per input row.

    """
    rows = [clean_sales_record(r) for r in frame_records(df)]
    return records_frame(rows, SALES_COLUMNS, int_columns=["sls_cust_id", "sls_quantity"])
