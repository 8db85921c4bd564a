"""Staging (Silver) layer - cleaning and normalizing bronze tables.

Cleaning never rejects a load because of a bad value: unknown codes become
``"n/a"``, invalid dates become null, inconsistent amounts are recomputed.

Building blocks:
- ``cleaning_utils``: scalar parsing (numbers, dates, trimming)
- ``normalizers``: code -> label mappings
- ``windows``: latest-per-key selection and effective-date chaining
- ``crm_cleaner`` / ``erp_cleaner``: one ``clean_*`` function per table
"""

from dwh_core.etl.staging.cleaning_utils import parse_int_date, to_date, to_int, trim
from dwh_core.etl.staging.crm_cleaner import (
    clean_crm_cust_info,
    clean_crm_prd_info,
    clean_crm_sales_details,
    reconcile_sales,
    split_product_key,
)
from dwh_core.etl.staging.erp_cleaner import (
    clean_erp_cust_az12,
    clean_erp_loc_a101,
    clean_erp_px_cat_g1v2,
)
from dwh_core.etl.staging.windows import derive_end_dates, latest_per_key

__all__ = [
    # Cleaning utilities
    "trim",
    "to_int",
    "to_date",
    "parse_int_date",
    # Window helpers
    "latest_per_key",
    "derive_end_dates",
    # CRM cleaners
    "clean_crm_cust_info",
    "clean_crm_prd_info",
    "clean_crm_sales_details",
    "reconcile_sales",
    "split_product_key",
    # ERP cleaners
    "clean_erp_cust_az12",
    "clean_erp_loc_a101",
    "clean_erp_px_cat_g1v2",
]
