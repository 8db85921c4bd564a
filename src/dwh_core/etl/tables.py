"""Bronze and silver table definitions.

Each ``SilverTable`` ties a warehouse table to its bronze layout, its silver
layout and the cleaner that maps one onto the other. ``SILVER_TABLES`` lists
them in load order: CRM tables first, then ERP tables.

Column order and names match the source warehouse so the bronze exports can
be loaded without remapping.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import pandas as pd

from dwh_core.etl.staging.crm_cleaner import (
    clean_crm_cust_info,
    clean_crm_prd_info,
    clean_crm_sales_details,
)
from dwh_core.etl.staging.erp_cleaner import (
    clean_erp_cust_az12,
    clean_erp_loc_a101,
    clean_erp_px_cat_g1v2,
)
from dwh_core.exceptions import ConfigError

LAYERS = ("bronze", "silver")


@dataclass(frozen=True)
class SilverTable:
    """A table loaded from bronze into silver.

    Attributes:
        name: Table name, identical in both layers (e.g. ``crm_cust_info``).
        source: Source system, ``"CRM"`` or ``"ERP"``; used to group log output.
        bronze_columns: Bronze column names mapped to SQL types, in order.
        silver_columns: Silver column names mapped to SQL types, in order.
        cleaner: Function turning the bronze DataFrame into the silver one.
        uses_reference_date: Whether ``cleaner`` takes an ``as_of`` date.
    """

    name: str
    source: str
    bronze_columns: dict[str, str]
    silver_columns: dict[str, str]
    cleaner: Callable[..., pd.DataFrame]
    uses_reference_date: bool = False

    def columns(self, layer: str) -> dict[str, str]:
        if layer == "bronze":
            return self.bronze_columns
        if layer == "silver":
            return self.silver_columns
        raise ConfigError(f"Unknown layer '{layer}'. Must be one of {LAYERS}.")

    def ddl(self, layer: str) -> str:
        cols = ",\n    ".join(f"{name} {sql_type}" for name, sql_type in self.columns(layer).items())
        return f"CREATE TABLE IF NOT EXISTS {self.name} (\n    {cols}\n)"

    def qualified_name(self, layer: str) -> str:
        return f"{layer}.{self.name}"


CRM_CUST_INFO = SilverTable(
    name="crm_cust_info",
    source="CRM",
    bronze_columns={
        "cst_id": "INTEGER",
        "cst_key": "TEXT",
        "cst_firstname": "TEXT",
        "cst_lastname": "TEXT",
        "cst_marital_status": "TEXT",
        "cst_gndr": "TEXT",
        "cst_create_date": "DATE",
    },
    silver_columns={
        "cst_id": "INTEGER",
        "cst_key": "TEXT",
        "cst_firstname": "TEXT",
        "cst_lastname": "TEXT",
        "cst_marital_status": "TEXT",
        "cst_gndr": "TEXT",
        "cst_create_date": "DATE",
    },
    cleaner=clean_crm_cust_info,
)

CRM_PRD_INFO = SilverTable(
    name="crm_prd_info",
    source="CRM",
    bronze_columns={
        "prd_id": "INTEGER",
        "prd_key": "TEXT",
        "prd_nm": "TEXT",
        "prd_cost": "INTEGER",
        "prd_line": "TEXT",
        "prd_start_dt": "DATETIME",
        "prd_end_dt": "DATETIME",
    },
    silver_columns={
        "prd_id": "INTEGER",
        "cat_id": "TEXT",
        "prd_key": "TEXT",
        "prd_nm": "TEXT",
        "prd_cost": "INTEGER",
        "prd_line": "TEXT",
        "prd_start_dt": "DATE",
        "prd_end_dt": "DATE",
    },
    cleaner=clean_crm_prd_info,
)

CRM_SALES_DETAILS = SilverTable(
    name="crm_sales_details",
    source="CRM",
    bronze_columns={
        "sls_ord_num": "TEXT",
        "sls_prd_key": "TEXT",
        "sls_cust_id": "INTEGER",
        "sls_order_dt": "INTEGER",
        "sls_ship_dt": "INTEGER",
        "sls_due_dt": "INTEGER",
        "sls_sales": "INTEGER",
        "sls_quantity": "INTEGER",
        "sls_price": "INTEGER",
    },
    silver_columns={
        "sls_ord_num": "TEXT",
        "sls_prd_key": "TEXT",
        "sls_cust_id": "INTEGER",
        "sls_order_dt": "DATE",
        "sls_ship_dt": "DATE",
        "sls_due_dt": "DATE",
        "sls_sales": "NUMERIC",
        "sls_quantity": "INTEGER",
        "sls_price": "NUMERIC",
    },
    cleaner=clean_crm_sales_details,
)

ERP_CUST_AZ12 = SilverTable(
    name="erp_cust_az12",
    source="ERP",
    bronze_columns={"cid": "TEXT", "bdate": "DATE", "gen": "TEXT"},
    silver_columns={"cid": "TEXT", "bdate": "DATE", "gen": "TEXT"},
    cleaner=clean_erp_cust_az12,
    uses_reference_date=True,
)

ERP_LOC_A101 = SilverTable(
    name="erp_loc_a101",
    source="ERP",
    bronze_columns={"cid": "TEXT", "cntry": "TEXT"},
    silver_columns={"cid": "TEXT", "cntry": "TEXT"},
    cleaner=clean_erp_loc_a101,
)

ERP_PX_CAT_G1V2 = SilverTable(
    name="erp_px_cat_g1v2",
    source="ERP",
    bronze_columns={"id": "TEXT", "cat": "TEXT", "subcat": "TEXT", "maintenance": "TEXT"},
    silver_columns={"id": "TEXT", "cat": "TEXT", "subcat": "TEXT", "maintenance": "TEXT"},
    cleaner=clean_erp_px_cat_g1v2,
)

SILVER_TABLES: tuple[SilverTable, ...] = (
    CRM_CUST_INFO,
    CRM_PRD_INFO,
    CRM_SALES_DETAILS,
    ERP_CUST_AZ12,
    ERP_LOC_A101,
    ERP_PX_CAT_G1V2,
)


def get_table(name: str) -> SilverTable:
    """Look up a table definition by name.

    Raises:
        ConfigError: If no table has that name.
    """
    for table in SILVER_TABLES:
        if table.name == name:
            return table
    raise ConfigError(f"Unknown table '{name}'. Known tables: {[t.name for t in SILVER_TABLES]}")
