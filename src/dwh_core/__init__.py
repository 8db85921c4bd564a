"""DWH Core - bronze to silver cleansing load for the sales data warehouse.

This package copies raw ("bronze") CRM and ERP tables into cleaned,
normalized ("silver") tables:

- **Bronze (raw)**: CRM and ERP exports, unchanged
- **Silver (cleansed)**: deduplicated, trimmed, code-expanded tables with
  validated dates and reconciled sales amounts

Module Structure:
    dwh_core.etl.staging: Per-table cleaners, normalizers, window helpers
    dwh_core.etl.tables: Bronze/silver table definitions in load order
    dwh_core.etl.storage: SQLite storage for both layers
    dwh_core.etl.load: Load runner and CLI
    dwh_core.config: DataPaths and LoadConfig

Quick Start:
    >>> from dwh_core import LoadConfig, load_silver
    >>>
    >>> report = load_silver(LoadConfig.from_root("data"))
    >>> for stage in report.stages:
    ...     print(stage.table, stage.status, stage.rows_written)
    >>> report.raise_for_status()

Silver tables:
    CRM: crm_cust_info, crm_prd_info, crm_sales_details
    ERP: erp_cust_az12, erp_loc_a101, erp_px_cat_g1v2
"""

__version__ = "0.1.0"

from dwh_core.config import DataPaths, LoadConfig
from dwh_core.etl.load import load_silver
from dwh_core.etl.metadata import LoadReport, StageResult
from dwh_core.exceptions import (
    ConfigError,
    DataQualityError,
    DwhError,
    ETLError,
    LoadError,
    StorageError,
)

__all__ = [
    "ConfigError",
    "DataPaths",
    "DataQualityError",
    "DwhError",
    "ETLError",
    "LoadConfig",
    "LoadError",
    "LoadReport",
    "StageResult",
    "StorageError",
    "__version__",
    "load_silver",
]
