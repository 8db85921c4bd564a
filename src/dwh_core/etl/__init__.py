"""ETL module for the bronze -> silver load.

Data Layers
===========

**Raw (Bronze)** - ``bronze/bronze.db``
    CRM and ERP exports loaded as-is.

**Staging (Silver)** - ``dwh_core.etl.staging/`` -> ``silver/silver.db``
    One cleansed table per bronze table:
    - ``crm_cust_info``: one row per customer id (latest version)
    - ``crm_prd_info``: one row per product version, with derived end dates
    - ``crm_sales_details``: one row per sales line, dates validated
    - ``erp_cust_az12``, ``erp_loc_a101``: ids aligned with CRM keys
    - ``erp_px_cat_g1v2``: copied unchanged

Load Semantics
--------------
Each run fully replaces every silver table (clear, then insert), one table
at a time, in the order of ``SILVER_TABLES``. A failing table stops the run;
tables loaded earlier stay loaded.
"""

from dwh_core.etl.load import load_silver, load_table
from dwh_core.etl.tables import SILVER_TABLES, SilverTable, get_table

__all__ = [
    "SILVER_TABLES",
    "SilverTable",
    "get_table",
    "load_silver",
    "load_table",
]
