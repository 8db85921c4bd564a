"""Example: Seed the bronze layer from CSV exports and run the silver load

This example loads the six source exports into bronze.db and then runs the
full bronze -> silver cleansing load.

Prerequisites:
- CSV exports in data/source/ named after the tables, e.g. crm_cust_info.csv,
  erp_loc_a101.csv (header row with the bronze column names)
"""

import logging
from pathlib import Path

from dwh_core import LoadConfig, load_silver
from dwh_core.etl import SILVER_TABLES, storage

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

config = LoadConfig.from_root(Path("data"))
source_dir = Path("data/source")  # MODIFY AS NEEDED

config.paths.ensure_dirs()

# Bronze: replace every table with its CSV export
conn = storage.connect(config.paths.bronze_db)
try:
    storage.create_tables(conn, "bronze")
    for table in SILVER_TABLES:
        csv_path = source_dir / f"{table.name}.csv"
        if not csv_path.exists():
            print(f"Missing export {csv_path}, bronze.{table.name} left as is")
            continue
        storage.load_bronze_csv(conn, table, csv_path)
finally:
    conn.close()

# Silver: cleanse all six tables
report = load_silver(config)

for stage in report.stages:
    print(f"{stage.table:<20} {stage.status:<7} {stage.rows_read:>7} -> {stage.rows_written:<7}")

if report.skipped:
    print(f"Skipped: {', '.join(report.skipped)}")

report.raise_for_status()
