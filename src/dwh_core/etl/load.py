"""Silver load runner: bronze tables -> cleansed silver tables.

Loads the six silver tables in a fixed order (CRM customers, products, sales
lines, then ERP customers, locations, categories). For each table it reads
the full bronze table, runs the table's cleaner, and replaces the silver
table's contents in one transaction.

Every stage is timed and returns a ``StageResult``. By default the first
failure stops the run; tables loaded before it stay committed and the
remaining tables are listed as skipped in the ``LoadReport``.

Examples:
    Python:
        >>> from dwh_core import LoadConfig, load_silver
        >>> report = load_silver(LoadConfig.from_root("data"))
        >>> report.succeeded
        True

    CLI:
        dwh-load-silver --data-root ./data
"""

from __future__ import annotations

import argparse
import logging
import sqlite3
import sys
import time
from collections.abc import Sequence
from datetime import date

from dwh_core.config import DataPaths, LoadConfig
from dwh_core.etl import storage
from dwh_core.etl.metadata import LoadReport, StageResult, now_iso, write_run_metadata
from dwh_core.etl.tables import SILVER_TABLES, SilverTable
from dwh_core.etl.utils import banner, format_duration
from dwh_core.exceptions import DwhError, StorageError

logger = logging.getLogger(__name__)


def load_table(
    table: SilverTable,
    bronze_conn: sqlite3.Connection,
    silver_conn: sqlite3.Connection,
    as_of: date | None = None,
) -> StageResult:
    """Load one silver table from its bronze counterpart.

    The silver table is truncated and refilled by ``storage.replace_table`` in
    one transaction, so a failed insert leaves the previous rows in place.

    Exceptions are not caught here; ``load_silver`` turns them into a failed
    ``StageResult``.

    Returns:
        StageResult with status ``"ok"``, row counts and timings.

    """
    started_at = now_iso()
    t0 = time.perf_counter()

    raw = storage.read_table(bronze_conn, table, "bronze")
    if table.uses_reference_date:
        clean = table.cleaner(raw, as_of=as_of)
    else:
        clean = table.cleaner(raw)

    logger.info(">> Truncating Table: %s (same transaction as insert)", table.qualified_name("silver"))
    logger.info(">> Inserting Data Into: %s", table.qualified_name("silver"))
    written = storage.replace_table(silver_conn, table, clean)

    duration = time.perf_counter() - t0
    logger.info(">> Load Duration: %s (%d rows in, %d rows out)", format_duration(duration), len(raw), written)
    logger.info(">> -------------")

    return StageResult(
        table=table.name,
        source=table.source,
        status="ok",
        started_at=started_at,
        finished_at=now_iso(),
        duration_seconds=duration,
        rows_read=len(raw),
        rows_written=written,
    )


def _failed_stage(table: SilverTable, started_at: str, t0: float, e: Exception) -> StageResult:
    return StageResult(
        table=table.name,
        source=table.source,
        status="failed",
        started_at=started_at,
        finished_at=now_iso(),
        duration_seconds=time.perf_counter() - t0,
        error=str(e),
        error_code=getattr(e, "code", None),
        error_state=getattr(e, "state", None) or type(e).__name__,
    )


def _log_failure(stage: StageResult) -> None:
    logger.error(banner())
    logger.error("ERROR OCCURRED DURING LOADING SILVER LAYER (table: %s)", stage.table)
    logger.error("Error Message: %s", stage.error)
    logger.error("Error Code: %s", stage.error_code)
    logger.error("Error State: %s", stage.error_state)
    logger.error(banner())


def load_silver(config: LoadConfig | None = None) -> LoadReport:
    """Run the full bronze -> silver load.

    Args:
        config: Load configuration. Defaults to ``DataPaths.from_env()`` with
            halt-on-failure and today's date as reference.

    Returns:
        LoadReport with one StageResult per attempted table.

    Raises:
        StorageError: If a layer database cannot be opened or the silver
            tables cannot be created (before any table is loaded).

    """
    if config is None:
        config = LoadConfig(paths=DataPaths.from_env())
    paths = config.paths
    paths.ensure_dirs()

    report = LoadReport(started_at=now_iso())
    t_batch = time.perf_counter()

    bronze_conn = storage.connect(paths.bronze_db)
    try:
        silver_conn = storage.connect(paths.silver_db)
        try:
            storage.create_tables(silver_conn, "silver")

            logger.info(banner())
            logger.info("Loading Silver Layer")
            logger.info(banner())

            current_source = None
            for i, table in enumerate(SILVER_TABLES):
                if table.source != current_source:
                    current_source = table.source
                    logger.info(banner("-"))
                    logger.info("Loading %s Tables", current_source)
                    logger.info(banner("-"))

                started_at = now_iso()
                t0 = time.perf_counter()
                try:
                    stage = load_table(table, bronze_conn, silver_conn, as_of=config.as_of)
                except Exception as e:
                    logger.debug("Stage %s failed", table.name, exc_info=True)
                    stage = _failed_stage(table, started_at, t0, e)
                    _log_failure(stage)
                report.stages.append(stage)

                if not stage.ok and config.halt_on_failure:
                    report.skipped = [t.name for t in SILVER_TABLES[i + 1 :]]
                    break
        finally:
            silver_conn.close()
    finally:
        bronze_conn.close()

    report.finished_at = now_iso()
    report.duration_seconds = time.perf_counter() - t_batch

    if report.succeeded:
        logger.info(banner())
        logger.info("Loading Silver Layer is Completed")
        logger.info("   - Total Load Duration: %s", format_duration(report.duration_seconds))
        logger.info(banner())
    else:
        logger.error(
            "Silver load finished with %d failed table(s) and %d skipped in %s",
            len(report.failed_stages),
            len(report.skipped),
            format_duration(report.duration_seconds),
        )

    write_run_metadata(paths.meta_dir, report)
    return report


# ---------- CLI ----------
def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dwh-load-silver",
        description="Load the silver layer from the bronze layer (full replace of all tables).",
    )
    p.add_argument(
        "--data-root",
        default=None,
        help="Warehouse data root containing bronze/ and silver/ (default: $DWH_DATA_ROOT or ./data).",
    )
    p.add_argument(
        "--quiet",
        action="store_true",
        help="Less logging output.",
    )
    p.add_argument(
        "--verbose", "--debug",
        action="store_true",
        dest="verbose",
        help="Verbose/debug logging output.",
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else (logging.WARNING if args.quiet else logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    paths = DataPaths.from_root(args.data_root) if args.data_root else DataPaths.from_env()

    try:
        report = load_silver(LoadConfig(paths=paths))
    except StorageError as e:
        logger.error("Error: %s (code=%s, state=%s)", e, e.code, e.state)
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except DwhError as e:
        logger.error("Error: %s", e, exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if not report.succeeded:
        failed = report.failed_stage
        print(f"ERROR: silver load failed at {failed.table if failed else '?'}", file=sys.stderr)
        return 2

    print(f"Loaded {len(report.stages)} silver tables in {format_duration(report.duration_seconds)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
