"""SQLite storage for the bronze and silver layers.

Each layer is its own database file (``bronze.db``, ``silver.db``). Tables are
read with ``pandas.read_sql`` and written with plain ``sqlite3`` statements so
that clearing a table and inserting its new rows commit together.

Every ``sqlite3.Error`` is re-raised as ``StorageError`` carrying the engine's
error code and name.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from dwh_core.etl.staging.cleaning_utils import is_missing
from dwh_core.etl.tables import SILVER_TABLES, SilverTable
from dwh_core.exceptions import DataQualityError, StorageError

logger = logging.getLogger(__name__)


def _storage_error(action: str, e: sqlite3.Error) -> StorageError:
    return StorageError(
        f"{action}: {e}",
        code=getattr(e, "sqlite_errorcode", None),
        state=getattr(e, "sqlite_errorname", None),
    )


def _sql_value(v: Any) -> Any:
    if is_missing(v):
        return None
    if isinstance(v, (datetime, date)):
        return v.isoformat()
    if isinstance(v, Decimal):
        return int(v) if v == v.to_integral_value() else float(v)
    if isinstance(v, np.generic):
        return v.item()
    return v


def connect(db_path: Path) -> sqlite3.Connection:
    """Open a layer database, creating its directory if needed."""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        return sqlite3.connect(db_path)
    except sqlite3.Error as e:
        raise _storage_error(f"Could not open {db_path}", e) from e


def create_tables(conn: sqlite3.Connection, layer: str) -> None:
    """Create every table of ``layer`` that does not exist yet."""
    try:
        with conn:
            for table in SILVER_TABLES:
                conn.execute(table.ddl(layer))
    except sqlite3.Error as e:
        raise _storage_error(f"Could not create {layer} tables", e) from e
    logger.debug("Ensured %d %s tables exist", len(SILVER_TABLES), layer)


def read_table(conn: sqlite3.Connection, table: SilverTable, layer: str) -> pd.DataFrame:
    """Read a whole table in insertion order.

    Returns:
        DataFrame with the layer's columns for ``table``.

    Raises:
        StorageError: If the table is missing or cannot be read.
    """
    cols = ", ".join(table.columns(layer))
    query = f"SELECT {cols} FROM {table.name} ORDER BY rowid"
    try:
        return pd.read_sql(query, conn)
    except (sqlite3.Error, pd.errors.DatabaseError) as e:
        cause = e.__cause__ if isinstance(e.__cause__, sqlite3.Error) else e
        raise StorageError(
            f"Could not read {table.qualified_name(layer)}: {e}",
            code=getattr(cause, "sqlite_errorcode", None),
            state=getattr(cause, "sqlite_errorname", None),
        ) from e


def truncate_table(conn: sqlite3.Connection, table: SilverTable) -> None:
    """Delete every row of ``table`` (SQLite has no TRUNCATE).

    Commits on its own. The load runner does not call this; it clears tables
    inside ``replace_table`` so the clear and the insert commit together.
    """
    try:
        with conn:
            conn.execute(f"DELETE FROM {table.name}")
    except sqlite3.Error as e:
        raise _storage_error(f"Could not truncate {table.name}", e) from e


def replace_table(
    conn: sqlite3.Connection,
    table: SilverTable,
    df: pd.DataFrame,
    layer: str = "silver",
) -> int:
    """Replace all rows of ``table`` with ``df`` in a single transaction.

    Either the table ends up holding exactly the rows of ``df``, or it is left
    as it was before the call.

    Returns:
        Number of rows inserted.
    """
    cols = list(table.columns(layer))
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise DataQualityError(
            f"Missing required columns for {table.qualified_name(layer)}: {missing}. "
            f"Available: {list(df.columns)}"
        )

    placeholders = ", ".join("?" for _ in cols)
    insert = f"INSERT INTO {table.name} ({', '.join(cols)}) VALUES ({placeholders})"
    rows = [tuple(_sql_value(v) for v in row) for row in df[cols].itertuples(index=False, name=None)]

    try:
        with conn:
            conn.execute(f"DELETE FROM {table.name}")
            conn.executemany(insert, rows)
    except sqlite3.Error as e:
        raise _storage_error(f"Could not load {table.qualified_name(layer)}", e) from e
    return len(rows)


def load_bronze_csv(conn: sqlite3.Connection, table: SilverTable, csv_path: Path) -> int:
    """Replace a bronze table with the contents of a source CSV export.

    Values are loaded as text; SQLite column affinity turns numeric strings
    into numbers. Extra CSV columns are ignored.

    Raises:
        DataQualityError: If the CSV lacks one of the bronze columns.
    """
    df = pd.read_csv(csv_path, dtype=object)
    df.columns = [str(c).strip().lower() for c in df.columns]
    count = replace_table(conn, table, df, layer="bronze")
    logger.info("Loaded %d rows from %s into %s", count, csv_path, table.qualified_name("bronze"))
    return count
