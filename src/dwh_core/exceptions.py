"""Domain-specific exceptions for the DWH silver load.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from DwhError for easy catching.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dwh_core.etl.metadata import StageResult


class DwhError(Exception):
    """Base exception for all DWH load errors.

    Users can catch this exception to handle any error raised by the package.
    """

    pass


class ConfigError(DwhError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - An unknown storage layer or table name is requested
    - Required configuration is missing
    """

    pass


class DataQualityError(DwhError):
    """Raised when source data cannot be accepted at all.

    Per-record anomalies (bad dates, inconsistent amounts, unknown codes) are
    resolved by the cleaners and never raise. This exception is reserved for
    structural problems such as a bronze export missing required columns.
    """

    pass


class ETLError(DwhError):
    """Raised when an ETL pipeline stage fails."""

    pass


class StorageError(ETLError):
    """Raised when reading from or writing to a layer database fails.

    Attributes:
        code: Numeric error code reported by the storage engine, if any.
        state: Symbolic error name reported by the storage engine, if any.
    """

    def __init__(self, message: str, code: int | None = None, state: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.state = state


class LoadError(ETLError):
    """Raised by ``LoadReport.raise_for_status()`` when a silver load failed.

    Attributes:
        stage: The failed stage result (table name, timings, error details).
    """

    def __init__(self, message: str, stage: StageResult | None = None) -> None:
        super().__init__(message)
        self.stage = stage
