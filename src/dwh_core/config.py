"""Unified configuration for the DWH silver load.

This module provides the path layout shared by every stage and the
run-level options of the load.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

DATA_ROOT_ENV = "DWH_DATA_ROOT"


@dataclass
class DataPaths:
    """All filesystem paths used by the load.

    Attributes:
        data_root: Root directory for all warehouse layers.

    Directory Structure:
        data_root/
        ├── bronze/
        │   └── bronze.db    # Raw source tables (CRM + ERP exports)
        └── silver/
            ├── silver.db    # Cleansed, normalized tables
            └── _meta/       # JSON summaries of past runs
    """

    data_root: Path

    @classmethod
    def from_root(cls, data_root: str | Path) -> DataPaths:
        """Create DataPaths from a root directory.

        Args:
            data_root: Root directory for warehouse data.

        Returns:
            DataPaths instance.

        Examples:
            >>> paths = DataPaths.from_root("data")
            >>> paths.silver_db
            PosixPath('data/silver/silver.db')
        """
        if isinstance(data_root, str):
            data_root = Path(data_root)
        return cls(data_root=data_root)

    @classmethod
    def from_env(cls, default: str | Path = "data") -> DataPaths:
        """Create DataPaths from the ``DWH_DATA_ROOT`` environment variable."""
        return cls.from_root(os.environ.get(DATA_ROOT_ENV) or default)

    @property
    def bronze_dir(self) -> Path:
        return self.data_root / "bronze"

    @property
    def silver_dir(self) -> Path:
        return self.data_root / "silver"

    @property
    def bronze_db(self) -> Path:
        """Bronze layer: raw source tables."""
        return self.bronze_dir / "bronze.db"

    @property
    def silver_db(self) -> Path:
        """Silver layer: cleansed tables."""
        return self.silver_dir / "silver.db"

    @property
    def meta_dir(self) -> Path:
        """Run summaries written after each silver load."""
        return self.silver_dir / "_meta"

    def ensure_dirs(self) -> None:
        """Create all directories in the data structure."""
        for path in [self.bronze_dir, self.silver_dir, self.meta_dir]:
            path.mkdir(parents=True, exist_ok=True)


@dataclass
class LoadConfig:
    """Configuration for a silver load run.

    Attributes:
        paths: Warehouse paths.
        halt_on_failure: Stop at the first failed table (default). When False,
            later tables are still attempted and the report lists every failure.
        as_of: Reference date for the future-birthdate rule. Defaults to today.
    """

    paths: DataPaths
    halt_on_failure: bool = True
    as_of: date = field(default_factory=date.today)

    @classmethod
    def from_root(cls, data_root: str | Path, **kwargs) -> LoadConfig:
        return cls(paths=DataPaths.from_root(data_root), **kwargs)
