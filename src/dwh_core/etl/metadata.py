"""Stage results and run metadata for the silver load.

Each table load returns a ``StageResult``; a full run returns a ``LoadReport``
aggregating them. Reports are also written as JSON files in ``_meta/`` so the
outcome of past runs can be inspected without parsing logs.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from dwh_core.exceptions import LoadError

logger = logging.getLogger(__name__)

LAST_RUN_FILE = "load_silver_last_run.json"


@dataclass
class StageResult:
    """Outcome of loading one silver table.

    Attributes:
        table: Table name (e.g. ``crm_cust_info``).
        source: Source system, ``"CRM"`` or ``"ERP"``.
        status: ``"ok"`` or ``"failed"``.
        started_at: ISO timestamp when the stage started.
        finished_at: ISO timestamp when the stage ended.
        duration_seconds: Wall-clock duration of the stage.
        rows_read: Bronze rows read.
        rows_written: Silver rows written.
        error: Error message when the stage failed.
        error_code: Storage engine error code, when available.
        error_state: Storage engine error name, when available.
    """

    table: str
    source: str
    status: str
    started_at: str
    finished_at: str
    duration_seconds: float
    rows_read: int = 0
    rows_written: int = 0
    error: Optional[str] = None
    error_code: Optional[int] = None
    error_state: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class LoadReport:
    """Outcome of a full silver load.

    Attributes:
        started_at: ISO timestamp when the run started.
        finished_at: ISO timestamp when the run ended.
        duration_seconds: Total wall-clock duration.
        stages: Results of the stages that ran, in load order.
        skipped: Tables not attempted because an earlier stage failed.
    """

    started_at: str
    finished_at: str = ""
    duration_seconds: float = 0.0
    stages: list[StageResult] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return all(stage.ok for stage in self.stages) and not self.skipped

    @property
    def failed_stages(self) -> list[StageResult]:
        return [stage for stage in self.stages if not stage.ok]

    @property
    def failed_stage(self) -> Optional[StageResult]:
        """First failed stage, or None when every stage succeeded."""
        failed = self.failed_stages
        return failed[0] if failed else None

    def raise_for_status(self) -> None:
        """Raise ``LoadError`` if any stage failed."""
        stage = self.failed_stage
        if stage is not None:
            raise LoadError(f"Silver load failed at {stage.table}: {stage.error}", stage=stage)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = "ok" if self.succeeded else "failed"
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LoadReport:
        data = dict(data)
        data.pop("status", None)
        stages = [StageResult(**s) for s in data.pop("stages", [])]
        return cls(stages=stages, **data)


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


def write_run_metadata(meta_dir: Path, report: LoadReport) -> Path:
    """Write ``report`` as the last-run summary in ``meta_dir``."""
    meta_dir.mkdir(parents=True, exist_ok=True)
    path = meta_dir / LAST_RUN_FILE
    path.write_text(json.dumps(report.to_dict(), indent=2))
    logger.debug("Wrote run metadata: %s", path)
    return path


def read_run_metadata(meta_dir: Path) -> Optional[LoadReport]:
    """Read the last-run summary, if one exists and is readable."""
    path = meta_dir / LAST_RUN_FILE
    if not path.exists():
        return None
    try:
        return LoadReport.from_dict(json.loads(path.read_text()))
    except (ValueError, TypeError) as e:
        logger.warning("Error reading metadata %s: %s", path, e)
        return None
