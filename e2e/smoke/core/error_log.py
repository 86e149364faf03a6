from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
import threading
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from .types import ScenarioResult

logger = logging.getLogger(__name__)

STACK_LIMIT = 500


@dataclass(frozen=True)
class RunRecord:
    timestamp: str
    scenario_file: str
    module: str
    priority: str
    outcome: str
    error_name: str
    message: str
    failing_step: str
    url: str
    stack_trace: str

    def to_json(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "scenarioFile": self.scenario_file,
            "module": self.module,
            "priority": self.priority,
            "outcome": self.outcome,
            "errorName": self.error_name,
            "message": self.message,
            "failingStep": self.failing_step,
            "url": self.url,
            "stackTrace": self.stack_trace,
        }


def _format_trace(err: BaseException | None) -> str:
    if err is None:
        return "No stack trace"
    text = "".join(traceback.format_exception(type(err), err, err.__traceback__))
    return text[:STACK_LIMIT]


def _file_mode(path: Path) -> int:
    """Mode for the rewritten log: the existing file's, else what open() would give."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def build_record(result: ScenarioResult) -> RunRecord:
    err = result.error
    return RunRecord(
        timestamp=datetime.now(timezone.utc).isoformat(),
        scenario_file=result.scenario_id or "unknown",
        module=result.module or "unknown",
        priority=result.priority,
        outcome=result.outcome,
        error_name=type(err).__name__ if err is not None else "Error",
        message=str(err) if err is not None and str(err) else "Unknown error",
        failing_step=result.failing_step or "unknown",
        url=result.url or "",
        stack_trace=_format_trace(err),
    )


class ErrorLog:
    """
    Append-only JSON array of run records.
    Each append rewrites the whole file; prior records are always kept.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def read(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return []
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError(f"Error log is not a JSON array: {self.path}")
        return data

    def append(self, record: RunRecord) -> None:
        with self._lock:
            entries = self.read()
            entries.append(record.to_json())
            self.path.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp = tempfile.mkstemp(prefix=".smoke-log-", dir=str(self.path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(entries, f, ensure_ascii=False, indent=2)
                # mkstemp creates 0600
                os.chmod(tmp, _file_mode(self.path))
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        logger.debug("appended run record for %s to %s", record.scenario_file, self.path)
