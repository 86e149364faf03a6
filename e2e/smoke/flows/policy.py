# e2e/smoke/flows/policy.py
"""
Failure policy.

Every failed scenario is written to the error log. Only `high` priority
failures stay failed in the pytest report; `medium` and `low` failures are
reported as passed with a SuppressedFailure warning, and the error log is
where they are actually tracked.
"""
from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Optional

from smoke.core.error_log import ErrorLog, RunRecord, build_record
from smoke.core.exceptions import SuppressedFailure
from smoke.core.types import Outcome, Priority, ScenarioResult

logger = logging.getLogger(__name__)

BLOCKING_PRIORITY: Priority = "high"


def visible_outcome(priority: Priority, stored: Outcome) -> Outcome:
    if stored == "failed" and priority != BLOCKING_PRIORITY:
        return "passed"
    return stored


@dataclass(frozen=True)
class Verdict:
    scenario_id: str
    priority: Priority
    stored: Outcome
    visible: Outcome
    record: Optional[RunRecord] = None

    @property
    def suppressed(self) -> bool:
        return self.stored != self.visible

    def summary(self) -> str:
        if self.record is None:
            return f"{self.scenario_id}: {self.stored}"
        r = self.record
        return f"{self.scenario_id} [{self.priority}] failed at {r.failing_step}: {r.error_name}: {r.message}"


class FailurePolicy:
    def __init__(self, error_log: ErrorLog) -> None:
        self.error_log = error_log

    def observe(self, result: ScenarioResult) -> Verdict:
        if result.passed:
            logger.info("scenario %s passed", result.scenario_id)
            return Verdict(result.scenario_id, result.priority, "passed", "passed")

        record = build_record(result)
        try:
            self.error_log.append(record)
        except (OSError, ValueError) as e:
            # the verdict below must not depend on the log being writable
            logger.error("could not write run record for %s to %s: %s", result.scenario_id, self.error_log.path, e)

        visible = visible_outcome(result.priority, result.outcome)
        verdict = Verdict(result.scenario_id, result.priority, result.outcome, visible, record)

        if verdict.suppressed:
            msg = f"non-blocking failure ({result.priority}): {verdict.summary()}"
            logger.warning(msg)
            warnings.warn(msg, SuppressedFailure, stacklevel=2)
        else:
            logger.error("blocking failure: %s", verdict.summary())
        return verdict
