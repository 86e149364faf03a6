from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple

Priority = Literal["high", "medium", "low"]
ActionKind = Literal["step", "assertion"]
Outcome = Literal["passed", "failed"]

DEFAULT_PRIORITY: Priority = "medium"
PRIORITY_RANK: Dict[str, int] = {"high": 0, "medium": 1, "low": 2}


def normalize_priority(value: Any) -> Priority:
    p = str(value).strip().lower() if value is not None else ""
    return p if p in PRIORITY_RANK else DEFAULT_PRIORITY  # type: ignore[return-value]


@dataclass(frozen=True)
class ActionEntry:
    kind: ActionKind
    index: int
    name: str
    payload: Any = None

    @property
    def label(self) -> str:
        return f"{self.kind}[{self.index}] {self.name}"


@dataclass(frozen=True)
class ScenarioDocument:
    id: str
    module: str
    priority: Priority
    steps: Tuple[ActionEntry, ...] = ()
    assertions: Tuple[ActionEntry, ...] = ()


@dataclass
class ScenarioResult:
    scenario_id: str
    module: str
    priority: Priority
    outcome: Outcome = "passed"
    failing_step: Optional[str] = None
    error: Optional[BaseException] = field(default=None, repr=False)
    url: str = ""

    @property
    def passed(self) -> bool:
        return self.outcome == "passed"

    @classmethod
    def failed(
        cls,
        scenario_id: str,
        module: str,
        priority: Priority,
        failing_step: str,
        error: BaseException,
        url: str = "",
    ) -> "ScenarioResult":
        return cls(
            scenario_id=scenario_id,
            module=module,
            priority=priority,
            outcome="failed",
            failing_step=failing_step,
            error=error,
            url=url,
        )
