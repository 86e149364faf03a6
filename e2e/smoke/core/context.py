from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .types import ActionEntry


@dataclass
class ScenarioContext:
    """
    Diagnostic state for one scenario run. Created by the runner,
    cleared when the scenario finishes.
    """

    scenario_id: str
    current: Optional[ActionEntry] = None
    aliases: Dict[str, str] = field(default_factory=dict)

    @property
    def current_label(self) -> Optional[str]:
        return self.current.label if self.current is not None else None

    def resolve(self, value: Any) -> Any:
        """'@name' refers to text captured earlier by store_text."""
        if isinstance(value, str) and value.startswith("@") and value[1:] in self.aliases:
            return self.aliases[value[1:]]
        return value

    def is_empty(self) -> bool:
        return self.current is None and not self.aliases

    def clear(self) -> None:
        self.current = None
        self.aliases.clear()
