from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Tuple

import yaml

from .exceptions import DiscoveryError, ParseError
from .types import PRIORITY_RANK, ActionEntry, ActionKind, Priority, ScenarioDocument, normalize_priority

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: Tuple[str, ...] = (".yaml", ".yml")


def _reraise(err: OSError) -> None:
    raise err


def discover(root: str | Path, extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> List[str]:
    """
    Recursively list scenario documents under root.
    Returns posix paths relative to root, sorted.
    """
    r = Path(root)
    if not r.exists():
        raise DiscoveryError(f"Scenario directory not found: {r.resolve()}")
    if not r.is_dir():
        raise DiscoveryError(f"Scenario path is not a directory: {r.resolve()}")

    exts = {e.lower() for e in extensions}
    found: List[Path] = []
    try:
        # unreadable sub-directories raise through onerror
        for dirpath, _dirnames, filenames in os.walk(r, onerror=_reraise):
            found.extend(Path(dirpath, f) for f in filenames if Path(f).suffix.lower() in exts)
    except OSError as e:
        raise DiscoveryError(f"Scenario directory unreadable: {r.resolve()}: {e}") from e

    out = sorted(p.relative_to(r).as_posix() for p in found)
    logger.info("discovered %d scenario(s) under %s", len(out), r)
    return out


def _read_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ParseError(f"Cannot read scenario {path}: {e}") from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid YAML in {path}: {e}") from e


def read_priority(root: str | Path, scenario_id: str) -> Priority:
    """
    Only the priority field is consulted. Broken documents rank as medium;
    their ParseError shows up when the scenario itself runs.
    """
    try:
        raw = _read_yaml(Path(root) / scenario_id)
    except ParseError:
        return normalize_priority(None)
    if not isinstance(raw, dict):
        return normalize_priority(None)
    return normalize_priority(raw.get("priority"))


def order_by_priority(root: str | Path, scenario_ids: Iterable[str]) -> List[str]:
    ids = list(scenario_ids)
    ranks = {sid: PRIORITY_RANK[read_priority(root, sid)] for sid in ids}
    # sorted() is stable: same priority keeps discovery order
    return sorted(ids, key=lambda sid: ranks[sid])


def load_document(root: str | Path, scenario_id: str) -> ScenarioDocument:
    raw = _read_yaml(Path(root) / scenario_id)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ParseError(f"{scenario_id}: top level must be a mapping")
    return _to_document(scenario_id, raw)


def _to_document(scenario_id: str, d: Dict[str, Any]) -> ScenarioDocument:
    module = d.get("module")
    return ScenarioDocument(
        id=scenario_id,
        module=str(module) if module is not None else "unknown",
        priority=normalize_priority(d.get("priority")),
        steps=_to_entries(scenario_id, "step", d.get("steps")),
        assertions=_to_entries(scenario_id, "assertion", d.get("assertions")),
    )


def _to_entries(scenario_id: str, kind: ActionKind, items: Any) -> Tuple[ActionEntry, ...]:
    if items is None:
        return ()
    if not isinstance(items, list):
        raise ParseError(f"{scenario_id}: {kind}s must be a list")

    out: List[ActionEntry] = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ParseError(f"{scenario_id}: {kind}[{i}] must be a single-key mapping, got {item!r}")
        if len(item) != 1:
            keys = ", ".join(str(k) for k in item) or "none"
            raise ParseError(f"{scenario_id}: {kind}[{i}] must have exactly one key (found: {keys})")
        (name, payload), = item.items()
        if not isinstance(name, str):
            raise ParseError(f"{scenario_id}: {kind}[{i}] action name must be a string, got {name!r}")
        out.append(ActionEntry(kind=kind, index=i, name=name, payload=payload))
    return tuple(out)
