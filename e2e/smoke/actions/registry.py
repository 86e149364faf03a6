# e2e/smoke/actions/registry.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from playwright.sync_api import Page, TimeoutError as PlaywrightTimeoutError

from smoke.core.context import ScenarioContext
from smoke.core.exceptions import ActionTimeout, ParseError, UnknownActionType
from smoke.core.types import ActionEntry, ActionKind

logger = logging.getLogger(__name__)

RECOGNIZED_FIELDS = ("selector", "text", "value", "timeout", "as")


@dataclass(frozen=True)
class Payload:
    """
    An action payload after normalization. The scalar shorthand
    (`- click: '#save'`) and the mapping form (`- click: {selector: '#save'}`)
    end up as the same Payload.
    """

    raw: Any = None
    selector: Optional[str] = None
    text: Optional[str] = None
    value: Any = None
    timeout: Optional[int] = None
    alias: Optional[str] = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def require(self, name: str) -> Any:
        v = self.option(name)
        if v is None or v == "":
            raise ParseError(f"payload is missing '{name}': {self.raw!r}")
        return v

    def option(self, name: str, default: Any = None) -> Any:
        if name == "as":
            name = "alias"
        if name in ("selector", "text", "value", "timeout", "alias"):
            v = getattr(self, name)
            return default if v is None else v
        return self.options.get(name, default)


def normalize_payload(raw: Any, shorthand: str, default_timeout_ms: Optional[int]) -> Payload:
    if isinstance(raw, dict):
        known: Dict[str, Any] = {}
        for k in ("selector", "text", "value"):
            if raw.get(k) is not None:
                known[k] = raw[k] if k == "value" else str(raw[k])
        timeout = raw.get("timeout")
        if timeout is not None:
            try:
                timeout = int(timeout)
            except (TypeError, ValueError) as e:
                raise ParseError(f"timeout must be milliseconds, got {timeout!r}") from e
        options = {k: v for k, v in raw.items() if k not in RECOGNIZED_FIELDS}
        return Payload(
            raw=raw,
            timeout=timeout if timeout is not None else default_timeout_ms,
            alias=str(raw["as"]) if raw.get("as") is not None else None,
            options=MappingProxyType(options),
            **known,
        )

    if isinstance(raw, (list, tuple)):
        raise ParseError(f"payload must be a scalar or a mapping, got {raw!r}")

    kwargs: Dict[str, Any] = {}
    if raw is not None:
        if shorthand in ("selector", "text"):
            kwargs[shorthand] = str(raw)
        elif shorthand == "value":
            kwargs["value"] = raw
        else:
            kwargs["options"] = MappingProxyType({shorthand: raw})
    return Payload(raw=raw, timeout=default_timeout_ms, **kwargs)


Handler = Callable[[Page, Payload, ScenarioContext], None]


@dataclass(frozen=True)
class ActionSpec:
    name: str
    handler: Handler
    shorthand: str = "selector"
    timeout_ms: Optional[int] = 20000


class Registry:
    """
    Action name -> handler table. Filled at import time by the handler
    modules, sealed by the harness before the first scenario runs.
    """

    def __init__(self, kind: ActionKind) -> None:
        self.kind = kind
        self._specs: Dict[str, ActionSpec] = {}
        self._sealed = False

    def register(self, name: str, *, shorthand: str = "selector", timeout_ms: Optional[int] = 20000) -> Callable[[Handler], Handler]:
        def deco(fn: Handler) -> Handler:
            if self._sealed:
                raise RuntimeError(f"{self.kind} registry is sealed; cannot register '{name}'")
            if name in self._specs:
                raise ValueError(f"{self.kind} '{name}' is already registered")
            self._specs[name] = ActionSpec(name=name, handler=fn, shorthand=shorthand, timeout_ms=timeout_ms)
            return fn

        return deco

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def names(self) -> List[str]:
        return sorted(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def spec(self, name: str) -> ActionSpec:
        s = self._specs.get(name)
        if s is None:
            raise UnknownActionType(name, self.kind)
        return s

    def dispatch(self, entry: ActionEntry, page: Page, ctx: ScenarioContext) -> None:
        s = self.spec(entry.name)
        payload = normalize_payload(entry.payload, s.shorthand, s.timeout_ms)
        logger.debug("%s %s -> %r", ctx.scenario_id, entry.label, payload.raw)
        try:
            s.handler(page, payload, ctx)
        except PlaywrightTimeoutError as e:
            first_line = (str(e).splitlines() or [""])[0]
            raise ActionTimeout(entry.label, payload.timeout, first_line) from e
