# e2e/smoke/flows/runner.py
from __future__ import annotations

import logging
from typing import Iterable

from playwright.sync_api import Page

from smoke.actions.registry import Registry
from smoke.core.context import ScenarioContext
from smoke.core.types import ActionEntry, ScenarioDocument, ScenarioResult

logger = logging.getLogger(__name__)


def _current_url(page: Page) -> str:
    return page.url or ""


class ScenarioRunner:
    """
    Runs one scenario document: every step in order, then every assertion
    in order. The first failure ends the scenario.
    """

    def __init__(self, steps: Registry, assertions: Registry) -> None:
        self.steps = steps
        self.assertions = assertions

    def run(self, doc: ScenarioDocument, page: Page) -> ScenarioResult:
        ctx = ScenarioContext(scenario_id=doc.id)
        logger.info("scenario %s (%s, priority=%s): %d step(s), %d assertion(s)",
                    doc.id, doc.module, doc.priority, len(doc.steps), len(doc.assertions))
        try:
            self._run_entries(self.steps, doc.steps, page, ctx)
            self._run_entries(self.assertions, doc.assertions, page, ctx)
        except Exception as e:
            failing = ctx.current_label or "unknown"
            logger.info("scenario %s failed at %s: %s", doc.id, failing, e)
            return ScenarioResult.failed(
                scenario_id=doc.id,
                module=doc.module,
                priority=doc.priority,
                failing_step=failing,
                error=e,
                url=_current_url(page),
            )
        finally:
            ctx.clear()

        return ScenarioResult(scenario_id=doc.id, module=doc.module, priority=doc.priority, url=_current_url(page))

    @staticmethod
    def _run_entries(registry: Registry, entries: Iterable[ActionEntry], page: Page, ctx: ScenarioContext) -> None:
        for entry in entries:
            ctx.current = entry
            registry.dispatch(entry, page, ctx)
