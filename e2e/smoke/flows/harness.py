# e2e/smoke/flows/harness.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from playwright.sync_api import Page

from smoke.actions.assertions import ASSERTIONS
from smoke.actions.registry import Registry
from smoke.actions.steps import STEPS
from smoke.core.artifacts import Artifacts
from smoke.core.config import Settings
from smoke.core.error_log import ErrorLog
from smoke.core.exceptions import AuthenticationSetupFailure, ParseError
from smoke.core.scenario_loader import load_document, read_priority
from smoke.core.types import ScenarioDocument, ScenarioResult
from smoke.flows.policy import FailurePolicy, Verdict
from smoke.flows.runner import ScenarioRunner
from smoke.flows.session import reset_session

logger = logging.getLogger(__name__)


class SmokeHarness:
    """
    Drives one scenario file through its lifecycle:
    parse -> before_scenario (session reset) -> run -> after_scenario (policy).
    Scenario-level errors end up in the returned Verdict, never raised.
    """

    def __init__(
        self,
        settings: Settings,
        page: Page,
        *,
        steps: Registry = STEPS,
        assertions: Registry = ASSERTIONS,
        error_log: Optional[ErrorLog] = None,
        artifacts_base_dir: Optional[Path] = None,
    ) -> None:
        self.settings = settings
        self.page = page
        steps.seal()
        assertions.seal()
        self.runner = ScenarioRunner(steps, assertions)
        self.policy = FailurePolicy(error_log or ErrorLog(settings.error_log_path))
        self.artifacts_base_dir = artifacts_base_dir

    def before_scenario(self, doc: ScenarioDocument) -> None:
        reset_session(self.page, self.settings)

    def after_scenario(self, result: ScenarioResult) -> Verdict:
        if not result.passed and self.artifacts_base_dir is not None:
            Artifacts(base_dir=self.artifacts_base_dir, scenario_id=result.scenario_id).save_debug(self.page, "failure")
        return self.policy.observe(result)

    def run(self, scenario_id: str) -> Verdict:
        root = self.settings.scenario_dir
        try:
            doc = load_document(root, scenario_id)
        except ParseError as e:
            result = ScenarioResult.failed(
                scenario_id=scenario_id,
                module="unknown",
                priority=read_priority(root, scenario_id),
                failing_step="document",
                error=e,
            )
            return self.policy.observe(result)

        try:
            self.before_scenario(doc)
        except AuthenticationSetupFailure as e:
            result = ScenarioResult.failed(
                scenario_id=doc.id,
                module=doc.module,
                priority=doc.priority,
                failing_step="session reset",
                error=e,
                url=self.page.url or "",
            )
        else:
            result = self.runner.run(doc, self.page)

        return self.after_scenario(result)
