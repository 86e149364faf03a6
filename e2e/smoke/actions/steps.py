# e2e/smoke/actions/steps.py
"""
Step handlers: actions that change browser state.

YAML:
  steps:
    - goto: /customers
    - sidebar: true
    - open_module: customers
    - type: {selector: 'input[name="search"]', text: acme}
    - click_if_visible: '[data-cy="dismiss-banner"]'

To add a step, decorate a `(page, payload, ctx)` function with
`@STEPS.register("<name>", shorthand=..., timeout_ms=...)`. The shorthand
names the payload field a bare scalar fills in.
"""
from __future__ import annotations

import logging

from playwright.sync_api import Page

from smoke.actions.registry import Payload, Registry
from smoke.core.context import ScenarioContext
from smoke.core.nav import app_path, click_if_present, safe_click
from smoke.selectors import app_selectors as S

logger = logging.getLogger(__name__)

STEPS = Registry("step")


def _truthy(v) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes", "y", "on")
    return bool(v)


@STEPS.register("goto", shorthand="value", timeout_ms=60000)
def goto(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    page.goto(app_path(str(p.require("value"))), timeout=p.timeout, wait_until="domcontentloaded")


@STEPS.register("click")
def click(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    safe_click(page.locator(p.require("selector")), timeout_ms=p.timeout, force=_truthy(p.option("force", False)))


@STEPS.register("sidebar", shorthand="value")
def sidebar(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    if _truthy(p.value):
        safe_click(page.locator(S.SIDEBAR_TOGGLE), timeout_ms=p.timeout, force=True)


@STEPS.register("ensure_sidebar_open", shorthand="value")
def ensure_sidebar_open(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    if click_if_present(page.locator(S.SIDEBAR_TOGGLE), timeout_ms=p.timeout):
        logger.debug("%s: sidebar toggle clicked", ctx.scenario_id)


@STEPS.register("wait_for", timeout_ms=30000)
def wait_for(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    page.locator(p.require("selector")).first.wait_for(state="attached", timeout=p.timeout)


@STEPS.register("type")
def type_text(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    target = page.locator(p.require("selector")).first
    target.wait_for(state="visible", timeout=p.timeout)
    target.fill(str(ctx.resolve(p.text or "")), timeout=p.timeout)


@STEPS.register("click_if_visible")
def click_if_visible(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    sel = p.require("selector")
    if not click_if_present(page.locator(sel), timeout_ms=p.timeout):
        logger.debug("%s: %s not present, skipped", ctx.scenario_id, sel)


@STEPS.register("open_module", shorthand="value")
def open_module(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    safe_click(page.locator(S.sidebar_module_button(str(p.require("value")))), timeout_ms=p.timeout)


@STEPS.register("scroll_to")
def scroll_to(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    page.locator(p.require("selector")).first.scroll_into_view_if_needed(timeout=p.timeout)


@STEPS.register("store_text")
def store_text(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    alias = p.alias or "storedText"
    ctx.aliases[alias] = page.locator(p.require("selector")).first.inner_text(timeout=p.timeout).strip()


@STEPS.register("select")
def select(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    page.locator(p.require("selector")).first.select_option(str(p.require("value")), timeout=p.timeout)
