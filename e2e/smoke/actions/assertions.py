# e2e/smoke/actions/assertions.py
"""
Assertion handlers: structural checks only ("is this rendered?").

Every timeout is an upper bound handed to Playwright's own waiting
(Locator.wait_for / Page.wait_for_url / Page.wait_for_function), so a
passing check returns as soon as the condition holds.
"""
from __future__ import annotations

import re

from playwright.sync_api import Page

from smoke.actions.registry import Payload, Registry
from smoke.core.context import ScenarioContext
from smoke.core.exceptions import ParseError

ASSERTIONS = Registry("assertion")

_COUNT_JS = "([s, n]) => document.querySelectorAll(s).length === n"
_MIN_COUNT_JS = "([s, n]) => document.querySelectorAll(s).length >= n"
_HAS_CLASS_JS = "([s, c]) => { const el = document.querySelector(s); return !!el && el.classList.contains(c); }"
_DISABLED_JS = "([s, want]) => { const el = document.querySelector(s); return !!el && el.disabled === want; }"
_TITLE_JS = "t => document.title.includes(t)"


def _int_option(p: Payload, name: str) -> int:
    v = p.require(name)
    try:
        return int(v)
    except (TypeError, ValueError) as e:
        raise ParseError(f"'{name}' must be an integer, got {v!r}") from e


@ASSERTIONS.register("visible", shorthand="text", timeout_ms=20000)
def visible(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    text = str(ctx.resolve(p.require("text")))
    page.get_by_text(text).first.wait_for(state="visible", timeout=p.timeout)


@ASSERTIONS.register("not_visible", shorthand="text", timeout_ms=10000)
def not_visible(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    text = str(ctx.resolve(p.require("text")))
    page.get_by_text(text).first.wait_for(state="hidden", timeout=p.timeout)


@ASSERTIONS.register("url_contains", shorthand="value", timeout_ms=30000)
def url_contains(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    value = str(ctx.resolve(p.require("value")))
    page.wait_for_url(lambda url: value in url, timeout=p.timeout, wait_until="commit")


@ASSERTIONS.register("url_matches", shorthand="pattern", timeout_ms=30000)
def url_matches(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    try:
        pattern = re.compile(str(p.require("pattern")))
    except re.error as e:
        raise ParseError(f"invalid url pattern: {e}") from e
    page.wait_for_url(lambda url: pattern.search(url) is not None, timeout=p.timeout, wait_until="commit")


@ASSERTIONS.register("contains_text")
def contains_text(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    text = str(ctx.resolve(p.require("text")))
    # case-sensitive substring match
    exact = re.compile(re.escape(text))
    page.locator(p.require("selector")).filter(has_text=exact).first.wait_for(state="attached", timeout=p.timeout)


@ASSERTIONS.register("element_exists")
def element_exists(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    page.locator(p.require("selector")).first.wait_for(state="attached", timeout=p.timeout)


@ASSERTIONS.register("element_not_exists")
def element_not_exists(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    page.locator(p.require("selector")).first.wait_for(state="detached", timeout=p.timeout)


@ASSERTIONS.register("count")
def count(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    page.wait_for_function(_COUNT_JS, arg=[p.require("selector"), _int_option(p, "count")], timeout=p.timeout)


@ASSERTIONS.register("min_count")
def min_count(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    page.wait_for_function(_MIN_COUNT_JS, arg=[p.require("selector"), _int_option(p, "min")], timeout=p.timeout)


@ASSERTIONS.register("has_class")
def has_class(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    page.wait_for_function(_HAS_CLASS_JS, arg=[p.require("selector"), str(p.require("class"))], timeout=p.timeout)


@ASSERTIONS.register("is_disabled")
def is_disabled(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    page.wait_for_function(_DISABLED_JS, arg=[p.require("selector"), True], timeout=p.timeout)


@ASSERTIONS.register("is_enabled")
def is_enabled(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    page.wait_for_function(_DISABLED_JS, arg=[p.require("selector"), False], timeout=p.timeout)


@ASSERTIONS.register("title_contains", shorthand="text")
def title_contains(page: Page, p: Payload, ctx: ScenarioContext) -> None:
    page.wait_for_function(_TITLE_JS, arg=str(ctx.resolve(p.require("text"))), timeout=p.timeout)
