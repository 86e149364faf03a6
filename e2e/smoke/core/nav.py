from __future__ import annotations

import re

from playwright.sync_api import Locator

_ABSOLUTE_URL = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def app_path(path: str) -> str:
    """
    Path relative to the context base_url. Playwright resolves "/x" against
    the origin and would drop a base path like "/reseller", so the leading
    slash is removed. Absolute URLs pass through unchanged.
    """
    if _ABSOLUTE_URL.match(path) or path.startswith("//"):
        return path
    return path.lstrip("/")


def safe_click(locator: Locator, timeout_ms: int = 20000, force: bool = False) -> None:
    """
    Wait for the element, bring it into view, then click.
    force=True skips Playwright's actionability checks (overlays, animations).
    """
    target = locator.first
    target.wait_for(state="attached", timeout=timeout_ms)
    if not force:
        target.scroll_into_view_if_needed(timeout=timeout_ms)
    target.click(timeout=timeout_ms, force=force)


def click_if_present(locator: Locator, timeout_ms: int = 20000) -> bool:
    """Click only when the element is already in the DOM. Never waits for it to appear."""
    if locator.count() < 1:
        return False
    locator.first.click(timeout=timeout_ms)
    return True
