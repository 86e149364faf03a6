from __future__ import annotations

import logging
from dataclasses import dataclass

from playwright.sync_api import Browser, BrowserContext, Error as PlaywrightError, Playwright, sync_playwright

from .config import Settings

logger = logging.getLogger(__name__)


@dataclass
class PWContextBundle:
    playwright: Playwright
    browser: Browser
    context: BrowserContext


def context_base_url(base_url: str) -> str | None:
    """Base URL with a trailing slash, so relative paths keep its path segment."""
    if not base_url:
        return None
    return base_url if base_url.endswith("/") else base_url + "/"


def create_context(settings: Settings) -> PWContextBundle:
    """
    One browser context for the whole run. Session state is wiped per
    scenario by the session reset, not by recreating the context.
    """
    pw = sync_playwright().start()

    launch_kwargs = {"headless": settings.headless, "slow_mo": settings.slow_mo_ms}
    if settings.channel:
        launch_kwargs["channel"] = settings.channel

    browser = pw.chromium.launch(**launch_kwargs)

    context = browser.new_context(
        base_url=context_base_url(settings.base_url),
        viewport={"width": settings.viewport_width, "height": settings.viewport_height},
    )
    context.set_default_timeout(settings.timeout_ms)
    context.set_default_navigation_timeout(settings.nav_timeout_ms)

    # chunks are stopped per scenario by the tracing fixture
    if settings.trace:
        context.tracing.start(screenshots=True, snapshots=True, sources=True)

    logger.info(
        "browser ready: base_url=%s viewport=%dx%d headless=%s",
        settings.base_url,
        settings.viewport_width,
        settings.viewport_height,
        settings.headless,
    )
    return PWContextBundle(playwright=pw, browser=browser, context=context)


def close_context(bundle: PWContextBundle) -> None:
    try:
        bundle.context.close()
    except PlaywrightError:
        pass
    try:
        bundle.browser.close()
    except PlaywrightError:
        pass
    bundle.playwright.stop()
