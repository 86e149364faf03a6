# e2e/smoke/flows/session.py
from __future__ import annotations

import logging
import re

from playwright.sync_api import Error as PlaywrightError, Page

from smoke.core.config import Settings
from smoke.core.exceptions import AuthenticationSetupFailure
from smoke.core.nav import app_path
from smoke.selectors import app_selectors as S

logger = logging.getLogger(__name__)

_CLEAR_STORAGE_JS = "() => { try { window.localStorage.clear(); window.sessionStorage.clear(); } catch (e) {} }"


def reset_session(page: Page, settings: Settings) -> None:
    """
    Wipe cookies and web storage, then log in again.
    Runs before every scenario regardless of how the previous one ended.
    """
    try:
        page.context.clear_cookies()
        page.goto(app_path(settings.login_path), wait_until="domcontentloaded", timeout=settings.nav_timeout_ms)
        # storage is per-origin, so clear it once we are on the app's origin
        page.evaluate(_CLEAR_STORAGE_JS)
        page.reload(wait_until="domcontentloaded", timeout=settings.nav_timeout_ms)
    except PlaywrightError as e:
        raise AuthenticationSetupFailure(f"could not open login page {settings.login_path}: {e}") from e

    login(page, settings)


def login(page: Page, settings: Settings) -> None:
    if not settings.username or not settings.password:
        raise AuthenticationSetupFailure("SMOKE_USERNAME / SMOKE_PASSWORD are not set")

    logger.info("logging in as %s", settings.username)
    pattern = re.compile(settings.post_login_pattern)
    try:
        page.locator(S.LOGIN_EMAIL_INPUT).first.fill(settings.username, timeout=settings.auth_timeout_ms)
        page.locator(S.LOGIN_PASSWORD_INPUT).first.fill(settings.password, timeout=settings.auth_timeout_ms)
        page.locator(S.LOGIN_SUBMIT_BUTTON).first.click(timeout=settings.auth_timeout_ms)
        page.wait_for_url(
            lambda url: pattern.search(url) is not None,
            timeout=settings.auth_timeout_ms,
            wait_until="commit",
        )
    except PlaywrightError as e:
        first_line = (str(e).splitlines() or [""])[0]
        raise AuthenticationSetupFailure(
            f"login did not reach a page matching {settings.post_login_pattern!r} (at {page.url}): {first_line}"
        ) from e

    logger.info("logged in, landed on %s", page.url)
