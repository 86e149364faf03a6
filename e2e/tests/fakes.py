"""
Minimal stand-in for playwright.sync_api.Page, enough for the handlers,
the session reset and the harness. Elements are plain selector -> text
entries; anything missing times out the way Playwright would.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Pattern, Set, Tuple, Union
from urllib.parse import urljoin

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError


def _timeout(what: str, timeout: Optional[int]) -> PlaywrightTimeoutError:
    return PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.\nwaiting for {what}")


class FakeContext:
    def __init__(self) -> None:
        self.cookies: List[Dict[str, str]] = [{"name": "session", "value": "stale"}]
        self.cleared = 0

    def clear_cookies(self) -> None:
        self.cookies.clear()
        self.cleared += 1


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str, has_text: Union[str, Pattern[str], None] = None, by_text: bool = False) -> None:
        self.page = page
        self.selector = selector
        self.has_text = has_text
        self.by_text = by_text

    @property
    def first(self) -> "FakeLocator":
        return self

    def _present(self) -> bool:
        if self.by_text:
            return any(self.selector.lower() in t.lower() for t in self.page.texts)
        if self.selector not in self.page.elements:
            return False
        text = self.page.elements[self.selector]
        if isinstance(self.has_text, str):
            # Playwright matches plain strings case-insensitively
            return self.has_text.lower() in text.lower()
        if self.has_text is not None:
            return self.has_text.search(text) is not None
        return True

    def filter(self, has_text: Union[str, Pattern[str], None] = None) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, has_text=has_text)

    def count(self) -> int:
        return 1 if self._present() else 0

    def wait_for(self, state: str = "visible", timeout: Optional[int] = None) -> None:
        self.page.calls.append(("wait_for", self.selector, state, timeout))
        want_present = state in ("attached", "visible")
        if self._present() != want_present:
            raise _timeout(f"{self.selector} to be {state}", timeout)

    def click(self, timeout: Optional[int] = None, force: bool = False) -> None:
        if not self._present():
            raise _timeout(f"{self.selector} to click", timeout)
        self.page.calls.append(("click", self.selector, force))
        hook = self.page.on_click.get(self.selector)
        if hook is not None:
            hook(self.page)

    def fill(self, value: str, timeout: Optional[int] = None) -> None:
        if not self._present():
            raise _timeout(f"{self.selector} to fill", timeout)
        self.page.calls.append(("fill", self.selector, value))
        self.page.filled[self.selector] = value

    def scroll_into_view_if_needed(self, timeout: Optional[int] = None) -> None:
        if not self._present():
            raise _timeout(f"{self.selector} to scroll", timeout)
        self.page.calls.append(("scroll", self.selector))

    def inner_text(self, timeout: Optional[int] = None) -> str:
        if not self._present():
            raise _timeout(f"{self.selector} text", timeout)
        return self.page.elements[self.selector]

    def select_option(self, value: str, timeout: Optional[int] = None) -> None:
        if not self._present():
            raise _timeout(f"{self.selector} to select", timeout)
        self.page.calls.append(("select", self.selector, value))


class FakePage:
    def __init__(self, url: str = "about:blank") -> None:
        self.url = url
        # a base with a path segment, as with a reseller-scoped deployment
        self.base_url = "https://app.example.test/reseller/"
        self.elements: Dict[str, str] = {}
        self.texts: Set[str] = set()
        self.title = ""
        self.calls: List[Tuple[Any, ...]] = []
        self.filled: Dict[str, str] = {}
        self.on_click: Dict[str, Callable[["FakePage"], None]] = {}
        self.on_goto: Dict[str, Callable[["FakePage"], None]] = {}
        self.function_results: Dict[str, bool] = {}
        self.context = FakeContext()
        self.screenshots: List[str] = []

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def get_by_text(self, text: str) -> FakeLocator:
        return FakeLocator(self, text, by_text=True)

    def goto(self, url: str, **kwargs: Any) -> None:
        self.calls.append(("goto", url))
        self.url = self.resolve(url)
        hook = self.on_goto.get(url)
        if hook is not None:
            hook(self)

    def resolve(self, url: str) -> str:
        """Same resolution as Playwright: new URL(url, base_url)."""
        return urljoin(self.base_url, url)

    def reload(self, **kwargs: Any) -> None:
        self.calls.append(("reload",))

    def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.calls.append(("evaluate", expression))
        return None

    def wait_for_url(self, url: Any, timeout: Optional[int] = None, wait_until: Optional[str] = None) -> None:
        self.calls.append(("wait_for_url", timeout))
        ok = url(self.url) if callable(url) else url == self.url
        if not ok:
            raise _timeout(f"url, currently {self.url}", timeout)

    def wait_for_function(self, expression: str, arg: Any = None, timeout: Optional[int] = None) -> None:
        self.calls.append(("wait_for_function", expression, arg, timeout))
        if not self.function_results.get(expression, False):
            raise _timeout("function", timeout)

    def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        self.screenshots.append(path or "")
        return b""

    def content(self) -> str:
        return "<html><body></body></html>"

    def called(self, name: str) -> List[Tuple[Any, ...]]:
        return [c for c in self.calls if c[0] == name]
