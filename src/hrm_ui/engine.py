from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, Protocol

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .config import Settings
from .errors import StaleElement

logger = logging.getLogger(__name__)

Handle = Any


class Engine(Protocol):
    """Capability set the page objects need from an automation backend."""

    def navigate(self, path: str) -> None: ...

    def current_url(self) -> str: ...

    def locate(self, selector: str, within: Handle | None = None) -> list[Handle]: ...

    def fill(self, handle: Handle, text: str) -> None: ...

    def clear(self, handle: Handle) -> None: ...

    def click(self, handle: Handle) -> None: ...

    def wait_for_condition(self, predicate: Callable[[], bool], timeout_ms: int) -> bool: ...

    def read_style(self, handle: Handle) -> str | None: ...

    def read_text(self, handle: Handle) -> str: ...

    def input_value(self, handle: Handle) -> str: ...

    def is_visible(self, handle: Handle) -> bool: ...

    def is_checked(self, handle: Handle) -> bool: ...

    def now_ms(self) -> float: ...


class PlaywrightEngine:
    """``Engine`` backed by a Playwright sync ``Page``.

    Handles are single-element locators (``locator.nth(i)``). Reads use a
    short timeout so that an element detached mid-poll surfaces as
    ``StaleElement`` instead of blocking for the full action timeout.
    """

    def __init__(self, page: Page, settings: Settings, read_timeout_ms: int = 1000) -> None:
        self.page = page
        self.settings = settings
        self._read_timeout_ms = read_timeout_ms
        page.set_default_timeout(settings.action_timeout_ms)
        page.set_default_navigation_timeout(settings.navigation_timeout_ms)

    def navigate(self, path: str) -> None:
        url = path if path.startswith("http") else f"{self.settings.base_url}{path}"
        logger.debug("navigate %s", url)
        self.page.goto(url)
        self.page.wait_for_load_state("networkidle")

    def current_url(self) -> str:
        return self.page.url

    def locate(self, selector: str, within: Locator | None = None) -> list[Locator]:
        root = within if within is not None else self.page
        loc = root.locator(selector)
        return [loc.nth(i) for i in range(loc.count())]

    def fill(self, handle: Locator, text: str) -> None:
        handle.fill(text)

    def clear(self, handle: Locator) -> None:
        handle.clear()

    def click(self, handle: Locator) -> None:
        handle.click()

    def wait_for_condition(self, predicate: Callable[[], bool], timeout_ms: int) -> bool:
        deadline = time.monotonic() + timeout_ms / 1000
        while True:
            try:
                if predicate():
                    return True
            except StaleElement as exc:
                logger.debug("condition re-polled after stale read: %s", exc)
            if time.monotonic() >= deadline:
                return False
            self.page.wait_for_timeout(self.settings.poll_interval_ms)

    def read_style(self, handle: Locator) -> str | None:
        return self._read(handle, lambda h: h.get_attribute("style", timeout=self._read_timeout_ms))

    def read_text(self, handle: Locator) -> str:
        return self._read(handle, lambda h: h.inner_text(timeout=self._read_timeout_ms)) or ""

    def input_value(self, handle: Locator) -> str:
        return self._read(handle, lambda h: h.input_value(timeout=self._read_timeout_ms))

    def is_visible(self, handle: Locator) -> bool:
        return handle.is_visible()

    def is_checked(self, handle: Locator) -> bool:
        return self._read(handle, lambda h: h.is_checked(timeout=self._read_timeout_ms))

    def now_ms(self) -> float:
        return time.monotonic() * 1000

    def _read(self, handle: Locator, reader: Callable[[Locator], Any]) -> Any:
        try:
            return reader(handle)
        except PlaywrightTimeoutError:
            raise StaleElement(f"element {handle} is no longer attached") from None
        except PlaywrightError as e:
            if "detached" in str(e).lower():
                raise StaleElement(f"element {handle} detached during read") from e
            raise
