from __future__ import annotations

import logging

from . import constants as ui
from .config import Settings
from .data import Credentials
from .engine import Engine
from .errors import NotReady
from .locators import LocatorResolver

logger = logging.getLogger(__name__)


def wait_ready(engine: Engine, view: str, marker: str, timeout_ms: int) -> None:
    """Return once ``marker`` is visible, else raise ``NotReady`` for ``view``."""
    locators = LocatorResolver(engine)
    if not engine.wait_for_condition(lambda: bool(locators.visible(marker)), timeout_ms):
        raise NotReady(f"{view} marker {marker!r} not visible after {timeout_ms} ms", step=view)
    logger.debug("%s ready", view)


class LoginPage:
    def __init__(self, engine: Engine, settings: Settings) -> None:
        self.engine = engine
        self.settings = settings
        self.locators = LocatorResolver(engine)

    def open(self) -> None:
        self.engine.navigate(ui.LOGIN_PATH)
        wait_ready(self.engine, "login", ui.LOGIN_FORM, self.settings.navigation_timeout_ms)

    def login(self, username: str, password: str) -> None:
        for selector, value in ((ui.LOGIN_USERNAME, username), (ui.LOGIN_PASSWORD, password)):
            field = self.locators.one(selector, step="login")
            self.engine.clear(field)
            self.engine.fill(field, value)
        self.engine.click(self.locators.one(ui.LOGIN_SUBMIT, what="Login button", step="login"))

    def error_messages(self) -> list[str]:
        """Alert banner text first, then visible field errors."""
        messages: list[str] = []
        for selector in (ui.LOGIN_ALERT, ui.FIELD_ERROR):
            for handle in self.locators.visible(selector):
                text = self.engine.read_text(handle).strip()
                if text:
                    messages.append(text)
        return messages

    def wait_for_failure(self, timeout_ms: int | None = None) -> list[str]:
        if timeout_ms is None:
            timeout_ms = self.settings.action_timeout_ms
        self.engine.wait_for_condition(lambda: bool(self.error_messages()), timeout_ms)
        return self.error_messages()

    def is_on_login_page(self) -> bool:
        url = self.engine.current_url()
        return ui.LOGIN_URL_PART in url or url.rstrip("/") == self.settings.base_url


class SessionGate:
    """Establishes an authenticated session and reports when views are usable."""

    def __init__(self, engine: Engine, settings: Settings) -> None:
        self.engine = engine
        self.settings = settings
        self.login_page = LoginPage(engine, settings)
        self.locators = LocatorResolver(engine)

    def sign_in(self, credentials: Credentials) -> None:
        self.login_page.open()
        self.login_page.login(credentials.username, credentials.password)
        self.wait_for_dashboard()
        logger.info("signed in as %s", credentials.username)

    def wait_for_dashboard(self) -> None:
        timeout_ms = self.settings.navigation_timeout_ms
        wait_ready(self.engine, "sign-in", ui.DASHBOARD_BREADCRUMB, timeout_ms)

        def _cards_loaded() -> bool:
            cards = self.locators.visible(ui.QUICK_LAUNCH_CARD)
            return any(self.engine.read_text(c).strip() for c in cards)

        if not self.engine.wait_for_condition(_cards_loaded, timeout_ms):
            raise NotReady("dashboard quick launch cards did not load", step="sign-in")

    def sign_out(self) -> None:
        self.engine.click(self.locators.one(ui.USER_MENU, what="user menu", step="sign-out"))
        link = self.locators.wait_for_one(
            ui.LOGOUT_LINK, self.settings.action_timeout_ms, what="Logout link", step="sign-out"
        )
        self.engine.click(link)
        if not self.engine.wait_for_condition(
            lambda: ui.LOGIN_URL_PART in self.engine.current_url(),
            self.settings.navigation_timeout_ms,
        ):
            raise NotReady("login page not reached after logout", step="sign-out")
