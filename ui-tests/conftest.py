from __future__ import annotations

import pathlib
import shutil
from collections.abc import Generator

import pytest
from playwright.sync_api import Browser, Page, sync_playwright

from hrm_ui.admin_users import AdminUserSearchPage
from hrm_ui.config import Settings
from hrm_ui.data import SEARCH_INPUTS, Credentials, SearchInputs, admin_credentials
from hrm_ui.engine import PlaywrightEngine
from hrm_ui.logging_config import setup_logging
from hrm_ui.session import SessionGate

from fakes import FakeAdminApp, FakeEngine, FakeLoginApp


@pytest.fixture(scope="session")
def settings() -> Settings:
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    return settings


@pytest.fixture(scope="session")
def credentials(settings: Settings) -> Credentials:
    return admin_credentials(settings)


@pytest.fixture(scope="session")
def search_inputs() -> SearchInputs:
    return SEARCH_INPUTS


@pytest.fixture(scope="session")
def browser(settings: Settings) -> Browser:
    with sync_playwright() as p:
        browser_type = getattr(p, settings.browser)
        browser = browser_type.launch(headless=settings.headless, slow_mo=settings.slow_mo_ms)
        try:
            yield browser
        finally:
            browser.close()


@pytest.fixture()
def page(
    browser: Browser, settings: Settings, request: pytest.FixtureRequest
) -> Generator[Page, None, None]:
    artifacts_dir = pathlib.Path(settings.artifacts_dir)
    video_dir = artifacts_dir / "video"
    artifacts_dir.mkdir(parents=True, exist_ok=True)
    video_dir.mkdir(parents=True, exist_ok=True)

    # One isolated context per test: no cookies or storage shared between flows
    context = browser.new_context(record_video_dir=str(video_dir), **settings.context_options())
    context.tracing.start(screenshots=True, snapshots=True, sources=True)

    page = context.new_page()
    try:
        yield page
    finally:
        rep_call = getattr(request.node, "rep_call", None)
        failed = bool(rep_call and getattr(rep_call, "failed", False))
        try:
            if failed:
                page.screenshot(
                    path=str(artifacts_dir / f"{request.node.name}-failure.png"), full_page=True
                )
                context.tracing.stop(path=str(artifacts_dir / f"{request.node.name}-trace.zip"))
            else:
                context.tracing.stop()
        except Exception:
            # Best-effort; avoid failing teardown on tracing errors
            pass

        # Close context to finalize video files, keep them for failures only
        try:
            context.close()
        finally:
            try:
                src = page.video.path() if page.video else None
                if src and failed:
                    shutil.move(str(src), str(video_dir / f"{request.node.name}.webm"))
                elif src:
                    pathlib.Path(src).unlink(missing_ok=True)
            except Exception:
                pass


@pytest.fixture()
def engine(page: Page, settings: Settings) -> PlaywrightEngine:
    return PlaywrightEngine(page, settings)


@pytest.fixture()
def gate(engine: PlaywrightEngine, settings: Settings, credentials: Credentials) -> SessionGate:
    gate = SessionGate(engine, settings)
    gate.sign_in(credentials)
    return gate


@pytest.fixture()
def admin_users(
    gate: SessionGate, engine: PlaywrightEngine, settings: Settings
) -> AdminUserSearchPage:
    users_page = AdminUserSearchPage(engine, settings)
    users_page.open()
    return users_page


# Offline fixtures: same page objects, scripted DOM


@pytest.fixture()
def fake_settings() -> Settings:
    return Settings(base_url="https://hrm.test")


@pytest.fixture()
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture()
def fake_admin(fake_engine: FakeEngine) -> FakeAdminApp:
    return FakeAdminApp(fake_engine)


@pytest.fixture()
def fake_login(fake_engine: FakeEngine) -> FakeLoginApp:
    return FakeLoginApp(fake_engine, Credentials("Admin", "admin123"))


@pytest.fixture()
def offline_admin_users(
    fake_engine: FakeEngine, fake_admin: FakeAdminApp, fake_settings: Settings
) -> AdminUserSearchPage:
    users_page = AdminUserSearchPage(fake_engine, fake_settings)
    users_page.open()
    return users_page


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo):
    # Allow fixtures to inspect test outcome via request.node.rep_* attributes
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)
