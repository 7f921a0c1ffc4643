from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_BROWSERS = {"chromium", "firefox", "webkit"}


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def _bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ValueError(f"{key} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    base_url: str = "https://opensource-demo.orangehrmlive.com"
    admin_username: str = "Admin"
    admin_password: str = "admin123"
    browser: str = "chromium"
    headless: bool = True
    slow_mo_ms: int = 0
    action_timeout_ms: int = 10000
    navigation_timeout_ms: int = 30000
    search_timeout_ms: int = 3000
    suggestion_timeout_ms: int = 3000
    settle_ms: int = 500
    poll_interval_ms: int = 100
    artifacts_dir: str = "artifacts/ui-e2e"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        When ``env`` is omitted the process environment is used, after loading
        a ``.env`` file from the working directory if one exists. Existing
        variables always win over ``.env`` entries.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        browser = env.get("BROWSER", cls.browser).strip().lower() or cls.browser
        if browser not in _BROWSERS:
            raise ValueError(f"BROWSER must be one of {sorted(_BROWSERS)}, got {browser!r}")

        return cls(
            base_url=(env.get("BASE_URL") or cls.base_url).rstrip("/"),
            admin_username=env.get("ADMIN_USERNAME") or cls.admin_username,
            admin_password=env.get("ADMIN_PASSWORD") or cls.admin_password,
            browser=browser,
            headless=_bool(env, "HEADLESS", cls.headless),
            slow_mo_ms=_int(env, "SLOW_MO", cls.slow_mo_ms),
            action_timeout_ms=_int(env, "ACTION_TIMEOUT", cls.action_timeout_ms),
            navigation_timeout_ms=_int(env, "NAVIGATION_TIMEOUT", cls.navigation_timeout_ms),
            search_timeout_ms=_int(env, "SEARCH_TIMEOUT", cls.search_timeout_ms),
            suggestion_timeout_ms=_int(env, "SUGGESTION_TIMEOUT", cls.suggestion_timeout_ms),
            settle_ms=_int(env, "SETTLE_MS", cls.settle_ms),
            poll_interval_ms=_int(env, "POLL_INTERVAL_MS", cls.poll_interval_ms),
            artifacts_dir=env.get("ARTIFACTS_DIR") or cls.artifacts_dir,
            log_level=(env.get("LOG_LEVEL") or cls.log_level).upper(),
        )

    def context_options(self) -> dict[str, Any]:
        """Keyword arguments for ``Browser.new_context``."""
        return {
            "base_url": self.base_url,
            "viewport": {"width": 1280, "height": 720},
            "locale": "en-US",
            "timezone_id": "America/New_York",
            "ignore_https_errors": True,
            # Keep the demo from serving translated labels
            "extra_http_headers": {"Accept-Language": "en-US,en;q=0.9"},
        }
