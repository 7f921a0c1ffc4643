from __future__ import annotations

import pytest

from hrm_ui.admin_users import AdminUserSearchPage
from hrm_ui.outcome import Results

pytestmark = pytest.mark.e2e


def test_t02_panel_starts_visible_and_toggles(admin_users: AdminUserSearchPage) -> None:
    assert admin_users.is_panel_visible()
    admin_users.toggle()
    assert not admin_users.is_panel_visible()
    admin_users.toggle()
    assert admin_users.is_panel_visible()


def test_t02_default_state(admin_users: AdminUserSearchPage) -> None:
    assert admin_users.is_default_state()


def test_t02_blank_search_lists_users(admin_users: AdminUserSearchPage) -> None:
    outcome = admin_users.submit({})
    assert isinstance(outcome, Results)
    assert outcome.row_count > 0


def test_t02_reset_clears_criteria(admin_users: AdminUserSearchPage) -> None:
    admin_users.search(username="Admin", user_role="Admin", status="Enabled")
    assert not admin_users.is_default_state()
    admin_users.reset_criteria()
    assert admin_users.is_default_state()
