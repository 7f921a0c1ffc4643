from __future__ import annotations

import pytest

from hrm_ui.admin_users import AdminUserSearchPage
from hrm_ui.data import SEARCH_INPUTS
from hrm_ui.outcome import NoRecords, Results

pytestmark = pytest.mark.e2e


@pytest.mark.parametrize("role", SEARCH_INPUTS.user_roles)
def test_t05_role_filter(admin_users: AdminUserSearchPage, role: str) -> None:
    outcome = admin_users.search(user_role=role)
    assert isinstance(outcome, Results), outcome
    assert {u.user_role for u in admin_users.users(outcome)} == {role}


def test_t05_status_filter(admin_users: AdminUserSearchPage) -> None:
    outcome = admin_users.search(status="Enabled")
    assert isinstance(outcome, Results), outcome
    assert {u.status for u in admin_users.users(outcome)} == {"Enabled"}


def test_t05_username_role_and_status_combined(admin_users: AdminUserSearchPage) -> None:
    outcome = admin_users.search(username="admin", user_role="Admin", status="Enabled")
    assert isinstance(outcome, Results), outcome
    assert admin_users.users(outcome)[0].username.casefold() == "admin"


def test_t05_conflicting_filters_report_no_records(admin_users: AdminUserSearchPage) -> None:
    outcome = admin_users.search(username="Admin", user_role="ESS")
    assert isinstance(outcome, NoRecords), outcome
    assert "No Records Found" in outcome.message
