from __future__ import annotations

from dataclasses import dataclass

from . import constants as ui
from .errors import NotReady
from .fields import ADMIN_USER_FIELDS
from .outcome import Results, ResultRow, SearchOutcome
from .search import SearchPage
from .session import wait_ready


@dataclass(frozen=True)
class SystemUser:
    username: str
    user_role: str
    employee_name: str
    status: str

    @classmethod
    def from_row(cls, row: ResultRow) -> SystemUser:
        # Column 0 is the row checkbox, the last one holds the action buttons
        return cls(row.column(1), row.column(2), row.column(3), row.column(4))


class AdminUserSearchPage(SearchPage):
    """Admin > User Management > Users."""

    fields = ADMIN_USER_FIELDS

    def open(self) -> None:
        self.engine.navigate(ui.ADMIN_USERS_PATH)
        url = self.engine.current_url()
        if ui.ADMIN_USERS_URL_PART not in url:
            raise NotReady(f"expected the system users page, landed on {url}", step="open")
        wait_ready(self.engine, "open", ui.FILTER_PANEL, self.settings.navigation_timeout_ms)

    def search(
        self,
        *,
        username: str | None = None,
        user_role: str | None = None,
        employee_name: str | None = None,
        status: str | None = None,
        timeout_ms: int | None = None,
    ) -> SearchOutcome:
        given = {
            "username": username,
            "user_role": user_role,
            "employee_name": employee_name,
            "status": status,
        }
        criteria = {key: value for key, value in given.items() if value is not None}
        return self.submit(criteria, timeout_ms)

    @staticmethod
    def users(outcome: SearchOutcome) -> list[SystemUser]:
        if not isinstance(outcome, Results):
            return []
        return [SystemUser.from_row(row) for row in outcome.rows]
