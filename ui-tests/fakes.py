"""In-memory stand-ins for the browser and the OrangeHRM screens.

``FakeEngine`` implements the ``Engine`` protocol over a dictionary of
selector -> elements and a virtual clock: ``wait_for_condition`` advances
the clock instead of sleeping, firing any events scheduled by the fake apps.
``FakeLoginApp`` and ``FakeAdminApp`` register exactly the selectors the page
objects build, so the page objects run unchanged against them.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from hrm_ui import constants as ui
from hrm_ui.admin_users import SystemUser
from hrm_ui.data import Credentials
from hrm_ui.errors import StaleElement
from hrm_ui.fields import ADMIN_USER_FIELDS, FieldKind, FieldSpec
from hrm_ui.locators import field_error_selector, field_selector, select_option_selector


class FakeElement:
    def __init__(
        self,
        text: str = "",
        *,
        name: str = "",
        value: str = "",
        style: str | None = None,
        visible: bool = True,
        checked: bool = False,
        on_click: Callable[[], None] | None = None,
        on_fill: Callable[[str], None] | None = None,
    ) -> None:
        self.text = text
        self.name = name or text
        self.value = value
        self.style = style
        self.visible = visible
        self.checked = checked
        self.on_click = on_click
        self.on_fill = on_fill
        self.detached = False
        self.children: dict[str, list[FakeElement]] = {}

    def __repr__(self) -> str:
        return f"<FakeElement {self.name!r}>"

    def check_attached(self) -> None:
        if self.detached:
            raise StaleElement(f"{self!r} is detached")


class FakeEngine:
    def __init__(self, base_url: str = "https://hrm.test", tick_ms: int = 50) -> None:
        self.base_url = base_url
        self.tick_ms = tick_ms
        self.url = ""
        self.clock = 0.0
        self.elements: dict[str, list[FakeElement]] = {}
        self.routes: dict[str, Callable[[], None]] = {}
        self.actions: list[tuple[str, str]] = []
        self._events: list[tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()

    # DOM manipulation used by the fake apps

    def show(self, selector: str, *elements: FakeElement) -> None:
        self.elements[selector] = list(elements)

    def hide(self, selector: str) -> None:
        for element in self.elements.pop(selector, []):
            element.detached = True

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> None:
        heapq.heappush(self._events, (self.clock + delay_ms, next(self._seq), callback))

    def advance(self, ms: float) -> None:
        target = self.clock + ms
        while self._events and self._events[0][0] <= target:
            due, _, callback = heapq.heappop(self._events)
            self.clock = max(self.clock, due)
            callback()
        self.clock = target

    # Engine protocol

    def navigate(self, path: str) -> None:
        self.actions.append(("navigate", path))
        self.url = f"{self.base_url}{path}"
        for selector in list(self.elements):
            self.hide(selector)
        route = self.routes.get(path)
        if route is not None:
            route()

    def current_url(self) -> str:
        return self.url

    def locate(self, selector: str, within: FakeElement | None = None) -> list[FakeElement]:
        source = within.children if within is not None else self.elements
        return list(source.get(selector, ()))

    def fill(self, handle: FakeElement, text: str) -> None:
        handle.check_attached()
        self.actions.append(("fill", handle.name))
        handle.value = text
        if handle.on_fill:
            handle.on_fill(text)

    def clear(self, handle: FakeElement) -> None:
        handle.check_attached()
        handle.value = ""

    def click(self, handle: FakeElement) -> None:
        handle.check_attached()
        self.actions.append(("click", handle.name))
        if handle.on_click:
            handle.on_click()

    def wait_for_condition(self, predicate: Callable[[], bool], timeout_ms: int) -> bool:
        started = self.clock
        while True:
            try:
                done = predicate()
            except StaleElement:
                done = False
            if done:
                return True
            if self.clock - started >= timeout_ms:
                return False
            self.advance(self.tick_ms)

    def read_style(self, handle: FakeElement) -> str | None:
        handle.check_attached()
        return handle.style

    def read_text(self, handle: FakeElement) -> str:
        handle.check_attached()
        return handle.text

    def input_value(self, handle: FakeElement) -> str:
        handle.check_attached()
        return handle.value

    def is_visible(self, handle: FakeElement) -> bool:
        return handle.visible and not handle.detached

    def is_checked(self, handle: FakeElement) -> bool:
        handle.check_attached()
        return handle.checked

    def now_ms(self) -> float:
        return self.clock

    def clicked(self, name: str) -> int:
        return sum(1 for action, target in self.actions if action == "click" and target == name)


DEFAULT_USERS: tuple[SystemUser, ...] = (
    SystemUser("Admin", "Admin", "Paul Collings", "Enabled"),
    SystemUser("FMLName", "ESS", "Fiona Grace", "Enabled"),
    SystemUser("jdoe", "ESS", "John Doe", "Disabled"),
    SystemUser("ahmed.ali", "Admin", "Ahmed Ali", "Enabled"),
)

SELECT_CHOICES = {
    "User Role": ("Admin", "ESS"),
    "Status": ("Enabled", "Disabled"),
}


@dataclass
class _Field:
    spec: FieldSpec
    element: FakeElement


class FakeAdminApp:
    """Scripted Admin > Users screen.

    Mirrors the behavior the suite relies on: the listing shows every user on
    load, employee names must be picked from suggestions (otherwise the form
    reports "Invalid" on submit), a search shows a loader before rendering
    rows, and an empty result shows both the "No Records Found" marker and
    an info toast.
    """

    def __init__(
        self,
        engine: FakeEngine,
        users: Iterable[SystemUser] = DEFAULT_USERS,
        *,
        search_delay_ms: int = 200,
        suggest_delay_ms: int = 150,
        toggle_delay_ms: int = 100,
        eager_employee_validation: bool = False,
        show_loader: bool = True,
        no_records_toast: str | None = ui.NO_RECORDS_TEXT,
    ) -> None:
        self.engine = engine
        self.users = tuple(users)
        self.search_delay_ms = search_delay_ms
        self.suggest_delay_ms = suggest_delay_ms
        self.toggle_delay_ms = toggle_delay_ms
        self.eager_employee_validation = eager_employee_validation
        self.show_loader = show_loader
        self.no_records_toast = no_records_toast
        self.searches = 0
        self.selected_employee: str | None = None
        self.fields: dict[str, _Field] = {}
        self.panel = FakeElement(name="panel")
        engine.routes[ui.ADMIN_USERS_PATH] = self.mount

    def mount(self) -> None:
        e = self.engine
        self.selected_employee = None
        self.panel = FakeElement(name="panel")
        e.show(ui.FILTER_PANEL, self.panel)
        e.show(ui.FILTER_TOGGLE, FakeElement(name="toggle", on_click=self._on_toggle))
        e.show(ui.SEARCH_BUTTON, FakeElement("Search", on_click=self._on_search))
        e.show(ui.RESET_BUTTON, FakeElement("Reset", on_click=self._on_reset))
        for spec in ADMIN_USER_FIELDS:
            if spec.kind is FieldKind.SELECT:
                element = FakeElement(
                    ui.SELECT_PLACEHOLDER, name=spec.label, on_click=self._opener(spec.label)
                )
            elif spec.kind is FieldKind.AUTOCOMPLETE:
                element = FakeElement(name=spec.label, on_fill=self._on_employee_typed)
            else:
                element = FakeElement(name=spec.label)
            self.fields[spec.label] = _Field(spec, element)
            e.show(field_selector(spec.query, spec.kind), element)
        self._render(self.users)

    # Helpers for tests

    def value(self, label: str) -> str:
        f = self.fields[label]
        return f.element.text if f.spec.kind is FieldKind.SELECT else f.element.value

    def show_field_error(self, label: str, message: str) -> None:
        self.engine.show(field_error_selector(label), FakeElement(message, name=f"{label} error"))

    def show_toast(self, message: str, *, error: bool = False) -> None:
        e = self.engine
        e.show(ui.ERROR_TOAST if error else ui.INFO_TOAST, FakeElement(message, name="toast"))
        e.show(ui.TOAST_CLOSE, FakeElement(name="toast-close", on_click=self._close_toasts))

    def panel_hidden(self) -> bool:
        return "display: none" in (self.panel.style or "")

    # Event handlers

    def _on_toggle(self) -> None:
        def flip() -> None:
            self.panel.style = None if self.panel_hidden() else "display: none;"

        self.engine.schedule(self.toggle_delay_ms, flip)

    def _opener(self, label: str) -> Callable[[], None]:
        def open_dropdown() -> None:
            for choice in SELECT_CHOICES[label]:
                self.engine.show(
                    select_option_selector(label, choice),
                    FakeElement(choice, name=f"{label}:{choice}", on_click=self._chooser(label, choice)),
                )

        return open_dropdown

    def _chooser(self, label: str, choice: str) -> Callable[[], None]:
        def choose() -> None:
            self.fields[label].element.text = choice
            for other in SELECT_CHOICES[label]:
                self.engine.hide(select_option_selector(label, other))

        return choose

    def _on_employee_typed(self, text: str) -> None:
        e = self.engine
        self.selected_employee = None
        e.hide(field_error_selector("Employee Name"))
        e.hide(ui.AUTOCOMPLETE_OPTION)
        if not text.strip():
            return
        e.show(ui.AUTOCOMPLETE_OPTION, FakeElement(ui.AUTOCOMPLETE_PENDING))

        def suggest() -> None:
            matches = sorted(
                {u.employee_name for u in self.users if text.casefold() in u.employee_name.casefold()}
            )
            options = [
                FakeElement(name_, name=f"suggestion:{name_}", on_click=self._picker(name_))
                for name_ in matches
            ] or [FakeElement(ui.AUTOCOMPLETE_EMPTY)]
            e.show(ui.AUTOCOMPLETE_OPTION, *options)
            if not matches and self.eager_employee_validation:
                self.show_field_error("Employee Name", "Invalid")

        e.schedule(self.suggest_delay_ms, suggest)

    def _picker(self, employee: str) -> Callable[[], None]:
        def pick() -> None:
            self.selected_employee = employee
            self.fields["Employee Name"].element.value = employee
            self.engine.hide(ui.AUTOCOMPLETE_OPTION)

        return pick

    def _on_search(self) -> None:
        e = self.engine
        typed = self.fields["Employee Name"].element.value
        e.hide(ui.AUTOCOMPLETE_OPTION)
        if typed.strip() and self.selected_employee is None:
            self.show_field_error("Employee Name", "Invalid")
            return
        self.searches += 1
        if self.show_loader:
            e.show(ui.TABLE_LOADER, FakeElement(name="loader"))
        criteria = {label: self.value(label) for label in self.fields}
        e.schedule(self.search_delay_ms, lambda: self._finish_search(criteria))

    def _finish_search(self, criteria: dict[str, str]) -> None:
        def keep(user: SystemUser) -> bool:
            username = criteria["Username"]
            role = criteria["User Role"]
            status = criteria["Status"]
            if username and user.username.casefold() != username.casefold():
                return False
            if role != ui.SELECT_PLACEHOLDER and user.user_role != role:
                return False
            if status != ui.SELECT_PLACEHOLDER and user.status != status:
                return False
            if self.selected_employee and user.employee_name != self.selected_employee:
                return False
            return True

        self.engine.hide(ui.TABLE_LOADER)
        matches = [u for u in self.users if keep(u)]
        self._render(matches)
        if not matches and self.no_records_toast:
            self.show_toast(self.no_records_toast)

    def _on_reset(self) -> None:
        def reset() -> None:
            self.selected_employee = None
            for f in self.fields.values():
                if f.spec.kind is FieldKind.SELECT:
                    f.element.text = ui.SELECT_PLACEHOLDER
                else:
                    f.element.value = ""
                self.engine.hide(field_error_selector(f.spec.label))

        self.engine.schedule(self.search_delay_ms, reset)

    def _close_toasts(self) -> None:
        for selector in (ui.INFO_TOAST, ui.ERROR_TOAST, ui.TOAST_CLOSE):
            self.engine.hide(selector)

    def _render(self, users: Iterable[SystemUser]) -> None:
        rows = []
        for user in users:
            row = FakeElement(name=f"row:{user.username}")
            cells = ("", user.username, user.user_role, user.employee_name, user.status, "")
            row.children[ui.TABLE_CELL] = [FakeElement(c) for c in cells]
            rows.append(row)
        self.engine.hide(ui.TABLE_ROW)
        self.engine.hide(ui.NO_RECORDS_MARKER)
        if rows:
            self.engine.show(ui.TABLE_ROW, *rows)
        else:
            self.engine.show(ui.NO_RECORDS_MARKER, FakeElement(ui.NO_RECORDS_TEXT))


class FakeLoginApp:
    """Login form and dashboard for one valid account."""

    def __init__(self, engine: FakeEngine, valid: Credentials, *, load_delay_ms: int = 300) -> None:
        self.engine = engine
        self.valid = valid
        self.load_delay_ms = load_delay_ms
        self.dashboard_loads = True
        self._username = FakeElement(name="login-username")
        self._password = FakeElement(name="login-password")
        engine.routes[ui.LOGIN_PATH] = self.mount
        engine.routes[ui.DASHBOARD_PATH] = self._mount_dashboard

    def mount(self) -> None:
        e = self.engine
        self._username = FakeElement(name="login-username")
        self._password = FakeElement(name="login-password")
        e.show(ui.LOGIN_FORM, FakeElement(name="login-form"))
        e.show(ui.LOGIN_USERNAME, self._username)
        e.show(ui.LOGIN_PASSWORD, self._password)
        e.show(ui.LOGIN_SUBMIT, FakeElement("Login", on_click=self._on_submit))

    def _on_submit(self) -> None:
        e = self.engine
        e.hide(ui.FIELD_ERROR)
        e.hide(ui.LOGIN_ALERT)
        username, password = self._username.value, self._password.value
        missing = [not username.strip(), not password.strip()]
        if any(missing):
            e.show(ui.FIELD_ERROR, *[FakeElement("Required") for flag in missing if flag])
            return
        if Credentials(username, password) != self.valid:
            e.schedule(self.load_delay_ms, lambda: e.show(ui.LOGIN_ALERT, FakeElement("Invalid credentials")))
            return
        e.schedule(self.load_delay_ms, lambda: e.navigate(ui.DASHBOARD_PATH))

    def _mount_dashboard(self) -> None:
        e = self.engine
        e.show(ui.DASHBOARD_BREADCRUMB, FakeElement("Dashboard"))
        e.show(ui.USER_MENU, FakeElement(name="user-menu", on_click=self._open_menu))
        if self.dashboard_loads:
            e.schedule(
                self.load_delay_ms,
                lambda: e.show(
                    ui.QUICK_LAUNCH_CARD, FakeElement("Assign Leave"), FakeElement("Leave List")
                ),
            )

    def _open_menu(self) -> None:
        self.engine.show(
            ui.LOGOUT_LINK,
            FakeElement("Logout", on_click=lambda: self.engine.navigate(ui.LOGIN_PATH)),
        )
