from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping

from . import constants as ui
from .config import Settings
from .engine import Engine
from .errors import StepTimeout
from .fields import FieldKind, FieldSpec, find_field
from .locators import LocatorResolver, field_error_selector, select_option_selector
from .outcome import (
    ResultRow,
    SearchOutcome,
    UiSnapshot,
    ValidationError,
    classify,
    validation_messages,
)
from .visibility import is_visible

logger = logging.getLogger(__name__)

SearchCriteria = Mapping[str, str | bool]


class SearchPage:
    """A list view with a collapsible filter panel, a results table and toasts.

    Subclasses declare their filter fields in ``fields`` (definition order
    matters for validation messages). One ``submit`` may run per instance at
    a time; give each parallel flow its own page and browser context.
    """

    fields: tuple[FieldSpec, ...] = ()

    def __init__(self, engine: Engine, settings: Settings) -> None:
        self.engine = engine
        self.settings = settings
        self.locators = LocatorResolver(engine)
        self._in_flight = threading.Lock()

    # Panel

    def is_panel_visible(self) -> bool:
        panel = self.locators.one(ui.FILTER_PANEL, what="search panel", step="toggle")
        return is_visible(self.engine.read_style(panel))

    def toggle(self) -> None:
        before = self.is_panel_visible()
        button = self.locators.one(ui.FILTER_TOGGLE, what="search panel toggle", step="toggle")
        self.engine.click(button)
        self._await(
            lambda: self.is_panel_visible() != before,
            self.settings.action_timeout_ms,
            step="toggle",
            what=f"search panel to become {'hidden' if before else 'visible'}",
        )
        logger.debug("search panel visible=%s", not before)

    # Criteria

    def set_field(self, name: str, value: str | bool) -> None:
        spec = find_field(self.fields, name)
        if spec.kind is FieldKind.SWITCH:
            if not isinstance(value, bool):
                raise TypeError(f"{spec.label} expects a boolean, got {value!r}")
            self._set_switch(spec, value)
            return
        if not isinstance(value, str):
            raise TypeError(f"{spec.label} expects text, got {value!r}")
        if spec.kind is FieldKind.SELECT:
            self._select_option(spec, value)
        elif spec.kind is FieldKind.AUTOCOMPLETE:
            self._fill_autocomplete(spec, value)
        else:
            self._fill_text(spec, value)

    def fill_criteria(self, criteria: SearchCriteria) -> None:
        for name, value in criteria.items():
            logger.debug("fill %s=%r", name, value)
            self.set_field(name, value)

    def field_value(self, name: str) -> str | bool:
        spec = find_field(self.fields, name)
        handle = self.locators.resolve_one(spec.query, spec.kind, step="read")
        if spec.kind is FieldKind.SWITCH:
            return self.engine.is_checked(handle)
        if spec.kind is FieldKind.SELECT:
            return self.engine.read_text(handle).strip()
        return self.engine.input_value(handle)

    def is_default_state(self) -> bool:
        for spec in self.fields:
            if spec.kind is FieldKind.SWITCH:
                continue
            value = str(self.field_value(spec.key)).strip()
            if value and value != ui.SELECT_PLACEHOLDER:
                return False
        return True

    def reset_criteria(self) -> None:
        button = self.locators.one(ui.RESET_BUTTON, what="Reset button", step="reset")
        self.engine.click(button)
        self._await(
            self.is_default_state,
            self.settings.action_timeout_ms,
            step="reset",
            what="all search fields to clear",
        )

    # Observation

    def field_errors(self) -> tuple[str, ...]:
        errors: list[str] = []
        for spec in self.fields:
            for handle in self.locators.visible(field_error_selector(spec.label)):
                errors.append(self.engine.read_text(handle))
        return tuple(errors)

    def result_rows(self) -> tuple[ResultRow, ...]:
        rows = []
        for row in self.locators.visible(ui.TABLE_ROW):
            cells = self.engine.locate(ui.TABLE_CELL, within=row)
            rows.append(ResultRow(tuple(self.engine.read_text(c).strip() for c in cells)))
        return tuple(rows)

    def snapshot(self) -> UiSnapshot:
        error_toasts = [self.engine.read_text(h) for h in self.locators.visible(ui.ERROR_TOAST)]
        markers = [self.engine.read_text(h) for h in self.locators.visible(ui.NO_RECORDS_MARKER)]
        return UiSnapshot(
            field_errors=self.field_errors(),
            error_toast=next((t for t in error_toasts if t.strip()), None),
            info_toasts=tuple(
                self.engine.read_text(h) for h in self.locators.visible(ui.INFO_TOAST)
            ),
            no_records_marker=next((m for m in markers if m.strip()), None),
            busy=bool(self.locators.visible(ui.TABLE_LOADER)),
            rows=self.result_rows(),
        )

    # Submission

    def submit(self, criteria: SearchCriteria, timeout_ms: int | None = None) -> SearchOutcome:
        """Fill ``criteria``, run the search and classify what the page shows.

        Field errors already present after filling short-circuit the search.
        Otherwise the call waits up to ``timeout_ms`` for results, a
        no-records signal or a validation error, whichever appears first, and
        raises ``StepTimeout`` when none does.
        """
        if timeout_ms is None:
            timeout_ms = self.settings.search_timeout_ms
        if not self._in_flight.acquire(blocking=False):
            raise RuntimeError("a search is already in flight on this page")
        try:
            self.fill_criteria(criteria)

            pending = validation_messages(UiSnapshot(field_errors=self.field_errors()))
            if pending:
                logger.info("search not submitted, validation errors: %s", pending)
                return ValidationError(tuple(pending))

            self._dismiss_toasts()
            baseline = self.snapshot()
            button = self.locators.one(ui.SEARCH_BUTTON, what="Search button", step="submit")
            self.engine.click(button)
            outcome = self._await_outcome(baseline, timeout_ms)
            logger.info("search %s -> %s", dict(criteria), type(outcome).__name__)
            return outcome
        finally:
            self._in_flight.release()

    def _await_outcome(self, baseline: UiSnapshot, timeout_ms: int) -> SearchOutcome:
        started = self.engine.now_ms()
        seen_busy = False
        settled: list[SearchOutcome] = []

        def _settled() -> bool:
            nonlocal seen_busy
            snap = self.snapshot()
            seen_busy = seen_busy or snap.busy
            outcome = classify(snap)
            if outcome is None:
                return False
            # An unchanged page may still be showing the previous search
            fresh = seen_busy or snap != baseline
            if not isinstance(outcome, ValidationError) and not fresh:
                if self.engine.now_ms() - started < self.settings.settle_ms:
                    return False
            settled.append(outcome)
            return True

        if not self.engine.wait_for_condition(_settled, timeout_ms):
            raise StepTimeout(
                "no results, no-records signal or validation error appeared",
                step="submit",
                timeout_ms=timeout_ms,
            )
        return settled[0]

    def _dismiss_toasts(self) -> None:
        closers = self.locators.visible(ui.TOAST_CLOSE)
        if not closers:
            return
        for closer in closers:
            self.engine.click(closer)
        gone = self.engine.wait_for_condition(
            lambda: not self.locators.visible(ui.TOAST_CLOSE), self.settings.action_timeout_ms
        )
        if not gone:
            logger.warning("stale notifications still visible before submit")

    # Field setters

    def _fill_text(self, spec: FieldSpec, value: str) -> None:
        handle = self.locators.resolve_one(spec.query, spec.kind, step="fill")
        self.engine.clear(handle)
        self.engine.fill(handle, value)
        self._await(
            lambda: self.engine.input_value(handle) == value,
            self.settings.action_timeout_ms,
            step="fill",
            what=f"{spec.label} to hold {value!r}",
        )

    def _fill_autocomplete(self, spec: FieldSpec, value: str) -> None:
        self._fill_text(spec, value)
        if not value.strip():
            return

        def _suggestions_loaded() -> bool:
            options = self.locators.visible(ui.AUTOCOMPLETE_OPTION)
            texts = [self.engine.read_text(o).strip() for o in options]
            return bool(texts) and ui.AUTOCOMPLETE_PENDING not in texts

        if not self.engine.wait_for_condition(
            _suggestions_loaded, self.settings.suggestion_timeout_ms
        ):
            logger.debug("no suggestions offered for %s=%r", spec.label, value)
            return
        first = self.locators.visible(ui.AUTOCOMPLETE_OPTION)[0]
        picked = self.engine.read_text(first).strip()
        if picked == ui.AUTOCOMPLETE_EMPTY:
            logger.debug("no matching suggestion for %s=%r", spec.label, value)
            return
        self.engine.click(first)
        handle = self.locators.resolve_one(spec.query, spec.kind, step="fill")
        self._await(
            lambda: self.engine.input_value(handle) == picked
            and not self.locators.visible(ui.AUTOCOMPLETE_OPTION),
            self.settings.action_timeout_ms,
            step="fill",
            what=f"{spec.label} to commit suggestion {picked!r}",
        )

    def _select_option(self, spec: FieldSpec, value: str) -> None:
        handle = self.locators.resolve_one(spec.query, spec.kind, step="fill")
        self.engine.click(handle)
        option = self.locators.wait_for_one(
            select_option_selector(spec.label, value),
            self.settings.action_timeout_ms,
            what=f"{spec.label} option {value!r}",
            step="fill",
        )
        self.engine.click(option)
        self._await(
            lambda: self.engine.read_text(handle).strip() == value,
            self.settings.action_timeout_ms,
            step="fill",
            what=f"{spec.label} to show {value!r}",
        )

    def _set_switch(self, spec: FieldSpec, value: bool) -> None:
        handle = self.locators.resolve_one(spec.query, spec.kind, step="fill")
        if self.engine.is_checked(handle) == value:
            return
        self.engine.click(handle)
        self._await(
            lambda: self.engine.is_checked(handle) == value,
            self.settings.action_timeout_ms,
            step="fill",
            what=f"{spec.label} switch to be {'on' if value else 'off'}",
        )

    def _await(self, predicate: Callable[[], bool], timeout_ms: int, *, step: str, what: str) -> None:
        if not self.engine.wait_for_condition(predicate, timeout_ms):
            raise StepTimeout(f"timed out waiting for {what}", step=step, timeout_ms=timeout_ms)
