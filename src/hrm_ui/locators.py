from __future__ import annotations

import logging

from .engine import Engine, Handle
from .errors import AmbiguousMatch, ElementNotFound
from .fields import FieldKind, FieldQuery, Strategy

logger = logging.getLogger(__name__)

_INPUT_KINDS = (FieldKind.TEXT, FieldKind.AUTOCOMPLETE, FieldKind.SWITCH)


def xpath_literal(value: str) -> str:
    """Quote ``value`` as an XPath 1.0 string literal."""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{p}'" for p in parts) + ")"


def css_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _input_group(label: str) -> str:
    return (
        f"//label[normalize-space()={xpath_literal(label)}]"
        "/ancestor::div[contains(@class,'oxd-input-group')]"
    )


def field_selector(query: FieldQuery, kind: FieldKind) -> str:
    name = query.semantic_name
    if query.strategy is Strategy.BY_LABEL:
        if kind is FieldKind.SWITCH:
            return (
                f"xpath=//p[normalize-space()={xpath_literal(name)}]"
                "/following::input[@type='checkbox'][1]"
            )
        if kind is FieldKind.SELECT:
            return f"xpath={_input_group(name)}//div[contains(@class,'oxd-select-text-input')]"
        return f"xpath={_input_group(name)}//input"

    if kind not in _INPUT_KINDS:
        raise ValueError(f"{query.strategy.name} cannot locate a {kind.value} field")
    if query.strategy is Strategy.BY_NAME:
        return f"input[name={css_string(name)}]"
    return f"input[placeholder*={css_string(name)}]"


def field_error_selector(label: str) -> str:
    return (
        f"xpath={_input_group(label)}"
        "/span[contains(@class,'oxd-input-field-error-message')]"
    )


def select_option_selector(label: str, option: str) -> str:
    return (
        f"xpath={_input_group(label)}//div[contains(@class,'oxd-select-text-input')]"
        f"/following::div[contains(@class,'oxd-select-option')][normalize-space()={xpath_literal(option)}]"
    )


class LocatorResolver:
    """Turns field queries and raw selectors into element handles.

    Exactly one strategy is tried per lookup; there is no fallback between
    strategies.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def resolve(self, query: FieldQuery, kind: FieldKind = FieldKind.TEXT) -> list[Handle]:
        return self.engine.locate(field_selector(query, kind))

    def resolve_one(
        self, query: FieldQuery, kind: FieldKind = FieldKind.TEXT, *, step: str | None = None
    ) -> Handle:
        what = f"{query.semantic_name!r} ({query.strategy.name}, {kind.value})"
        return self.one(field_selector(query, kind), what=what, step=step)

    def one(self, selector: str, *, what: str | None = None, step: str | None = None) -> Handle:
        handles = self.engine.locate(selector)
        what = what or selector
        if not handles:
            raise ElementNotFound(f"no element matches {what}", step=step)
        if len(handles) > 1:
            raise AmbiguousMatch(f"{len(handles)} elements match {what}", step=step)
        return handles[0]

    def wait_for_one(
        self,
        selector: str,
        timeout_ms: int,
        *,
        what: str | None = None,
        step: str | None = None,
    ) -> Handle:
        """Wait (bounded) for ``selector`` to render, then resolve it uniquely."""
        found = self.engine.wait_for_condition(
            lambda: len(self.engine.locate(selector)) > 0, timeout_ms
        )
        if not found:
            logger.debug("%s did not render within %d ms", what or selector, timeout_ms)
        return self.one(selector, what=what, step=step)

    def visible(self, selector: str, within: Handle | None = None) -> list[Handle]:
        return [h for h in self.engine.locate(selector, within) if self.engine.is_visible(h)]
