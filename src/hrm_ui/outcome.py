from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

from .errors import InconsistentOutcome

NO_RECORDS_PHRASE = "no records found"
_NON_WORD = re.compile(r"[^\w]+")


@dataclass(frozen=True)
class ResultRow:
    cells: tuple[str, ...]

    def column(self, index: int) -> str:
        return self.cells[index] if index < len(self.cells) else ""


@dataclass(frozen=True)
class Results:
    rows: tuple[ResultRow, ...]

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class NoRecords:
    message: str


@dataclass(frozen=True)
class ValidationError:
    """Input was rejected before the search reached the backing data."""

    messages: tuple[str, ...]


SearchOutcome = Union[Results, NoRecords, ValidationError]


@dataclass(frozen=True)
class UiSnapshot:
    """What the results area and its surroundings show at one instant."""

    field_errors: tuple[str, ...] = ()
    error_toast: str | None = None
    info_toasts: tuple[str, ...] = ()
    no_records_marker: str | None = None
    busy: bool = False
    rows: tuple[ResultRow, ...] = field(default_factory=tuple)


def normalize_message(text: str) -> str:
    return " ".join(_NON_WORD.sub(" ", text.casefold()).split())


def validation_messages(snapshot: UiSnapshot) -> list[str]:
    """Field errors in definition order, then the error toast, de-duplicated."""
    messages: list[str] = []
    candidates = [*snapshot.field_errors]
    if snapshot.error_toast is not None:
        candidates.append(snapshot.error_toast)
    for raw in candidates:
        text = raw.strip()
        if text and text not in messages:
            messages.append(text)
    return messages


def _no_records_toast(snapshot: UiSnapshot) -> str | None:
    for text in snapshot.info_toasts:
        if "no records" in normalize_message(text):
            return text.strip()
    return None


def classify(snapshot: UiSnapshot) -> SearchOutcome | None:
    """Map a snapshot to a search outcome.

    Precedence is ValidationError, then NoRecords, then Results. Returns
    ``None`` while the table is loading or nothing conclusive is rendered.
    """
    errors = validation_messages(snapshot)
    if errors:
        return ValidationError(tuple(errors))
    if snapshot.busy:
        return None

    marker = (snapshot.no_records_marker or "").strip() or None
    toast = _no_records_toast(snapshot)
    if marker and toast:
        if not all(NO_RECORDS_PHRASE in normalize_message(t) for t in (marker, toast)):
            raise InconsistentOutcome(
                f"no-records marker {marker!r} disagrees with notification {toast!r}",
                step="classify",
            )
        return NoRecords(marker)
    if marker or toast:
        return NoRecords(marker or toast or "")

    if snapshot.rows:
        return Results(snapshot.rows)
    return None
