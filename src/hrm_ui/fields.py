from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Strategy(Enum):
    BY_LABEL = "label"
    BY_NAME = "name"
    BY_PLACEHOLDER = "placeholder"


class FieldKind(Enum):
    TEXT = "text"
    AUTOCOMPLETE = "autocomplete"
    SELECT = "select"
    SWITCH = "switch"


@dataclass(frozen=True)
class FieldQuery:
    semantic_name: str
    strategy: Strategy

    def __post_init__(self) -> None:
        if not self.semantic_name or not self.semantic_name.strip():
            raise ValueError("semantic_name must be non-empty")


@dataclass(frozen=True)
class FieldSpec:
    """A search field as the UI renders it.

    ``label`` is the visible label text and doubles as the lookup key for the
    label strategy. ``lookup`` overrides the text used by the name or
    placeholder strategies.
    """

    key: str
    label: str
    kind: FieldKind
    strategy: Strategy = Strategy.BY_LABEL
    lookup: str | None = None

    @property
    def query(self) -> FieldQuery:
        return FieldQuery(self.lookup or self.label, self.strategy)


ADMIN_USER_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("username", "Username", FieldKind.TEXT),
    FieldSpec("user_role", "User Role", FieldKind.SELECT),
    FieldSpec("employee_name", "Employee Name", FieldKind.AUTOCOMPLETE),
    FieldSpec("status", "Status", FieldKind.SELECT),
)


def find_field(fields: tuple[FieldSpec, ...], name: str) -> FieldSpec:
    """Look a field up by key (``user_role``) or label (``User Role``)."""
    for spec in fields:
        if name in (spec.key, spec.label):
            return spec
    known = ", ".join(spec.label for spec in fields)
    raise ValueError(f"unknown search field {name!r}; expected one of: {known}")
