"""Page objects and search-outcome classification for the OrangeHRM UI suite."""

from .admin_users import AdminUserSearchPage, SystemUser
from .config import Settings
from .engine import Engine, PlaywrightEngine
from .errors import (
    AmbiguousMatch,
    ElementNotFound,
    InconsistentOutcome,
    NotReady,
    StaleElement,
    StepTimeout,
    UiFlowError,
)
from .outcome import NoRecords, Results, ResultRow, SearchOutcome, ValidationError, classify
from .search import SearchPage
from .session import LoginPage, SessionGate
from .visibility import is_visible

__all__ = [
    "AdminUserSearchPage",
    "AmbiguousMatch",
    "ElementNotFound",
    "Engine",
    "InconsistentOutcome",
    "LoginPage",
    "NoRecords",
    "NotReady",
    "PlaywrightEngine",
    "ResultRow",
    "Results",
    "SearchOutcome",
    "SearchPage",
    "SessionGate",
    "Settings",
    "StaleElement",
    "StepTimeout",
    "SystemUser",
    "UiFlowError",
    "ValidationError",
    "classify",
    "is_visible",
]
