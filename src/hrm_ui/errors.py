from __future__ import annotations


class UiFlowError(Exception):
    """Base error for UI flow failures, tagged with the step that failed."""

    def __init__(self, message: str, *, step: str | None = None) -> None:
        self.step = step
        self.detail = message
        super().__init__(f"[{step}] {message}" if step else message)


class ElementNotFound(UiFlowError):
    pass


class AmbiguousMatch(UiFlowError):
    pass


class StepTimeout(UiFlowError):
    def __init__(self, message: str, *, step: str | None = None, timeout_ms: int = 0) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(f"{message} (after {timeout_ms} ms)", step=step)


class NotReady(UiFlowError):
    pass


class InconsistentOutcome(UiFlowError):
    """The no-records marker and notification disagree about the outcome."""


class StaleElement(UiFlowError):
    """A handle was read after its element left the page."""
