from __future__ import annotations

import pytest

from hrm_ui.errors import InconsistentOutcome
from hrm_ui.outcome import (
    NoRecords,
    ResultRow,
    Results,
    UiSnapshot,
    ValidationError,
    classify,
    normalize_message,
    validation_messages,
)

ADMIN_ROW = ResultRow(("", "Admin", "Admin", "Paul Collings", "Enabled", ""))


def test_rows_classify_as_results() -> None:
    outcome = classify(UiSnapshot(rows=(ADMIN_ROW,)))
    assert isinstance(outcome, Results)
    assert outcome.row_count == 1
    assert outcome.rows[0].column(1) == "Admin"
    assert outcome.rows[0].column(42) == ""


def test_marker_and_toast_agree_on_no_records() -> None:
    outcome = classify(
        UiSnapshot(no_records_marker="No Records Found", info_toasts=("No Records Found",))
    )
    assert outcome == NoRecords("No Records Found")


@pytest.mark.parametrize(
    "snapshot",
    [
        UiSnapshot(no_records_marker="No Records Found"),
        UiSnapshot(info_toasts=("Info", "No Records Found")),
    ],
)
def test_either_no_records_signal_is_enough(snapshot: UiSnapshot) -> None:
    outcome = classify(snapshot)
    assert isinstance(outcome, NoRecords)
    assert "No Records Found" in outcome.message


def test_unrelated_info_toast_is_not_a_no_records_signal() -> None:
    assert classify(UiSnapshot(info_toasts=("Successfully Saved",), rows=(ADMIN_ROW,))) == Results(
        (ADMIN_ROW,)
    )


def test_disagreeing_signals_raise() -> None:
    with pytest.raises(InconsistentOutcome) as exc:
        classify(
            UiSnapshot(
                no_records_marker="No Records Found",
                info_toasts=("No records match your filters",),
            )
        )
    assert exc.value.step == "classify"


def test_validation_beats_everything_else() -> None:
    outcome = classify(
        UiSnapshot(
            field_errors=("Invalid",),
            no_records_marker="No Records Found",
            info_toasts=("No Records Found",),
            busy=True,
            rows=(ADMIN_ROW,),
        )
    )
    assert outcome == ValidationError(("Invalid",))


def test_no_records_beats_leftover_rows() -> None:
    outcome = classify(UiSnapshot(no_records_marker="No Records Found", rows=(ADMIN_ROW,)))
    assert isinstance(outcome, NoRecords)


def test_pending_while_busy_or_empty() -> None:
    assert classify(UiSnapshot(busy=True, rows=(ADMIN_ROW,))) is None
    assert classify(UiSnapshot()) is None
    assert classify(UiSnapshot(no_records_marker="   ")) is None


def test_validation_messages_order_and_dedup() -> None:
    snapshot = UiSnapshot(
        field_errors=(" Invalid ", "Required", "Invalid", ""),
        error_toast="Required",
    )
    assert validation_messages(snapshot) == ["Invalid", "Required"]

    snapshot = UiSnapshot(field_errors=("Invalid",), error_toast="Something went wrong")
    assert validation_messages(snapshot) == ["Invalid", "Something went wrong"]


def test_error_toast_alone_is_a_validation_error() -> None:
    assert classify(UiSnapshot(error_toast="Invalid Parameter")) == ValidationError(
        ("Invalid Parameter",)
    )


def test_normalize_message() -> None:
    assert normalize_message("  No   Records\nFound! ") == "no records found"
    assert normalize_message("No-Records-Found") == "no records found"
