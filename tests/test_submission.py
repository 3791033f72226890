"""Tests for the register-button outcome and the dialog gate."""

from datetime import date

import pytest
from playwright.sync_api import Error as PlaywrightError

from zac_timesheet.dialogs import DialogGate
from zac_timesheet.errors import DialogRejection, NavigationTimeout, UnknownFailure
from zac_timesheet.submission import SubmissionController

REGISTER_BUTTON = "#button7"
WORK_DATE = date(2026, 10, 27)


def submit(page, frame):
    SubmissionController(page).click_register_button(frame, WORK_DATE)


def test_no_dialog_waits_for_navigation(page, frame):
    submit(page, frame)

    assert frame.of_kind("click") == [(REGISTER_BUTTON, None)]
    assert frame.navigations == 1
    assert frame.navigation_timeouts == [10_000]
    assert page.listeners == []


def test_dialog_with_message_rejects_without_navigation(page, frame):
    frame.dialogs[("click", REGISTER_BUTTON)] = "Error: overlapping entry"

    with pytest.raises(DialogRejection) as exc_info:
        submit(page, frame)

    assert exc_info.value.message == "Error: overlapping entry"
    assert str(exc_info.value) == "Error: overlapping entry"
    assert page.dialog_log[0].accepted
    assert frame.navigations == 0


def test_dialog_without_message_is_accepted_then_navigation_awaited(page, frame):
    frame.dialogs[("click", REGISTER_BUTTON)] = ""

    submit(page, frame)

    assert page.dialog_log[0].accepted
    assert frame.navigations == 1


def test_navigation_timeout_after_silent_accept(page, frame):
    frame.stall_navigation = True

    with pytest.raises(NavigationTimeout):
        submit(page, frame)


# ── DialogGate ───────────────────────────────────────────────────────────

def test_gate_settles_once_from_dialog(page):
    with DialogGate(page) as gate:
        page.emit_dialog("Are you sure?")
        assert gate.settle_without_dialog() is False

    assert gate.seen
    assert gate.message == "Are you sure?"


def test_gate_settled_without_dialog_ignores_later_dialogs(page):
    with DialogGate(page) as gate:
        assert gate.settle_without_dialog() is True
        later = page.emit_dialog("unrelated")

    assert not gate.seen
    assert gate.message is None
    # Not consumed by the gate: nobody accepted it
    assert not later.accepted
    assert page.listeners == []


def test_gate_unregisters_on_exit(page):
    with DialogGate(page):
        assert len(page.listeners) == 1

    assert page.listeners == []


def test_driver_error_on_click_is_unknown_failure(page, frame):
    frame.errors[("click", REGISTER_BUTTON)] = PlaywrightError("Target page, context or browser has been closed")

    with pytest.raises(UnknownFailure):
        submit(page, frame)

    assert page.listeners == []
