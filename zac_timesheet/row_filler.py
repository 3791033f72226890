"""
Row filler: set the number of work rows and enter each work entry.

Changing the row count ("display_count") makes the form ask for confirmation
and then reload the frame. Rows beyond the entries get their duration zeroed.
"""

import logging
from typing import Sequence

from playwright.sync_api import Frame, Page

from zac_timesheet.dialogs import DialogGate
from zac_timesheet.models import WorkEntry
from zac_timesheet.navigator import expect_navigation, translate_errors, wait_for_selector
from zac_timesheet.utils import LOGGER_NAME, scale_timeout
from zac_timesheet.work_codes import WorkCategoryLookup

ROW_COUNT_NAV_TIMEOUT = 10_000
ROW_STEP = 5

_DISPLAY_COUNT = 'select[name="display_count"]'


def _row_selectors(row: int) -> dict:
    return {
        "category": f'select[name="id_sagyou_naiyou{row}"]',
        "project": f'input[name="code_project{row}"]',
        "hour": f'select[name="time_required_hour{row}"]',
        "minute": f'select[name="time_required_minute{row}"]',
        "memo": f'textarea[name="memo{row}"]',
    }


def max_row_count(entry_count: int) -> int:
    """
    Rows to display for entry_count entries: 5 below five entries, otherwise
    entry_count rounded down to a multiple of 5.

    Rounding down means 6-9, 11-14, ... entries do not all fit; the trailing
    ones are never entered. RowFiller logs a warning when that happens.
    """
    if entry_count < ROW_STEP:
        return ROW_STEP
    return (entry_count // ROW_STEP) * ROW_STEP


class RowFiller:
    def __init__(
        self,
        page: Page,
        lookup: WorkCategoryLookup,
        logger: logging.Logger = None,
        *,
        selector_timeout: int = 30_000,
        timeout_multiplier: float = 1.0,
    ):
        self._page = page
        self._lookup = lookup
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._selector_timeout = scale_timeout(selector_timeout, timeout_multiplier)
        self._nav_timeout = scale_timeout(ROW_COUNT_NAV_TIMEOUT, timeout_multiplier)

    def set_work_inputs(self, frame: Frame, entries: Sequence[WorkEntry]) -> None:
        """
        Display max_row_count(len(entries)) rows, fill one row per entry and
        zero the rest.

        A failing row does not stop the remaining rows; the first error is
        raised once every row has been attempted.
        """
        entries = list(entries)
        rows = max_row_count(len(entries))
        if len(entries) > rows:
            self._logger.warning(
                f"{len(entries) - rows} of {len(entries)} work entries exceed the "
                f"{rows} displayed rows and will not be entered"
            )

        with translate_errors("row count change"), DialogGate(self._page, self._logger) as gate:
            with expect_navigation(frame, self._nav_timeout, "row count change"):
                frame.select_option(_DISPLAY_COUNT, str(rows))
        if not gate.seen:
            self._logger.warning("Row count changed without a confirmation dialog")
        self._logger.info(f"Row count set to {rows}")

        first_error = None
        for row in range(1, rows + 1):
            try:
                if row <= len(entries):
                    self.set_work_input(frame, entries[row - 1], row)
                else:
                    self.clear_work_input(frame, row)
            except Exception as err:
                self._logger.error(f"Row {row} failed: {err}")
                if first_error is None:
                    first_error = err
        if first_error is not None:
            raise first_error

    def set_work_input(self, frame: Frame, entry: WorkEntry, row: int) -> None:
        sel = _row_selectors(row)
        self._logger.info(f"Work code {entry.code} → row {row}")

        category = self._lookup.category_for(entry.code)
        with translate_errors(f"row {row} input"):
            wait_for_selector(frame, sel["category"], self._selector_timeout)
            frame.select_option(sel["category"], category)
            self._logger.debug(f"  row {row} category {category} for code {entry.code}")

            if self._lookup.is_project(category):
                # Enter confirms the project-code autocomplete
                project = frame.locator(sel["project"])
                project.press_sequentially(entry.code)
                project.press("Enter")
                self._logger.info(f"  row {row} project code typed")

            frame.select_option(sel["hour"], str(entry.hour))
            frame.select_option(sel["minute"], str(entry.minute))
            self._logger.debug(f"  row {row} duration {entry.hour}h {entry.minute}m")

            if entry.text is not None:
                memo = frame.locator(sel["memo"])
                if memo.count():
                    memo.click(click_count=3)
                    memo.press_sequentially(entry.text)
                    self._logger.info(f"  row {row} memo typed")

    def clear_work_input(self, frame: Frame, row: int) -> None:
        """Zero an unused row's duration. Category and memo are left as they are."""
        sel = _row_selectors(row)
        with translate_errors(f"row {row} clear"):
            wait_for_selector(frame, sel["hour"], self._selector_timeout)
            wait_for_selector(frame, sel["minute"], self._selector_timeout)
            frame.select_option(sel["hour"], "0")
            frame.select_option(sel["minute"], "0")
        self._logger.info(f"Row {row} cleared")
