"""
Submission: click the register button and decide the outcome.

After the click the form either raises a dialog or navigates silently:
  - dialog with a message → rejected, the message is the reason
  - dialog without a message → accepted, the frame then navigates
  - no dialog → accepted, the frame navigates
"""

import logging
from datetime import date

from playwright.sync_api import Frame, Page

from zac_timesheet.dialogs import DialogGate
from zac_timesheet.errors import DialogRejection
from zac_timesheet.navigator import expect_navigation, translate_errors
from zac_timesheet.utils import LOGGER_NAME, scale_timeout

SUBMIT_NAV_TIMEOUT = 10_000

_REGISTER_BUTTON = "#button7"


class SubmissionController:
    def __init__(self, page: Page, logger: logging.Logger = None, *, timeout_multiplier: float = 1.0):
        self._page = page
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._nav_timeout = scale_timeout(SUBMIT_NAV_TIMEOUT, timeout_multiplier)

    def click_register_button(self, frame: Frame, work_date: date) -> None:
        """Submit the report. Raises DialogRejection if the form refuses it."""
        with translate_errors("submission"), DialogGate(self._page, self._logger) as gate:
            with expect_navigation(frame, self._nav_timeout, "submission"):
                frame.click(_REGISTER_BUTTON)
                self._logger.info("Register button clicked")

                if gate.settle_without_dialog():
                    self._logger.debug("No dialog after submit, waiting for navigation")
                elif gate.message:
                    raise DialogRejection(gate.message)

        self._logger.info(f"Work register success work_date={work_date}")
