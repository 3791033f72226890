"""
Navigator module: open the daily report screen and select the work date.

The report form lives in a named frame ("classic_window"). Year and month are
chosen first, then the day is picked from the calendar links. Late-month days
can be listed twice (end of this month's grid and start of the next month's),
so for day >= 25 the second matching link is the one that belongs to the
requested month.
"""

import logging
import re
from contextlib import contextmanager
from datetime import date
from typing import List, Optional

from playwright.sync_api import Error as PlaywrightError, Frame, Page, TimeoutError as PlaywrightTimeout

from zac_timesheet.errors import FrameNotFound, NavigationTimeout, UnknownFailure
from zac_timesheet.models import RegistrationRequest
from zac_timesheet.utils import LOGGER_NAME, scale_timeout

WAIT_STRATEGY = "domcontentloaded"
NAV_TIMEOUT = 60_000
MONTH_NAV_TIMEOUT = 6_000
DAY_NAV_TIMEOUT = 10_000

REPORT_PATH = "/b/asp/Shinsei/Nippou"
FRAME_NAME = "classic_window"
_FRAME_CONTAINER = "#classic_window"

_YEAR_INPUT = 'input[name="year_schedule"]'
_MONTH_SELECT = 'select[name="month_schedule"]'
_DAY_LINKS = "a.link_cell"

# First day that can show up twice in the overlapping calendar view
LATE_MONTH_DAY = 25

_TIME_SELECTS = (
    ('select[name="time_in_hour"]', "start_hour"),
    ('select[name="time_in_minute"]', "start_minute"),
    ('select[name="time_out_hour"]', "end_hour"),
    ('select[name="time_out_minute"]', "end_minute"),
    ('select[name="time_break_input_hour"]', "break_hour"),
    ('select[name="time_break_input_minute"]', "break_minute"),
)


@contextmanager
def translate_errors(action: str):
    """
    Convert Playwright failures raised inside a step: timeouts become
    NavigationTimeout, any other driver error becomes UnknownFailure.
    """
    try:
        yield
    except PlaywrightTimeout as err:
        raise NavigationTimeout(f"Timed out during {action}: {err}") from err
    except PlaywrightError as err:
        raise UnknownFailure(f"{action} failed: {err}") from err


@contextmanager
def expect_navigation(frame: Frame, timeout: int, action: str):
    """
    Wait for the frame to navigate after the action run inside the block.

    Raises NavigationTimeout if no navigation completes within timeout ms.
    An exception raised inside the block cancels the wait.
    """
    try:
        with frame.expect_navigation(wait_until=WAIT_STRATEGY, timeout=timeout):
            yield
    except PlaywrightTimeout as err:
        raise NavigationTimeout(f"No navigation after {action} within {timeout}ms") from err


def goto(page: Page, url: str, timeout: int) -> None:
    """Bounded page load."""
    try:
        page.goto(url, wait_until=WAIT_STRATEGY, timeout=timeout)
    except PlaywrightTimeout as err:
        raise NavigationTimeout(f"{url} did not load within {timeout}ms") from err
    except PlaywrightError as err:
        raise UnknownFailure(f"Could not open {url}: {err}") from err


def wait_for_selector(target, selector: str, timeout: int) -> None:
    """Bounded selector wait on a page or frame."""
    try:
        target.wait_for_selector(selector, timeout=timeout)
    except PlaywrightTimeout as err:
        raise NavigationTimeout(f"'{selector}' did not appear within {timeout}ms") from err


def day_matches(text: str, day: int) -> bool:
    """True if the link text starts with the day number as a whole token.

    "1" matches "1" and "1 (Mon)" but never "10" or "11".
    """
    return re.match(rf"^{day}(?:\s|$)", text.strip()) is not None


def pick_day_link(texts: List[str], day: int) -> Optional[int]:
    """Index into texts of the calendar link to click, or None if no link matches."""
    matches = [i for i, text in enumerate(texts) if day_matches(text, day)]
    if not matches:
        return None
    choice = 1 if len(matches) > 1 and day >= LATE_MONTH_DAY else 0
    return matches[choice]


class DateFrameLocator:
    def __init__(
        self,
        page: Page,
        base_url: str,
        logger: logging.Logger = None,
        *,
        selector_timeout: int = 30_000,
        timeout_multiplier: float = 1.0,
    ):
        self._page = page
        self._base_url = base_url.rstrip("/")
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._selector_timeout = scale_timeout(selector_timeout, timeout_multiplier)
        self._nav_timeout = scale_timeout(NAV_TIMEOUT, timeout_multiplier)
        self._month_timeout = scale_timeout(MONTH_NAV_TIMEOUT, timeout_multiplier)
        self._day_timeout = scale_timeout(DAY_NAV_TIMEOUT, timeout_multiplier)

    def _find_frame(self) -> Frame:
        for frame in self._page.frames:
            self._logger.debug(f"  frame: {frame.name!r}")
            if frame.name == FRAME_NAME:
                return frame
        self._logger.info("Classic window not found")
        raise FrameNotFound(f"Frame '{FRAME_NAME}' not found on report page")

    def get_frame(self, work_date: date) -> Frame:
        """Open the report screen on work_date and return the report frame."""
        page = self._page
        goto(page, f"{self._base_url}{REPORT_PATH}", self._nav_timeout)
        wait_for_selector(page, _FRAME_CONTAINER, self._selector_timeout)
        self._logger.info("Daily report opened")

        frame = self._find_frame()

        with translate_errors("year and month selection"):
            wait_for_selector(frame, _YEAR_INPUT, self._selector_timeout)
            year_input = frame.locator(_YEAR_INPUT)
            year_input.click(click_count=3)
            year_input.press_sequentially(str(work_date.year))

            wait_for_selector(frame, _MONTH_SELECT, self._selector_timeout)
            with expect_navigation(frame, self._month_timeout, "month selection"):
                frame.select_option(_MONTH_SELECT, str(work_date.month))
        self._logger.info("Month selected")

        with translate_errors("day selection"):
            self._select_day(frame, work_date.day)
        return frame

    def _select_day(self, frame: Frame, day: int) -> None:
        links = frame.locator(_DAY_LINKS)
        texts = [text.strip() for text in links.all_text_contents()]
        self._logger.debug(f"Calendar links: {len(texts)}")

        for text in texts:
            self._logger.debug(f"  calendar link {text!r}: {day_matches(text, day)}")
        index = pick_day_link(texts, day)
        if index is None:
            raise UnknownFailure(f"No calendar link for day {day}")

        self._logger.debug(f"Clicking calendar link #{index} ({texts[index]!r}) for day {day}")
        with expect_navigation(frame, self._day_timeout, "day selection"):
            links.nth(index).click()
        self._logger.info("Day selected")

    def select_work_date(self, frame: Frame, request: RegistrationRequest) -> None:
        """Set start, end and break times on the report."""
        with translate_errors("work time selection"):
            for selector, attr in _TIME_SELECTS:
                frame.select_option(selector, str(getattr(request, attr)))
                self._logger.debug(f"  {selector} = {getattr(request, attr)}")
        self._logger.info("Work times selected")
