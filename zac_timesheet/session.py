"""
Session module: one browser tab per registration attempt.
"""

import logging

from zac_timesheet.utils import LOGGER_NAME


class TabSession:
    """
    Owns a single tab opened on a caller-supplied browser.

    close() runs at most once per open(), whichever step failed. Use it as a
    context manager, or call open()/close() from a try/finally.
    """

    def __init__(self, browser, logger: logging.Logger = None):
        self._browser = browser
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self.page = None

    def open(self):
        if self.page is not None:
            raise RuntimeError("Session already has an open tab")
        self.page = self._browser.new_page()
        self._logger.debug("Tab opened")
        return self.page

    def close(self) -> None:
        page, self.page = self.page, None
        if page is None:
            return
        page.close()
        self._logger.debug("Tab closed")

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
