"""
Dialog gate: a one-shot handler for the next native dialog on a page.

The report form answers some actions with a confirm/alert dialog and others
with a plain navigation. The gate is registered before the action and is
settled exactly once, either by the dialog handler or by the caller declaring
that no dialog arrived. Whichever comes second is a no-op.
"""

import logging

from zac_timesheet.utils import LOGGER_NAME


class DialogGate:
    def __init__(self, page, logger: logging.Logger = None):
        self._page = page
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._settled = False
        self._listening = False
        self.seen = False
        self.message = None

    def __enter__(self) -> "DialogGate":
        self._page.once("dialog", self._on_dialog)
        self._listening = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._stop_listening()

    def _on_dialog(self, dialog) -> None:
        self._listening = False
        message = dialog.message
        self._logger.info(f"Dialog message: {message!r}")
        dialog.accept()
        if self._settled:
            self._logger.warning("Dialog arrived after the outcome was decided; accepted and ignored")
            return
        self._settled = True
        self.seen = True
        self.message = message

    def settle_without_dialog(self) -> bool:
        """
        Declare that no dialog arrived. Returns True if this call decided the
        outcome, False if the dialog handler already did.
        """
        if self._settled:
            return False
        self._settled = True
        self._stop_listening()
        return True

    def _stop_listening(self) -> None:
        # Once-handlers stay registered until they fire; drop it so a later,
        # unrelated dialog is not consumed here.
        if self._listening:
            self._page.remove_listener("dialog", self._on_dialog)
            self._listening = False
