"""
ZacClient: register a daily work report for one user.

Each call opens its own tab, logs in, runs the requested workflow and closes
the tab again, whatever happened. Failures are captured by the
FailureReporter and re-raised unchanged.
"""

import logging
from enum import Enum

from zac_timesheet.auth import Authenticator
from zac_timesheet.diagnostics import FailureReporter
from zac_timesheet.models import Credential, RegistrationRequest, validate_credential, validate_request
from zac_timesheet.navigator import DateFrameLocator
from zac_timesheet.row_filler import RowFiller
from zac_timesheet.session import TabSession
from zac_timesheet.submission import SubmissionController
from zac_timesheet.utils import DEFAULT_BASE_URL, LOGGER_NAME
from zac_timesheet.work_codes import WorkCategoryLookup


class Operation(Enum):
    REGISTER = "register"


class ZacClient:
    def __init__(
        self,
        browser,
        credential: Credential,
        error_bucket_name: str = None,
        *,
        logger: logging.Logger = None,
        base_url: str = DEFAULT_BASE_URL,
        lookup: WorkCategoryLookup = None,
        reporter: FailureReporter = None,
        selector_timeout: int = 30_000,
        timeout_multiplier: float = 1.0,
    ):
        self._browser = browser
        self._credential = validate_credential(credential)
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self.base_url = f"{base_url.rstrip('/')}/{credential.tenant_id}"
        self._lookup = lookup or WorkCategoryLookup()
        self._reporter = reporter or FailureReporter(error_bucket_name, self._logger)
        self._selector_timeout = selector_timeout
        self._timeout_multiplier = timeout_multiplier

    @classmethod
    def from_config(cls, browser, config: dict, logger: logging.Logger = None) -> "ZacClient":
        logger = logger or logging.getLogger(LOGGER_NAME)
        return cls(
            browser,
            Credential.from_config(config),
            logger=logger,
            base_url=config.get("base_url", DEFAULT_BASE_URL),
            lookup=WorkCategoryLookup(config.get("work_codes")),
            reporter=FailureReporter(
                config.get("error_bucket_name"), logger, region=config.get("aws_region")
            ),
            selector_timeout=config.get("selector_timeout", 30_000),
            timeout_multiplier=config.get("timeout_multiplier", 1.0),
        )

    def register(self, request: RegistrationRequest) -> None:
        """Enter and submit the daily report described by request."""
        validate_request(request)
        self._run(Operation.REGISTER, request)

    def _run(self, operation: Operation, request) -> None:
        workflow = WORKFLOWS[operation]
        session = TabSession(self._browser, self._logger)
        page = session.open()
        try:
            self._login(page)
            workflow(self, page, request)
        except Exception as err:
            self._reporter.capture(page, err)
            raise
        finally:
            session.close()

    def _login(self, page) -> None:
        Authenticator(
            page,
            self._credential,
            self.base_url,
            self._logger,
            selector_timeout=self._selector_timeout,
            timeout_multiplier=self._timeout_multiplier,
        ).login()

    def _register_workflow(self, page, request: RegistrationRequest) -> None:
        timeouts = {
            "selector_timeout": self._selector_timeout,
            "timeout_multiplier": self._timeout_multiplier,
        }
        locator = DateFrameLocator(page, self.base_url, self._logger, **timeouts)
        frame = locator.get_frame(request.work_date)
        locator.select_work_date(frame, request)

        RowFiller(page, self._lookup, self._logger, **timeouts).set_work_inputs(frame, request.entries)

        SubmissionController(
            page, self._logger, timeout_multiplier=self._timeout_multiplier
        ).click_register_button(frame, request.work_date)


# Workflow run inside the logged-in session, per operation
WORKFLOWS = {
    Operation.REGISTER: ZacClient._register_workflow,
}
