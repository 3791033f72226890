"""
Authentication module: two-stage login (portal, then secure console).
"""

import logging
from playwright.sync_api import Error as PlaywrightError, Page, TimeoutError as PlaywrightTimeout

from zac_timesheet.errors import AuthenticationFailure, UnknownFailure
from zac_timesheet.models import Credential
from zac_timesheet.utils import LOGGER_NAME, scale_timeout

WAIT_STRATEGY = "domcontentloaded"
NAV_TIMEOUT = 60_000

# Portal logon page
_PORTAL_USERNAME = 'input[id="Login1_UserName"]'
_PORTAL_PASSWORD = 'input[id="Login1_Password"]'
_PORTAL_SUBMIT = "#Login1_LoginButton"

# Secure console logon page
_CONSOLE_USERNAME = 'input[id="username"]'
_CONSOLE_PASSWORD = 'input[id="password"]'
_CONSOLE_SUBMIT = "button.cv-button"

# Rendered only once the console home has loaded
_LOGGED_IN = ".top-main_inner"


class Authenticator:
    def __init__(
        self,
        page: Page,
        credential: Credential,
        base_url: str,
        logger: logging.Logger = None,
        *,
        selector_timeout: int = 30_000,
        timeout_multiplier: float = 1.0,
    ):
        self._page = page
        self._credential = credential
        self._base_url = base_url.rstrip("/")
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._selector_timeout = scale_timeout(selector_timeout, timeout_multiplier)
        self._nav_timeout = scale_timeout(NAV_TIMEOUT, timeout_multiplier)

    def login(self) -> None:
        """
        Log in to the portal, then to the secure console.

        Raises AuthenticationFailure when a landmark element of either stage
        does not appear in time. There is no partial success.
        """
        page = self._page
        cred = self._credential
        try:
            self._logger.info("Opening portal logon page...")
            page.goto(f"{self._base_url}/Logon.aspx", wait_until=WAIT_STRATEGY, timeout=self._nav_timeout)
            page.wait_for_selector(_PORTAL_USERNAME, timeout=self._selector_timeout)

            page.fill(_PORTAL_USERNAME, cred.login_id)
            page.fill(_PORTAL_PASSWORD, cred.password)
            page.click(_PORTAL_SUBMIT)

            page.wait_for_selector(_CONSOLE_USERNAME, timeout=self._selector_timeout)
            page.goto(f"{self._base_url}/User/user_logon.asp", wait_until=WAIT_STRATEGY, timeout=self._nav_timeout)
            self._logger.debug("Portal login success")

            # The console pre-fills the user name; select it so typing replaces it
            username = page.locator(_CONSOLE_USERNAME)
            username.wait_for(state="visible", timeout=self._selector_timeout)
            username.click(click_count=3)
            username.press_sequentially(cred.login_id)
            page.fill(_CONSOLE_PASSWORD, cred.password)
            page.click(_CONSOLE_SUBMIT)

            page.wait_for_selector(_LOGGED_IN, timeout=self._selector_timeout)
            self._logger.info("Login success")
        except PlaywrightTimeout as err:
            self._logger.error(f"Login failed for {cred.login_id}@{cred.tenant_id}: {err}")
            raise AuthenticationFailure(f"Login landmark did not appear: {err}") from err
        except PlaywrightError as err:
            self._logger.error(f"Login aborted for {cred.login_id}@{cred.tenant_id}: {err}")
            raise UnknownFailure(f"Login failed: {err}") from err
