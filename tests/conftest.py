"""In-memory stand-ins for the Playwright sync objects the client drives."""

from contextlib import contextmanager
from datetime import date

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from zac_timesheet.models import Credential, RegistrationRequest, WorkEntry


class FakeDialog:
    def __init__(self, message: str):
        self.message = message
        self.accepted = False

    def accept(self) -> None:
        self.accepted = True


class FakeLocator:
    def __init__(self, owner, selector: str, index: int = None):
        self._owner = owner
        self.selector = selector
        self.index = index

    def wait_for(self, state: str = "visible", timeout: int = None) -> None:
        self._owner.wait_for_selector(self.selector, timeout=timeout)

    def click(self, click_count: int = 1) -> None:
        self._owner._act("click", self.selector, self.index if self.index is not None else click_count)

    def press_sequentially(self, text: str) -> None:
        self._owner._act("type", self.selector, text)

    def press(self, key: str) -> None:
        self._owner._act("press", self.selector, key)

    def count(self) -> int:
        return 0 if self.selector in self._owner.absent else 1

    def all_text_contents(self) -> list:
        return list(self._owner.texts.get(self.selector, []))

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self._owner, self.selector, index)


class FakeTarget:
    """Shared behaviour of pages and frames: actions, selector waits, dialogs."""

    def __init__(self, page=None):
        self._page = page
        self.actions = []
        self.missing = set()
        self.absent = set()
        self.texts = {}
        self.dialogs = {}
        self.errors = {}

    @property
    def page(self):
        return self._page

    def _act(self, kind: str, selector: str, value=None) -> None:
        error = self.errors.get((kind, selector))
        if error is not None:
            raise error
        self.actions.append((kind, selector, value))
        if (kind, selector) in self.dialogs:
            self.page.emit_dialog(self.dialogs[(kind, selector)])

    def wait_for_selector(self, selector: str, timeout: int = None) -> None:
        self.actions.append(("wait", selector, timeout))
        if selector in self.missing:
            raise PlaywrightTimeout(f"Timeout {timeout}ms exceeded waiting for {selector}")

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def select_option(self, selector: str, value: str) -> None:
        self._act("select", selector, value)

    def click(self, selector: str) -> None:
        self._act("click", selector)

    def fill(self, selector: str, value: str) -> None:
        self._act("fill", selector, value)

    def of_kind(self, kind: str) -> list:
        return [(selector, value) for k, selector, value in self.actions if k == kind]

    def selected(self) -> dict:
        return {selector: value for selector, value in self.of_kind("select")}


class FakeFrame(FakeTarget):
    def __init__(self, page, name: str):
        super().__init__(page)
        self.name = name
        self.navigations = 0
        self.navigation_timeouts = []
        self.stall_navigation = False

    @contextmanager
    def expect_navigation(self, wait_until: str = None, timeout: int = None):
        self.navigation_timeouts.append(timeout)
        yield
        if self.stall_navigation:
            raise PlaywrightTimeout(f"Timeout {timeout}ms exceeded")
        self.navigations += 1
        self.actions.append(("navigated", None, None))


class FakePage(FakeTarget):
    def __init__(self, frame_names=("", "classic_window")):
        super().__init__(self)
        self.frames = [FakeFrame(self, name) for name in frame_names]
        self.listeners = []
        self.dialog_log = []
        self.closed = 0
        self.url = "about:blank"
        self.screenshots = []
        self.screenshot_error = None
        self.html = "<html><body>report</body></html>"

    @property
    def report_frame(self) -> FakeFrame:
        return next(f for f in self.frames if f.name == "classic_window")

    def goto(self, url: str, wait_until: str = None, timeout: int = None) -> None:
        error = self.errors.get(("goto", url))
        if error is not None:
            raise error
        self.actions.append(("goto", url, timeout))
        self.url = url

    def once(self, event: str, handler) -> None:
        self.listeners.append((event, handler))

    def remove_listener(self, event: str, handler) -> None:
        self.listeners = [(e, h) for e, h in self.listeners if not (e == event and h == handler)]

    def emit_dialog(self, message: str) -> FakeDialog:
        dialog = FakeDialog(message)
        self.dialog_log.append(dialog)
        for i, (event, handler) in enumerate(self.listeners):
            if event == "dialog":
                del self.listeners[i]
                handler(dialog)
                break
        return dialog

    def title(self) -> str:
        return "ZAC"

    def screenshot(self, path: str = None, full_page: bool = False, timeout: int = None) -> bytes:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        data = b"\x89PNG fake"
        with open(path, "wb") as f:
            f.write(data)
        self.screenshots.append(path)
        return data

    def content(self) -> str:
        return self.html

    def close(self) -> None:
        self.closed += 1


class FakeBrowser:
    def __init__(self, page: FakePage = None):
        self.page = page or FakePage()
        self.opened = 0

    def new_page(self) -> FakePage:
        self.opened += 1
        return self.page


class FakeS3:
    def __init__(self, error: Exception = None):
        self.objects = []
        self._error = error

    def put_object(self, Bucket: str, Key: str, Body: bytes) -> dict:
        if self._error is not None:
            raise self._error
        self.objects.append({"Bucket": Bucket, "Key": Key, "Body": Body})
        return {}


@pytest.fixture
def page() -> FakePage:
    return FakePage()


@pytest.fixture
def frame(page) -> FakeFrame:
    return page.report_frame


@pytest.fixture
def credential() -> Credential:
    return Credential(tenant_id="acme", login_id="taro", password="secret")


def make_request(day: date = date(2026, 10, 27), entries=None) -> RegistrationRequest:
    if entries is None:
        entries = (
            WorkEntry(code="P-100", hour=4, minute=0, text="design review"),
            WorkEntry(code="ADMIN", hour=2, minute=30),
            WorkEntry(code="MEETING", hour=1, minute=30, text="weekly sync"),
        )
    return RegistrationRequest(
        work_date=day,
        start_hour=9,
        start_minute=0,
        end_hour=18,
        end_minute=0,
        break_hour=1,
        break_minute=0,
        entries=tuple(entries),
    )
