from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from typing import Any

import pytest

from testgenius.driver import WaitTimeoutError, poll_until


class FakeElement:
    def __init__(
        self,
        *,
        exists: bool = True,
        displayed: bool = True,
        enabled: bool = True,
        value: str = "",
        text: str = "",
        sticky: str | None = None,
        write: Callable[[str], str] | None = None,
    ) -> None:
        self._exists = exists
        self.displayed = displayed
        self.enabled = enabled
        self.value = value
        self.text = text
        # Value that survives the first clear() (e.g. a framework re-populating the input).
        self.sticky = sticky
        self.write = write
        self.clicks = 0
        self.clears = 0
        self.writes: list[str] = []

    def exists(self) -> bool:
        return self._exists

    def is_displayed(self) -> bool:
        return self._exists and self.displayed

    def is_enabled(self) -> bool:
        return self.enabled

    def click(self) -> None:
        self.clicks += 1

    def get_value(self) -> str:
        return self.value

    def set_value(self, value: str) -> None:
        self.writes.append(value)
        self.value = self.write(value) if self.write else value

    def clear(self) -> None:
        self.clears += 1
        if self.sticky is not None:
            self.value = self.sticky
            self.sticky = None
        else:
            self.value = ""

    def get_text(self) -> str:
        return self.text

    def wait_for_displayed(self, timeout_ms: int) -> None:
        if not self.is_displayed():
            raise WaitTimeoutError(f"element still not displayed after {timeout_ms}ms")

    def wait_for_clickable(self, timeout_ms: int) -> None:
        if not (self.is_displayed() and self.is_enabled()):
            raise WaitTimeoutError(f"element still not clickable after {timeout_ms}ms")


MISSING = FakeElement(exists=False)


class FakeDriver:
    """In-memory driver: query expressions map to prepared elements."""

    def __init__(self) -> None:
        self.elements: dict[str, list[FakeElement]] = {}
        self.broken: set[str] = set()
        self.queries: list[str] = []
        self.url = "about:blank"
        self.title = ""
        self.page_source = "<html></html>"
        self.body_text = ""
        self.ready_state = "complete"
        self.navigations: list[str] = []
        self.pauses: list[int] = []
        self.keys: list[str] = []
        self.screenshots: list[str] = []
        self.screenshot_error: Exception | None = None
        self.on_screenshot: Callable[[str], None] | None = None

    def add(self, selector: str, *elements: FakeElement) -> FakeElement:
        items = list(elements) or [FakeElement()]
        self.elements.setdefault(selector, []).extend(items)
        return items[0]

    def navigate(self, url: str) -> None:
        self.navigations.append(url)
        self.url = url

    def query(self, selector: str) -> FakeElement:
        self.queries.append(selector)
        if selector in self.broken:
            raise RuntimeError(f"invalid selector: {selector}")
        matches = self.elements.get(selector)
        return matches[0] if matches else MISSING

    def query_all(self, selector: str) -> list[FakeElement]:
        self.queries.append(selector)
        return list(self.elements.get(selector, []))

    def get_url(self) -> str:
        return self.url

    def get_title(self) -> str:
        return self.title

    def get_page_source(self) -> str:
        return self.page_source

    def execute_script(self, script: str) -> Any:
        if "readyState" in script:
            return self.ready_state
        if "innerText" in script:
            return self.body_text
        return None

    def save_screenshot(self, path: str) -> str:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        self.screenshots.append(path)
        if self.on_screenshot is not None:
            self.on_screenshot(path)
        return path

    def send_keys(self, keys: Sequence[str]) -> None:
        self.keys.extend(keys)

    def pause(self, ms: int) -> None:
        self.pauses.append(ms)

    def wait_until(self, predicate: Callable[[], bool], timeout_ms: int, timeout_msg: str | None = None) -> None:
        poll_until(predicate, timeout_ms, timeout_msg, interval_ms=1)


@pytest.fixture
def driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def ctx(driver: FakeDriver):
    from testgenius.context import ExecutionContext

    return ExecutionContext(driver=driver)


@pytest.fixture(autouse=True)
def _no_sleep(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setattr(time, "sleep", lambda _s: None)
