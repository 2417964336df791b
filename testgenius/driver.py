"""
Driver capability consumed by the action tools.

The tools never talk to a browser directly. They go through these two
protocols, so any backend (the bundled CDP driver, a test double) can serve
a session as long as it exposes the same surface.

Timeouts and pauses are expressed in milliseconds throughout.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

DEFAULT_POLL_INTERVAL_MS = 500


class WaitTimeoutError(Exception):
    """A bounded wait expired before its condition became true."""


class ElementNotFoundError(LookupError):
    """An element operation ran after its query stopped matching."""


@runtime_checkable
class ElementHandle(Protocol):
    """Lazy handle for a single element matched by a query expression."""

    def exists(self) -> bool: ...

    def is_displayed(self) -> bool: ...

    def is_enabled(self) -> bool: ...

    def click(self) -> None: ...

    def get_value(self) -> str: ...

    def set_value(self, value: str) -> None: ...

    def clear(self) -> None: ...

    def get_text(self) -> str: ...

    def wait_for_displayed(self, timeout_ms: int) -> None: ...

    def wait_for_clickable(self, timeout_ms: int) -> None: ...


@runtime_checkable
class Driver(Protocol):
    """Browser session capability (one tab, one owner)."""

    def navigate(self, url: str) -> None: ...

    def query(self, selector: str) -> ElementHandle: ...

    def query_all(self, selector: str) -> list[ElementHandle]: ...

    def get_url(self) -> str: ...

    def get_title(self) -> str: ...

    def get_page_source(self) -> str: ...

    def execute_script(self, script: str) -> Any: ...

    def save_screenshot(self, path: str) -> str: ...

    def send_keys(self, keys: Sequence[str]) -> None: ...

    def pause(self, ms: int) -> None: ...

    def wait_until(self, predicate: Callable[[], bool], timeout_ms: int, timeout_msg: str | None = None) -> None: ...


def poll_until(
    predicate: Callable[[], bool],
    timeout_ms: int,
    timeout_msg: str | None = None,
    *,
    interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
) -> None:
    """Poll `predicate` until it returns truthy or `timeout_ms` elapses.

    Exceptions raised by the predicate count as "not yet"; the last one is
    chained onto the WaitTimeoutError for context.
    """
    deadline = time.monotonic() + max(0, timeout_ms) / 1000.0
    last_error: Exception | None = None
    while True:
        try:
            if predicate():
                return
        except Exception as exc:  # noqa: BLE001
            last_error = exc
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        time.sleep(min(interval_ms / 1000.0, remaining))
    message = timeout_msg or f"Condition not met within {timeout_ms}ms"
    if last_error is not None:
        raise WaitTimeoutError(message) from last_error
    raise WaitTimeoutError(message)


__all__ = [
    "DEFAULT_POLL_INTERVAL_MS",
    "Driver",
    "ElementHandle",
    "ElementNotFoundError",
    "WaitTimeoutError",
    "poll_until",
]
