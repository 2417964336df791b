"""Per-session state shared by every action tool built for that session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .driver import Driver


@dataclass
class ExecutionContext:
    """Mutable session telemetry plus the bound driver.

    Counters only ever grow; they are reported to callers, never used for
    control flow. `current_url`/`page_title` are refreshed by navigation only.
    """

    driver: Driver
    current_url: str | None = None
    page_title: str | None = None
    last_action: str | None = None
    success_count: int = 0
    error_count: int = 0

    def __post_init__(self) -> None:
        if self.driver is None:
            raise ValueError("Browser not initialized: ExecutionContext requires a driver")

    def record_success(self, action: str | None = None) -> None:
        if action is not None:
            self.last_action = action
        self.success_count += 1

    def record_error(self) -> None:
        self.error_count += 1

    def snapshot(self) -> dict[str, Any]:
        return {
            "currentUrl": self.current_url,
            "pageTitle": self.page_title,
            "lastAction": self.last_action,
            "successCount": self.success_count,
            "errorCount": self.error_count,
        }
