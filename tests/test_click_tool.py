from __future__ import annotations

from conftest import FakeDriver, FakeElement

from testgenius.context import ExecutionContext
from testgenius.tools.click import create_click_tool


def test_click_with_requested_strategy(ctx: ExecutionContext, driver: FakeDriver) -> None:
    el = driver.add("#submit")
    tool = create_click_tool(ctx)

    out = tool({"selector": "#submit"})

    assert out == "✅ Successfully clicked on #submit using css strategy"
    assert el.clicks == 1
    assert ctx.success_count == 1
    assert ctx.last_action == "click"


def test_click_reports_fallback_strategy(ctx: ExecutionContext, driver: FakeDriver) -> None:
    el = driver.add("//*[contains(text(), 'Sign in')]")
    out = create_click_tool(ctx)({"selector": "Sign in", "strategy": "css"})
    assert out == "✅ Successfully clicked on Sign in using text strategy"
    assert el.clicks == 1


def test_click_missing_element_is_failure(ctx: ExecutionContext) -> None:
    out = create_click_tool(ctx)({"selector": "Ghost"})
    assert out == "❌ Click failed: Element not found using any strategy: Ghost"
    assert ctx.error_count == 1
    assert ctx.success_count == 0
    assert ctx.last_action is None


def test_click_hidden_element_times_out(ctx: ExecutionContext, driver: FakeDriver) -> None:
    el = driver.add("#hidden", FakeElement(displayed=False))
    out = create_click_tool(ctx)({"selector": "#hidden", "timeout": 50})
    assert out.startswith("❌ Click failed:")
    assert "50ms" in out
    assert el.clicks == 0
    assert ctx.error_count == 1


def test_force_click_skips_clickability_gate(ctx: ExecutionContext, driver: FakeDriver) -> None:
    class Flaky(FakeElement):
        """Passes the waits, then reports disabled on the final check."""

        def wait_for_clickable(self, timeout_ms: int) -> None:
            self.enabled = False

    el = driver.add("#late", Flaky())
    tool = create_click_tool(ctx)

    out = tool({"selector": "#late"})
    assert out == "❌ Click failed: Element is not clickable: #late"
    assert el.clicks == 0

    out = tool({"selector": "#late", "force": True})
    assert out.startswith("✅")
    assert el.clicks == 1


def test_click_requires_selector(ctx: ExecutionContext) -> None:
    out = create_click_tool(ctx)({})
    assert out == "❌ Click failed: selector is required"
    assert ctx.error_count == 1


def test_explicit_zero_timeout_is_passed_through(ctx: ExecutionContext, driver: FakeDriver) -> None:
    class Recording(FakeElement):
        def __init__(self) -> None:
            super().__init__()
            self.timeouts: list[int] = []

        def wait_for_displayed(self, timeout_ms: int) -> None:
            self.timeouts.append(timeout_ms)

        def wait_for_clickable(self, timeout_ms: int) -> None:
            self.timeouts.append(timeout_ms)

    el = driver.add("#now", Recording())
    tool = create_click_tool(ctx)

    tool({"selector": "#now", "timeout": 0})
    tool({"selector": "#now"})

    assert el.timeouts == [0, 0, 10000, 10000]
