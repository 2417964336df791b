"""
Fill tool: write a value into an input and read it back.

A value mismatch after writing is reported as a warning but still counts as
a completed fill; only an unresolvable field is an error.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from ..context import ExecutionContext
from ..driver import ElementHandle
from ..server.definitions import FILL_TOOL
from ..server.types import ToolOutcome
from .base import ActionTool, ToolError, require, tool_boundary
from .heuristics import pick_heuristic
from .selectors import handle_exists

logger = logging.getLogger("testgenius.tools.fill")

TOOL_NAME = FILL_TOOL["name"]
DISPLAY_TIMEOUT_MS = 10000
CLEAR_PAUSE_MS = 200
RECLEAR_PAUSE_MS = 100


def locate_field(ctx: ExecutionContext, selector: str) -> tuple[str, ElementHandle | None]:
    """Return (selector actually used, handle) after applying field heuristics."""
    heuristic = pick_heuristic(selector)
    if heuristic is not None:
        hit = heuristic.match(ctx.driver, selector)
        if hit is not None:
            return hit
    try:
        return selector, ctx.driver.query(selector)
    except Exception:  # noqa: BLE001
        return selector, None


@tool_boundary("Fill")
def fill(ctx: ExecutionContext, params: dict[str, Any]) -> ToolOutcome:
    selector = require(params, "selector", TOOL_NAME)
    if params.get("value") is None:
        raise ToolError(tool=TOOL_NAME, reason="value is required")
    value = str(params["value"])
    clear_first = params.get("clearFirst", True)
    press_enter = params.get("pressEnter", False)
    logger.info("fill: %s", selector)

    final_selector, element = locate_field(ctx, selector)
    if not handle_exists(element):
        raise ToolError(tool=TOOL_NAME, reason=f"Field not found: {selector}")

    driver = ctx.driver
    element.wait_for_displayed(DISPLAY_TIMEOUT_MS)

    if clear_first:
        element.clear()
        driver.pause(CLEAR_PAUSE_MS)
        leftover = element.get_value()
        if leftover:
            logger.info("field still contains %d chars after clear, re-clearing", len(leftover))
            element.set_value("")
            driver.pause(RECLEAR_PAUSE_MS)

    # "fill" and "type" write the same way.
    element.set_value(value)

    if press_enter:
        driver.send_keys(["Enter"])

    actual = element.get_value()
    ctx.record_success("fill")
    if actual == value:
        return ToolOutcome.success(f'Successfully filled {final_selector} with "{value}"')
    return ToolOutcome.warning(f'Filled {final_selector} but value is "{actual}" instead of "{value}"')


def create_fill_tool(ctx: ExecutionContext) -> ActionTool:
    return ActionTool.from_definition(FILL_TOOL, partial(fill, ctx))
