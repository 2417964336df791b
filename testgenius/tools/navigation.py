"""Navigation tool: load a URL and record where the session ended up."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from ..context import ExecutionContext
from ..server.definitions import NAVIGATE_TOOL
from ..server.types import ToolOutcome
from .base import ActionTool, require, tool_boundary

logger = logging.getLogger("testgenius.tools.navigation")

TOOL_NAME = NAVIGATE_TOOL["name"]
SETTLE_PAUSE_MS = 2000
READY_TIMEOUT_MS = 10000


@tool_boundary("Navigation")
def navigate(ctx: ExecutionContext, params: dict[str, Any]) -> ToolOutcome:
    url = require(params, "url", TOOL_NAME)
    wait_for_load = params.get("waitForLoad", True)
    logger.info("navigate: %s", url)

    driver = ctx.driver
    driver.navigate(url)
    if wait_for_load:
        driver.pause(SETTLE_PAUSE_MS)
        driver.wait_until(
            lambda: driver.execute_script("document.readyState") == "complete",
            READY_TIMEOUT_MS,
            "Page load timeout",
        )

    ctx.current_url = driver.get_url()
    ctx.page_title = driver.get_title()
    ctx.record_success("navigation")
    return ToolOutcome.success(
        f"Successfully navigated to {url}. Current URL: {ctx.current_url}, Page Title: {ctx.page_title}"
    )


def create_navigation_tool(ctx: ExecutionContext) -> ActionTool:
    return ActionTool.from_definition(NAVIGATE_TOOL, partial(navigate, ctx))
