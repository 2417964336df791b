"""
Wait tool: block until an element, some text, or a fixed delay.

Waits leave session telemetry untouched, whether they succeed or time out.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from ..context import ExecutionContext
from ..server.definitions import WAIT_TOOL, WAIT_TYPES
from ..server.types import ToolOutcome
from .base import ActionTool, ToolError, require, tool_boundary

logger = logging.getLogger("testgenius.tools.wait")

TOOL_NAME = WAIT_TOOL["name"]
DEFAULT_TIMEOUT_MS = 10000
NETWORK_SETTLE_MS = 2000


@tool_boundary("Wait", telemetry=False)
def wait(ctx: ExecutionContext, params: dict[str, Any]) -> ToolOutcome:
    kind = params.get("type")
    selector = params.get("selector")
    value = params.get("value")
    timeout = params.get("timeout")
    timeout = DEFAULT_TIMEOUT_MS if timeout is None else int(timeout)
    logger.info("wait: %s - %s", kind, selector or value or f"{timeout}ms")

    driver = ctx.driver
    if kind == "element":
        selector = require(params, "selector", TOOL_NAME, purpose="element wait")
        driver.query(selector).wait_for_displayed(timeout)
        return ToolOutcome.success(f'Element "{selector}" is now visible')

    if kind == "text":
        value = require(params, "value", TOOL_NAME, purpose="text wait")
        driver.wait_until(
            lambda: value in driver.get_page_source(),
            timeout,
            f'Text "{value}" not found within {timeout}ms',
        )
        return ToolOutcome.success(f'Text "{value}" is now present on page')

    if kind == "time":
        driver.pause(timeout)
        return ToolOutcome.success(f"Waited for {timeout}ms")

    if kind == "network":
        # Fixed settle delay, not real network-idle detection.
        driver.pause(NETWORK_SETTLE_MS)
        return ToolOutcome.success("Network activity has settled")

    raise ToolError(tool=TOOL_NAME, reason=f"Unknown wait type: {kind} (use one of: {', '.join(WAIT_TYPES)})")


def create_wait_tool(ctx: ExecutionContext) -> ActionTool:
    return ActionTool.from_definition(WAIT_TOOL, partial(wait, ctx))
