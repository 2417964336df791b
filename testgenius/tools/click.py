"""
Click tool with multi-strategy element resolution.

The requested strategy is tried once; on a miss the fixed cascade
text → xpath → css → id → name runs (skipping the requested one) and the
first existing match is clicked. The reported strategy is the one that hit.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from ..context import ExecutionContext
from ..driver import ElementHandle
from ..server.definitions import CLICK_TOOL
from ..server.types import ToolOutcome
from .base import ActionTool, ToolError, require, tool_boundary
from .selectors import SelectorStrategy, resolve_with_fallback

logger = logging.getLogger("testgenius.tools.click")

TOOL_NAME = CLICK_TOOL["name"]
DEFAULT_TIMEOUT_MS = 10000


def is_clickable(handle: ElementHandle) -> bool:
    try:
        return bool(handle.is_displayed()) and bool(handle.is_enabled())
    except Exception:  # noqa: BLE001
        return False


@tool_boundary("Click")
def click(ctx: ExecutionContext, params: dict[str, Any]) -> ToolOutcome:
    selector = require(params, "selector", TOOL_NAME)
    strategy = SelectorStrategy.parse(params.get("strategy"))
    timeout = params.get("timeout")
    timeout = DEFAULT_TIMEOUT_MS if timeout is None else int(timeout)
    force = bool(params.get("force", False))
    logger.info("click: %s using %s strategy", selector, strategy.value)

    resolution = resolve_with_fallback(ctx.driver, selector, strategy, tool=TOOL_NAME)
    element = resolution.handle

    element.wait_for_displayed(timeout)
    element.wait_for_clickable(timeout)

    if not is_clickable(element) and not force:
        raise ToolError(tool=TOOL_NAME, reason=f"Element is not clickable: {selector}")

    element.click()
    ctx.record_success("click")
    return ToolOutcome.success(f"Successfully clicked on {selector} using {resolution.strategy.value} strategy")


def create_click_tool(ctx: ExecutionContext) -> ActionTool:
    return ActionTool.from_definition(CLICK_TOOL, partial(click, ctx))
