"""Content extraction tool (read-only)."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from ..context import ExecutionContext
from ..server.definitions import CONTENT_TYPES, GET_CONTENT_TOOL
from ..server.types import ToolOutcome
from .base import ActionTool, ToolError, require, tool_boundary
from .selectors import handle_exists

logger = logging.getLogger("testgenius.tools.extract")

TOOL_NAME = GET_CONTENT_TOOL["name"]
SUMMARY_LIMIT = 500
PAGE_TEXT_JS = "document.body ? (document.body.innerText || document.body.textContent || '') : ''"


def summarize(content: str, limit: int = SUMMARY_LIMIT) -> str:
    """Cut to `limit` chars, adding '...' only when something was cut."""
    if len(content) > limit:
        return content[:limit] + "..."
    return content


@tool_boundary("Get content")
def get_content(ctx: ExecutionContext, params: dict[str, Any]) -> ToolOutcome:
    kind = params.get("type") or "text"
    selector = params.get("selector")
    logger.info("get content: %s%s", kind, f" - {selector}" if selector else "")

    driver = ctx.driver
    if kind == "full":
        content = driver.get_page_source()
    elif kind == "text":
        if selector:
            element = driver.query(selector)
            if not handle_exists(element):
                raise ToolError(tool=TOOL_NAME, reason=f"Element not found: {selector}")
            content = element.get_text()
        else:
            content = driver.execute_script(PAGE_TEXT_JS) or ""
    elif kind == "elements":
        selector = require(params, "selector", TOOL_NAME, purpose="elements content")
        content = "\n".join(el.get_text() for el in driver.query_all(selector))
    else:
        raise ToolError(
            tool=TOOL_NAME,
            reason=f"Unknown content type: {kind} (use one of: {', '.join(CONTENT_TYPES)})",
        )

    ctx.record_success("get_content")
    return ToolOutcome.content(f"Content retrieved ({kind}):\n{summarize(str(content))}")


def create_extract_tool(ctx: ExecutionContext) -> ActionTool:
    return ActionTool.from_definition(GET_CONTENT_TOOL, partial(get_content, ctx))
