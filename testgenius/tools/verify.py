"""
Verification tool.

A false predicate is a normal result (counted as an error, never raised);
malformed calls such as a missing selector are hard failures. The two are
told apart only by message text.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from typing import Any

from ..context import ExecutionContext
from ..server.definitions import VERIFY_TOOL, VERIFY_TYPES
from ..server.types import ToolOutcome
from .base import ActionTool, ToolError, require, tool_boundary
from .selectors import handle_exists

logger = logging.getLogger("testgenius.tools.verify")

TOOL_NAME = VERIFY_TOOL["name"]

# (passed, message)
Check = tuple[bool, str]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _verify_text(ctx: ExecutionContext, selector: str | None, expected: Any) -> Check:
    selector = require({"selector": selector}, "selector", TOOL_NAME, purpose="text verification")
    element = ctx.driver.query(selector)
    if not handle_exists(element):
        raise ToolError(tool=TOOL_NAME, reason=f"Element not found: {selector}")
    actual = element.get_text()
    if str(expected) in actual:
        return True, f'Text verification passed: "{expected}" found in "{actual}"'
    return False, f'Text verification failed: expected "{expected}" but found "{actual}"'


def _verify_element(ctx: ExecutionContext, selector: str | None, expected: Any) -> Check:  # noqa: ARG001
    selector = require({"selector": selector}, "selector", TOOL_NAME, purpose="element verification")
    if handle_exists(ctx.driver.query(selector)):
        return True, f'Element verification passed: "{selector}" exists'
    return False, f'Element verification failed: "{selector}" not found'


def _verify_url(ctx: ExecutionContext, selector: str | None, expected: Any) -> Check:  # noqa: ARG001
    current = ctx.driver.get_url()
    if str(expected) in current:
        return True, f'URL verification passed: "{expected}" found in "{current}"'
    return False, f'URL verification failed: expected "{expected}" but current URL is "{current}"'


def _verify_title(ctx: ExecutionContext, selector: str | None, expected: Any) -> Check:  # noqa: ARG001
    title = ctx.driver.get_title()
    if str(expected) in title:
        return True, f'Title verification passed: "{expected}" found in "{title}"'
    return False, f'Title verification failed: expected "{expected}" but title is "{title}"'


def _verify_count(ctx: ExecutionContext, selector: str | None, expected: Any) -> Check:
    selector = require({"selector": selector}, "selector", TOOL_NAME, purpose="count verification")
    actual = len(ctx.driver.query_all(selector))
    # Exact numeric equality: "3" is not 3.
    if _is_number(expected) and actual == expected:
        return True, f'Count verification passed: found {actual} elements matching "{selector}"'
    return False, f"Count verification failed: expected {expected} but found {actual} elements"


CHECKS: dict[str, Callable[[ExecutionContext, str | None, Any], Check]] = {
    "text": _verify_text,
    "element": _verify_element,
    "url": _verify_url,
    "title": _verify_title,
    "count": _verify_count,
}


@tool_boundary("Verification")
def verify(ctx: ExecutionContext, params: dict[str, Any]) -> ToolOutcome:
    kind = params.get("type")
    selector = params.get("selector")
    expected = params.get("expected")
    # `timeout` is accepted for contract compatibility; checks are single-shot.
    logger.info("verify: %s - %s", kind, expected)

    check = CHECKS.get(str(kind))
    if check is None:
        raise ToolError(
            tool=TOOL_NAME,
            reason=f"Unknown verification type: {kind} (use one of: {', '.join(VERIFY_TYPES)})",
        )

    passed, message = check(ctx, selector, expected)
    if passed:
        ctx.record_success()
        return ToolOutcome.success(message)
    ctx.record_error()
    return ToolOutcome.failure(message)


def create_verify_tool(ctx: ExecutionContext) -> ActionTool:
    return ActionTool.from_definition(VERIFY_TOOL, partial(verify, ctx))
