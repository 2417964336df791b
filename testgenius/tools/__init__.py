"""
Action tools exposed to the planner.

Each module provides one tool factory closed over an ExecutionContext:
- navigation: smart_navigate
- click: smart_click (strategy cascade)
- fill: smart_fill (field heuristics, read-back)
- verify: smart_verify
- wait: smart_wait
- screenshot: smart_screenshot
- extract: smart_get_content

Shared pieces live in base, selectors and heuristics; detector holds the
description-driven element finder.
"""

from .base import ActionTool, ToolError, tool_boundary
from .click import create_click_tool
from .detector import ElementMatch, SmartElementDetector
from .extract import create_extract_tool
from .fill import create_fill_tool
from .heuristics import EMAIL_FIELD, FIELD_HEURISTICS, PASSWORD_FIELD, FieldHeuristic
from .navigation import create_navigation_tool
from .screenshot import create_screenshot_tool
from .selectors import (
    FALLBACK_ORDER,
    Resolution,
    SelectorStrategy,
    StrategiesExhaustedError,
    build_query,
    resolve,
    resolve_with_fallback,
)
from .verify import create_verify_tool
from .wait import create_wait_tool

__all__ = [
    "ActionTool",
    "EMAIL_FIELD",
    "ElementMatch",
    "FALLBACK_ORDER",
    "FIELD_HEURISTICS",
    "FieldHeuristic",
    "PASSWORD_FIELD",
    "Resolution",
    "SelectorStrategy",
    "SmartElementDetector",
    "StrategiesExhaustedError",
    "ToolError",
    "build_query",
    "create_click_tool",
    "create_extract_tool",
    "create_fill_tool",
    "create_navigation_tool",
    "create_screenshot_tool",
    "create_verify_tool",
    "create_wait_tool",
    "resolve",
    "resolve_with_fallback",
    "tool_boundary",
]
