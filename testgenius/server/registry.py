"""
Tool registry: one ExecutionContext per session, seven tools bound to it.

The registry owns the context; every tool it builds shares that instance,
so telemetry written by one call is visible to the next.
"""

from __future__ import annotations

import logging
from typing import Any

from ..context import ExecutionContext
from ..driver import Driver
from ..tools import (
    ActionTool,
    create_click_tool,
    create_extract_tool,
    create_fill_tool,
    create_navigation_tool,
    create_screenshot_tool,
    create_verify_tool,
    create_wait_tool,
)
from ..tools.screenshot import DEFAULT_SCREENSHOT_DIR
from .types import ToolOutcome

logger = logging.getLogger("testgenius.registry")


class ToolRegistry:
    """Registry of action tools for a single browser session."""

    def __init__(self, driver: Driver, *, screenshot_dir: str = DEFAULT_SCREENSHOT_DIR) -> None:
        self.context = ExecutionContext(driver=driver)
        ctx = self.context
        tools = [
            create_navigation_tool(ctx),
            create_click_tool(ctx),
            create_fill_tool(ctx),
            create_verify_tool(ctx),
            create_wait_tool(ctx),
            create_screenshot_tool(ctx, screenshot_dir),
            create_extract_tool(ctx),
        ]
        self._tools: dict[str, ActionTool] = {tool.name: tool for tool in tools}
        logger.info("total smart tools available: %d", len(self._tools))

    @property
    def tools(self) -> list[ActionTool]:
        return list(self._tools.values())

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools.keys())

    def has(self, name: str) -> bool:
        return name in self._tools

    def get(self, name: str) -> ActionTool | None:
        return self._tools.get(name)

    def definitions(self) -> list[dict[str, Any]]:
        """Planner-facing contract: name, description, inputSchema per tool."""
        return [tool.definition() for tool in self._tools.values()]

    def dispatch(self, name: str, arguments: dict[str, Any] | None = None) -> ToolOutcome:
        tool = self._tools.get(name)
        if tool is None:
            raise KeyError(f"Unknown tool: {name}")
        return tool.run(arguments)

    def call(self, name: str, arguments: dict[str, Any] | None = None) -> str:
        return self.dispatch(name, arguments).to_text()


def create_all_tools(driver: Driver, *, screenshot_dir: str = DEFAULT_SCREENSHOT_DIR) -> list[ActionTool]:
    """Build the seven tools around a fresh context for `driver`."""
    return ToolRegistry(driver, screenshot_dir=screenshot_dir).tools
