"""
Base utilities for the action tools.

Provides:
- ToolError: hard failure raised inside a tool body
- ActionTool: name + description + input schema + handler bound to one context
- tool_boundary: converts every exception into a failure outcome
- require: required-parameter check naming the missing field
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import wraps
from typing import Any

from ..context import ExecutionContext
from ..server.types import ToolOutcome

logger = logging.getLogger("testgenius.tools")

ToolHandler = Callable[[dict[str, Any]], ToolOutcome]


@dataclass(eq=False)
class ToolError(Exception):
    """Hard failure: malformed call or unresolvable target."""

    tool: str
    reason: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True)
class ActionTool:
    """A planner-callable tool closed over one ExecutionContext."""

    name: str
    description: str
    input_schema: dict[str, Any]
    handler: ToolHandler

    @classmethod
    def from_definition(cls, definition: dict[str, Any], handler: ToolHandler) -> ActionTool:
        return cls(
            name=definition["name"],
            description=definition["description"],
            input_schema=definition["inputSchema"],
            handler=handler,
        )

    def run(self, params: dict[str, Any] | None = None) -> ToolOutcome:
        return self.handler(dict(params or {}))

    def __call__(self, params: dict[str, Any] | None = None) -> str:
        return self.run(params).to_text()

    def definition(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


def tool_boundary(label: str, *, telemetry: bool = True) -> Callable:
    """Catch everything a tool body raises and report it as a failure outcome.

    With `telemetry=True` each caught failure bumps the context's error count.
    """

    def decorator(func: Callable[..., ToolOutcome]) -> Callable:
        @wraps(func)
        def wrapper(ctx: ExecutionContext, params: dict[str, Any], **kwargs: Any) -> ToolOutcome:
            try:
                return func(ctx, params, **kwargs)
            except Exception as exc:  # noqa: BLE001
                if telemetry:
                    ctx.record_error()
                logger.info("%s failed: %s", label, exc)
                return ToolOutcome.failure(f"{label} failed: {exc}")

        return wrapper

    return decorator


def require(params: dict[str, Any], key: str, tool: str, *, purpose: str | None = None) -> Any:
    """Return a required parameter or raise a ToolError naming it."""
    value = params.get(key)
    if value is None or value == "":
        what = f" for {purpose}" if purpose else ""
        raise ToolError(tool=tool, reason=f"{key} is required{what}")
    return value
