"""Planner-facing server package.

Keep this package import light: the tools import `server.types`, so the
registry (which imports the tools) is only loaded on first attribute access.
"""

from __future__ import annotations

from typing import Any

__all__ = ["ToolOutcome", "ToolRegistry", "create_all_tools"]


def __getattr__(name: str) -> Any:  # pragma: no cover
    if name in {"ToolRegistry", "create_all_tools"}:
        from .registry import ToolRegistry, create_all_tools

        return {"ToolRegistry": ToolRegistry, "create_all_tools": create_all_tools}[name]
    if name == "ToolOutcome":
        from .types import ToolOutcome

        return ToolOutcome
    raise AttributeError(name)
