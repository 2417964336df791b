"""
Outcome type returned by every action tool.

Tools keep success/failure as data; the planner-facing text (a marker prefix
plus message) is produced only when the outcome crosses the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

MARKERS: dict[str, str] = {
    "success": "✅",
    "warning": "⚠️",
    "failure": "❌",
    "content": "📄",
}


@dataclass(slots=True, frozen=True)
class ToolOutcome:
    """Result of a tool execution."""

    ok: bool
    message: str
    kind: str = "success"

    @classmethod
    def success(cls, message: str) -> ToolOutcome:
        return cls(ok=True, message=message, kind="success")

    @classmethod
    def warning(cls, message: str) -> ToolOutcome:
        """Completed, but the read-back did not match what was requested."""
        return cls(ok=True, message=message, kind="warning")

    @classmethod
    def failure(cls, message: str) -> ToolOutcome:
        return cls(ok=False, message=message, kind="failure")

    @classmethod
    def content(cls, message: str) -> ToolOutcome:
        return cls(ok=True, message=message, kind="content")

    def to_text(self) -> str:
        return f"{MARKERS.get(self.kind, MARKERS['failure'])} {self.message}"

    def __str__(self) -> str:
        return self.to_text()

    def to_content_list(self) -> list[dict[str, Any]]:
        """Convert to MCP content list format."""
        return [{"type": "text", "text": self.to_text()}]
