"""Screenshot tool: save a PNG of the current viewport."""

from __future__ import annotations

import logging
from contextlib import suppress
from datetime import datetime, timezone
from functools import partial
from pathlib import Path
from typing import Any

from PIL import Image

from ..context import ExecutionContext
from ..server.definitions import SCREENSHOT_TOOL
from ..server.types import ToolOutcome
from .base import ActionTool, tool_boundary

logger = logging.getLogger("testgenius.tools.screenshot")

TOOL_NAME = SCREENSHOT_TOOL["name"]
DEFAULT_SCREENSHOT_DIR = "screenshots"


def default_screenshot_name(now: datetime | None = None) -> str:
    """screenshot-<ISO timestamp> with ':' and '.' made filename-safe."""
    now = now or datetime.now(timezone.utc)
    stamp = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return "screenshot-" + stamp.replace(":", "-").replace(".", "-")


def image_size(path: str) -> tuple[int, int] | None:
    with suppress(OSError), Image.open(path) as img:
        return img.size
    return None


@tool_boundary("Screenshot")
def screenshot(ctx: ExecutionContext, params: dict[str, Any], *, screenshot_dir: str) -> ToolOutcome:
    name = params.get("name") or default_screenshot_name()
    logger.info("screenshot: %s", name)
    target = Path(screenshot_dir) / f"{name}.png"

    saved = ctx.driver.save_screenshot(str(target)) or str(target)

    ctx.record_success("screenshot")
    size = image_size(saved)
    suffix = f" ({size[0]}x{size[1]})" if size else ""
    return ToolOutcome.success(f"Screenshot saved: {saved}{suffix}")


def create_screenshot_tool(ctx: ExecutionContext, screenshot_dir: str = DEFAULT_SCREENSHOT_DIR) -> ActionTool:
    return ActionTool.from_definition(SCREENSHOT_TOOL, partial(screenshot, ctx, screenshot_dir=screenshot_dir))
