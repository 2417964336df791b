"""
MCP server exposing the action tools to an external planner.

Newline-delimited JSON-RPC 2.0 on stdin/stdout; logs go to stderr. The
browser session is opened on the first tool call and reused afterwards.
"""

from __future__ import annotations

import contextlib
import json
import logging
import sys
from collections.abc import Callable
from typing import Any

from .config import ToolkitConfig
from .driver import Driver
from .server.contract import initialize_result, select_protocol, tools_list
from .server.redaction import redact_tool_arguments
from .server.registry import ToolRegistry
from .server.types import ToolOutcome

logger = logging.getLogger("testgenius")

__all__ = ["McpServer", "main"]


def _write_message(payload: dict[str, Any]) -> None:
    """Write JSON-RPC message to stdout."""
    line = (json.dumps(payload, ensure_ascii=False) + "\n").encode()
    sys.stdout.buffer.write(line)
    sys.stdout.buffer.flush()


def _read_message() -> dict[str, Any] | None:
    """Read JSON-RPC message from stdin; None on EOF."""
    line = sys.stdin.buffer.readline()
    if not line:
        return None
    line = line.strip()
    if not line:
        return {}
    return json.loads(line.decode())


def _connect_cdp(config: ToolkitConfig) -> Driver:
    from .cdp_driver import CdpDriver

    return CdpDriver.connect(config)


class McpServer:
    """MCP server with one browser session and one tool registry."""

    def __init__(
        self,
        config: ToolkitConfig | None = None,
        driver_factory: Callable[[ToolkitConfig], Driver] | None = None,
    ) -> None:
        self.config = config or ToolkitConfig.from_env()
        self._driver_factory = driver_factory or _connect_cdp
        self.driver: Driver | None = None
        self.registry: ToolRegistry | None = None

    def ensure_registry(self) -> ToolRegistry:
        if self.registry is None:
            self.driver = self._driver_factory(self.config)
            self.registry = ToolRegistry(self.driver, screenshot_dir=self.config.screenshot_dir)
        return self.registry

    def handle_initialize(self, request_id: Any, params: dict[str, Any] | None = None) -> None:
        requested = (params or {}).get("protocolVersion") if isinstance(params, dict) else None
        protocol = select_protocol(requested)
        _write_message({"jsonrpc": "2.0", "id": request_id, "result": initialize_result(protocol)})

    def handle_list_tools(self, request_id: Any) -> None:
        _write_message({"jsonrpc": "2.0", "id": request_id, "result": {"tools": tools_list()}})

    def call_tool(self, name: str, arguments: dict[str, Any]) -> ToolOutcome:
        logger.info("tool=%s args=%s", name, redact_tool_arguments(name, arguments))
        if not name:
            return ToolOutcome.failure("Missing tool name")
        if name not in {t["name"] for t in tools_list()}:
            return ToolOutcome.failure(f"Unknown tool: {name}")
        try:
            registry = self.ensure_registry()
        except Exception as exc:
            logger.exception("browser_session_failed")
            return ToolOutcome.failure(f"Browser not initialized: {exc}")
        outcome = registry.dispatch(name, arguments)
        ctx = registry.context
        logger.info(
            "tool=%s ok=%s successes=%d errors=%d", name, outcome.ok, ctx.success_count, ctx.error_count
        )
        return outcome

    def handle_call_tool(self, request_id: Any, name: str, arguments: dict[str, Any]) -> None:
        try:
            outcome = self.call_tool(name, arguments)
        except Exception as exc:
            logger.exception("tool_call_failed")
            outcome = ToolOutcome.failure(str(exc))
        _write_message(
            {
                "jsonrpc": "2.0",
                "id": request_id,
                "result": {"content": outcome.to_content_list(), "isError": not outcome.ok},
            }
        )

    def dispatch(self, message: dict[str, Any]) -> None:
        """Dispatch incoming JSON-RPC message to appropriate handler."""
        if not message:
            return

        method = message.get("method")
        request_id = message.get("id")
        params = message.get("params") or {}

        if method == "initialize":
            self.handle_initialize(request_id, params)
        elif method == "notifications/initialized":
            return
        elif method in ("tools/list", "list_tools"):
            self.handle_list_tools(request_id)
        elif method in ("tools/call", "call_tool"):
            name = params.get("name")
            arguments = params.get("arguments") or {}
            self.handle_call_tool(request_id, name or "", arguments)
        elif method == "ping":
            _write_message({"jsonrpc": "2.0", "id": request_id, "result": {}})
        else:
            _write_message(
                {
                    "jsonrpc": "2.0",
                    "id": request_id,
                    "error": {"code": -32601, "message": f"Method {method} not found"},
                }
            )

    def close(self) -> None:
        close = getattr(self.driver, "close", None)
        if callable(close):
            with contextlib.suppress(Exception):
                close()


def main() -> None:
    """Main entry point for the MCP server."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    server = McpServer()
    try:
        while True:
            try:
                message = _read_message()
            except json.JSONDecodeError as exc:
                logger.warning("invalid_json: %s", exc)
                _write_message({"jsonrpc": "2.0", "id": None, "error": {"code": -32700, "message": "Parse error"}})
                continue
            if message is None:
                break
            server.dispatch(message)
    finally:
        server.close()


if __name__ == "__main__":
    main()
