"""Synchronous CDP WebSocket connection for a single page target."""

from __future__ import annotations

import json
import logging
import socket
import time
from collections import deque
from collections.abc import Callable
from contextlib import suppress
from typing import Any

import websocket

from .http_client import HttpClientError

logger = logging.getLogger("testgenius.cdp")

# Events read while waiting for a command reply; oldest dropped first.
EVENT_BACKLOG = 500


def _is_event(message: dict[str, Any]) -> bool:
    return "id" not in message and isinstance(message.get("method"), str)


def _event_params(message: dict[str, Any]) -> dict[str, Any]:
    params = message.get("params")
    return params if isinstance(params, dict) else {}


class CdpConnection:
    def __init__(self, ws_url: str, timeout: float = 10.0):
        self.ws_url = ws_url
        self.timeout = timeout
        self.ws = websocket.create_connection(ws_url, timeout=timeout)
        self._ids = 0
        self._backlog: deque[dict[str, Any]] = deque(maxlen=EVENT_BACKLOG)

    def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Issue one command and block until its reply; CDP errors raise HttpClientError."""
        self._ids += 1
        command_id = self._ids
        payload: dict[str, Any] = {"id": command_id, "method": method}
        if params:
            payload["params"] = params
        try:
            self.ws.send(json.dumps(payload))
        except (OSError, websocket.WebSocketException) as exc:
            raise HttpClientError(f"{method}: {exc}") from exc

        reply = self._read_until(lambda m: m.get("id") == command_id, self.timeout)
        if reply is None:
            raise HttpClientError(f"{method}: CDP response timed out")
        if "error" in reply:
            raise HttpClientError(f"{method}: {reply['error']}")
        return reply.get("result") or {}

    def discard_events(self, event_name: str) -> int:
        """Drop buffered `event_name` events; returns how many were dropped."""
        stale = [m for m in self._backlog if m.get("method") == event_name]
        for message in stale:
            self._backlog.remove(message)
        return len(stale)

    def wait_for_event(self, event_name: str, timeout: float = 10.0) -> dict[str, Any] | None:
        """Params of the next `event_name` event, or None when none arrives in time."""
        for message in self._backlog:
            if message.get("method") == event_name:
                self._backlog.remove(message)
                return _event_params(message)

        message = self._read_until(lambda m: _is_event(m) and m.get("method") == event_name, timeout)
        if message is None:
            logger.debug("no %s within %.1fs", event_name, timeout)
            return None
        return _event_params(message)

    def _read_until(self, wanted: Callable[[dict[str, Any]], bool], timeout: float) -> dict[str, Any] | None:
        deadline = time.monotonic() + timeout
        while (remaining := deadline - time.monotonic()) > 0:
            message = self._read_one(remaining)
            if message is None:
                continue
            if wanted(message):
                return message
            if _is_event(message):
                self._backlog.append(message)
        return None

    def _read_one(self, remaining: float) -> dict[str, Any] | None:
        # Short socket timeouts keep the deadline loop responsive.
        self.ws.settimeout(min(0.5, remaining))
        try:
            raw = self.ws.recv()
        except (websocket.WebSocketTimeoutException, TimeoutError):
            return None
        except (OSError, websocket.WebSocketException) as exc:
            raise HttpClientError(f"CDP connection lost: {exc}") from exc
        try:
            message = json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            return None
        return message if isinstance(message, dict) else None

    def close(self) -> None:
        sock = getattr(self.ws, "sock", None)
        if sock is None:
            return
        # shutdown() first so a peer that never answers the close frame cannot block us.
        with suppress(OSError):
            sock.shutdown(socket.SHUT_RDWR)
        with suppress(OSError):
            sock.close()


__all__ = ["CdpConnection", "EVENT_BACKLOG"]
