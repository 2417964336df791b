"""
Chrome DevTools Protocol implementation of the driver capability.

Query expressions follow the selector resolver's conventions:
- `xpath=<expr>` or an expression starting with `/` or `(` is evaluated as XPath
- anything else is a CSS selector for `document.querySelectorAll`

Element handles are lazy: every operation re-runs the query, so a handle
stays valid across re-renders as long as the expression still matches.
"""

from __future__ import annotations

import base64
import json
import logging
import time
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from .config import ToolkitConfig
from .driver import ElementNotFoundError, poll_until
from .http_client import HttpClientError, http_get_json
from .launcher import BrowserLauncher
from .session_cdp import CdpConnection

logger = logging.getLogger("testgenius.cdp_driver")

KEY_CODES: dict[str, int] = {
    "Enter": 13,
    "Tab": 9,
    "Escape": 27,
    "Backspace": 8,
    "Delete": 46,
    "ArrowUp": 38,
    "ArrowDown": 40,
    "ArrowLeft": 37,
    "ArrowRight": 39,
    "Home": 36,
    "End": 35,
    "PageUp": 33,
    "PageDown": 34,
}

# Keys that produce a character; Enter needs it for implicit form submission.
_KEY_TEXT: dict[str, str] = {"Enter": "\r", "Tab": "\t"}


def is_xpath(selector: str) -> bool:
    s = selector.lstrip()
    return s.startswith("xpath=") or s.startswith("/") or s.startswith("(")


def nodes_js(selector: str) -> str:
    """JS expression evaluating to an array of the nodes matched by `selector`."""
    if is_xpath(selector):
        expr = selector.lstrip()
        if expr.startswith("xpath="):
            expr = expr[len("xpath=") :]
        return (
            "(() => {"
            f"const r = document.evaluate({json.dumps(expr)}, document, null, "
            "XPathResult.ORDERED_NODE_SNAPSHOT_TYPE, null);"
            "const out = [];"
            "for (let i = 0; i < r.snapshotLength; i++) out.push(r.snapshotItem(i));"
            "return out;"
            "})()"
        )
    return f"Array.from(document.querySelectorAll({json.dumps(selector)}))"


def element_js(selector: str, index: int, body: str) -> str:
    """Wrap `body` so it runs with `el` bound to the index-th match (or null)."""
    return f"(() => {{ const el = {nodes_js(selector)}[{int(index)}] || null; {body} }})()"


class CdpElement:
    """Element handle bound to (query expression, match index)."""

    def __init__(self, driver: CdpDriver, selector: str, index: int = 0) -> None:
        self.driver = driver
        self.selector = selector
        self.index = index

    def __repr__(self) -> str:
        return f"CdpElement({self.selector!r}, index={self.index})"

    def _eval(self, body: str) -> Any:
        return self.driver.eval_js(element_js(self.selector, self.index, body))

    def _require(self, body: str) -> Any:
        found, value = self._eval(f"if (!el) return [false, null]; {body}") or [False, None]
        if not found:
            raise ElementNotFoundError(f'Element not found: "{self.selector}"')
        return value

    def exists(self) -> bool:
        return bool(self._eval("return !!el;"))

    def is_displayed(self) -> bool:
        return bool(
            self._eval(
                "if (!el || !el.isConnected) return false;"
                "const r = el.getBoundingClientRect();"
                "const s = window.getComputedStyle(el);"
                "return r.width > 0 && r.height > 0 && s.visibility !== 'hidden' && s.display !== 'none';"
            )
        )

    def is_enabled(self) -> bool:
        return bool(self._eval("return !!el && !el.disabled;"))

    def click(self) -> None:
        rect = self._require(
            "el.scrollIntoView({block: 'center', inline: 'center'});"
            "const r = el.getBoundingClientRect();"
            "return [true, {x: r.left + r.width / 2, y: r.top + r.height / 2}];"
        )
        self.driver.click_at(float(rect["x"]), float(rect["y"]))

    def get_value(self) -> str:
        value = self._require("return [true, el.value === undefined || el.value === null ? '' : String(el.value)];")
        return value or ""

    def clear(self) -> None:
        self._require(
            "el.value = '';"
            "el.dispatchEvent(new Event('input', {bubbles: true}));"
            "el.dispatchEvent(new Event('change', {bubbles: true}));"
            "return [true, null];"
        )

    def set_value(self, value: str) -> None:
        self._require("el.focus(); el.value = ''; return [true, null];")
        self.driver.insert_text(str(value))
        self._require("el.dispatchEvent(new Event('change', {bubbles: true})); return [true, null];")

    def get_text(self) -> str:
        text = self._require("return [true, el.innerText || el.textContent || ''];")
        return text or ""

    def wait_for_displayed(self, timeout_ms: int) -> None:
        poll_until(
            self.is_displayed,
            timeout_ms,
            f'element ("{self.selector}") still not displayed after {timeout_ms}ms',
            interval_ms=100,
        )

    def wait_for_clickable(self, timeout_ms: int) -> None:
        poll_until(
            lambda: self.is_displayed() and self.is_enabled(),
            timeout_ms,
            f'element ("{self.selector}") still not clickable after {timeout_ms}ms',
            interval_ms=100,
        )


class CdpDriver:
    """Driver capability for one Chrome tab reached over CDP."""

    def __init__(self, connection: CdpConnection, *, screenshot_dir: str = "screenshots", load_timeout: float = 10.0):
        self.conn = connection
        self.screenshot_dir = screenshot_dir
        self.load_timeout = load_timeout
        self._page_enabled = False
        self.launcher: BrowserLauncher | None = None

    @classmethod
    def connect(cls, config: ToolkitConfig, launcher: BrowserLauncher | None = None) -> CdpDriver:
        """Attach to (or launch) Chrome and open a driver on its first page target.

        If anything after the launch fails, a Chrome this call started is stopped
        before the error propagates.
        """
        launcher = launcher or BrowserLauncher(config)
        result = launcher.ensure_running()
        logger.info("browser: %s", result.message)
        try:
            if not launcher.cdp_ready(timeout=1.0):
                raise HttpClientError(f"CDP endpoint not reachable on port {config.cdp_port}: {result.message}")

            targets = [
                t for t in launcher.list_targets() if t.get("type") == "page" and t.get("webSocketDebuggerUrl")
            ]
            if targets:
                target = targets[0]
            else:
                target = http_get_json(f"{config.cdp_http_base}/json/new?about:blank", method="PUT")
            ws_url = target.get("webSocketDebuggerUrl")
            if not ws_url:
                raise HttpClientError("CDP target has no webSocketDebuggerUrl")
            logger.info("attached to tab %s (%s)", target.get("id"), target.get("url"))
            conn = CdpConnection(ws_url, timeout=config.cdp_timeout)
        except BaseException:
            if launcher.stop():
                logger.info("stopped launched browser after failed connect")
            raise
        driver = cls(conn, screenshot_dir=config.screenshot_dir, load_timeout=config.cdp_timeout)
        driver.launcher = launcher
        return driver

    def close(self) -> None:
        """Close the socket; a browser this driver launched is stopped too."""
        self.conn.close()
        if self.launcher is not None:
            self.launcher.stop()

    def _enable_page(self) -> None:
        if not self._page_enabled:
            self.conn.send("Page.enable")
            self._page_enabled = True

    def eval_js(self, expression: str) -> Any:
        """Evaluate JavaScript and return its JSON value (undefined/null map to None)."""
        result = self.conn.send(
            "Runtime.evaluate",
            {"expression": expression, "returnByValue": True, "awaitPromise": True},
        )
        if "exceptionDetails" in result:
            details = result["exceptionDetails"]
            exc = details.get("exception") if isinstance(details, dict) else None
            message = (exc or {}).get("description") or (details or {}).get("text") or "JavaScript error"
            raise HttpClientError(str(message))
        value = result.get("result")
        if not isinstance(value, dict):
            return None
        if value.get("type") == "undefined":
            return None
        if value.get("type") == "object" and value.get("subtype") == "null":
            return None
        return value.get("value")

    def navigate(self, url: str) -> None:
        self._enable_page()
        # A load event buffered during earlier commands belongs to a previous document.
        self.conn.discard_events("Page.loadEventFired")
        result = self.conn.send("Page.navigate", {"url": url})
        if result.get("errorText"):
            raise HttpClientError(f"Navigation to {url} failed: {result['errorText']}")
        if result.get("loaderId"):
            self.conn.wait_for_event("Page.loadEventFired", timeout=self.load_timeout)

    def query(self, selector: str) -> CdpElement:
        # Surface invalid selectors here, like a real query would.
        self.eval_js(f"{nodes_js(selector)}.length")
        return CdpElement(self, selector, 0)

    def query_all(self, selector: str) -> list[CdpElement]:
        count = int(self.eval_js(f"{nodes_js(selector)}.length") or 0)
        return [CdpElement(self, selector, i) for i in range(count)]

    def get_url(self) -> str:
        return self.eval_js("window.location.href") or ""

    def get_title(self) -> str:
        return self.eval_js("document.title") or ""

    def get_page_source(self) -> str:
        return self.eval_js("document.documentElement.outerHTML") or ""

    def execute_script(self, script: str) -> Any:
        return self.eval_js(script)

    def save_screenshot(self, path: str) -> str:
        result = self.conn.send("Page.captureScreenshot", {"format": "png", "fromSurface": True})
        data = result.get("data") or ""
        if not data:
            raise HttpClientError("Screenshot data is empty")
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(base64.b64decode(data))
        return str(out)

    def click_at(self, x: float, y: float) -> None:
        for event_type in ("mousePressed", "mouseReleased"):
            self.conn.send(
                "Input.dispatchMouseEvent",
                {"type": event_type, "x": x, "y": y, "button": "left", "clickCount": 1},
            )

    def insert_text(self, text: str) -> None:
        if text:
            self.conn.send("Input.insertText", {"text": text})

    def send_keys(self, keys: Sequence[str]) -> None:
        for key in keys:
            key_code = KEY_CODES.get(key, ord(key[0].upper()) if len(key) == 1 else 0)
            code = f"Key{key.upper()}" if len(key) == 1 else key
            down: dict[str, Any] = {"type": "keyDown", "key": key, "code": code, "windowsVirtualKeyCode": key_code}
            text = _KEY_TEXT.get(key, key if len(key) == 1 else "")
            if text:
                down["text"] = text
            self.conn.send("Input.dispatchKeyEvent", down)
            self.conn.send(
                "Input.dispatchKeyEvent",
                {"type": "keyUp", "key": key, "code": code, "windowsVirtualKeyCode": key_code},
            )

    def pause(self, ms: int) -> None:
        time.sleep(max(0, ms) / 1000.0)

    def wait_until(self, predicate: Callable[[], bool], timeout_ms: int, timeout_msg: str | None = None) -> None:
        poll_until(predicate, timeout_ms, timeout_msg)


__all__ = ["CdpDriver", "CdpElement", "element_js", "is_xpath", "nodes_js"]
