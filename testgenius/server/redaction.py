"""Redaction of tool arguments before they reach the logs.

Two checks are used:
- `is_secret_name` for argument names and URL query keys
- `is_secret_selector` for fill targets, which also recognizes short
  form-field tokens (cvv, otp, ...) as whole words inside a CSS/XPath string
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_SECRET_MARKERS = (
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "authorization",
    "bearer",
    "cookie",
    "session",
    "api-key",
    "api_key",
    "apikey",
)

# Whole-word only: "pin" must not match "spinner", "auth" not "author".
_SECRET_WORDS = frozenset({"auth", "pass", "pin", "cvv", "cvc", "otp", "ssn", "jwt"})

_WORD_SPLIT = re.compile(r"[^a-z0-9]+")


def _words(raw: str) -> set[str]:
    return {w for w in _WORD_SPLIT.split(raw) if w}


def is_secret_name(name: str) -> bool:
    lowered = (name or "").strip().lower()
    if not lowered:
        return False
    if any(marker in lowered for marker in _SECRET_MARKERS):
        return True
    return lowered in _SECRET_WORDS


def is_secret_selector(selector: str) -> bool:
    """True when a fill target looks like a credential or one-time code field."""
    lowered = (selector or "").lower()
    if any(marker in lowered for marker in _SECRET_MARKERS):
        return True
    return bool(_words(lowered) & _SECRET_WORDS)


def _redacted_summary(value: Any) -> str:
    if isinstance(value, str):
        return f"<redacted str len={len(value)}>"
    return "<redacted>"


def redact_url(url: str) -> str:
    """Drop userinfo and mask sensitive query values; other params stay intact."""
    if not isinstance(url, str) or not url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return url

    netloc = parts.netloc.rsplit("@", 1)[-1]
    query = parts.query
    if query:
        pairs = parse_qsl(query, keep_blank_values=True)
        if any(is_secret_name(k) for k, _ in pairs):
            query = urlencode([(k, "<redacted>" if v and is_secret_name(k) else v) for k, v in pairs])
    if netloc == parts.netloc and query == parts.query:
        return url
    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


def redact_tool_arguments(tool: str, args: dict[str, Any]) -> dict[str, Any]:
    """Redact tool arguments for safe logging.

    - any secret-looking argument name is masked
    - smart_fill values are masked when the target looks like a secret field
    - smart_navigate URLs lose credentials and token-like query values
    """
    out = {key: _redacted_summary(value) if is_secret_name(str(key)) else value for key, value in (args or {}).items()}

    if tool == "smart_fill" and "value" in out and is_secret_selector(str(args.get("selector") or "")):
        out["value"] = _redacted_summary(args.get("value"))
    if tool == "smart_navigate" and isinstance(out.get("url"), str):
        out["url"] = redact_url(out["url"])
    return out
