from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_BINARY_CANDIDATES: list[str] = [
    "/usr/bin/chromium",
    "/usr/bin/chromium-browser",
    "/usr/local/bin/chromium",
    "/Applications/Chromium.app/Contents/MacOS/Chromium",
    "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
    "/usr/bin/google-chrome",
    "/usr/bin/google-chrome-stable",
    "C:\\Program Files\\Google\\Chrome\\Application\\chrome.exe",
    "C:\\Program Files (x86)\\Google\\Chrome\\Application\\chrome.exe",
    # Snap builds ignore --user-data-dir; keep them last.
    "/snap/bin/chromium",
]


def expand_path(raw: str) -> str:
    return str(Path(raw).expanduser())


@dataclass
class ToolkitConfig:
    binary_path: str
    profile_path: str
    cdp_port: int = 9222
    mode: str = "launch"
    headless: bool = True
    extra_flags: list[str] = field(default_factory=list)
    screenshot_dir: str = "screenshots"
    cdp_timeout: float = 10.0

    @staticmethod
    def normalize_mode(raw: str | None) -> str:
        mode = (raw or "").strip().lower()
        if mode in {"attach", "connect", "external"}:
            return "attach"
        return "launch"

    @classmethod
    def detect_binary(cls) -> str:
        env_path = os.environ.get("TESTGENIUS_BROWSER_BINARY")
        if env_path:
            return expand_path(env_path)
        for candidate in DEFAULT_BINARY_CANDIDATES:
            path = Path(candidate)
            if path.exists() and os.access(str(path), os.X_OK):
                return str(path)
        # Last resort: rely on PATH lookup
        return "google-chrome"

    @classmethod
    def from_env(cls) -> ToolkitConfig:
        mode = cls.normalize_mode(os.environ.get("TESTGENIUS_BROWSER_MODE"))
        profile = expand_path(os.environ.get("TESTGENIUS_BROWSER_PROFILE", "~/.testgenius/browser-profile"))
        port = int(os.environ.get("TESTGENIUS_CDP_PORT", "9222"))
        flags_raw = os.environ.get("TESTGENIUS_BROWSER_FLAGS", "")
        extra_flags = [flag.strip() for flag in flags_raw.split(",") if flag.strip()]
        headless = os.environ.get("TESTGENIUS_HEADLESS", "1") != "0"
        screenshot_dir = expand_path(os.environ.get("TESTGENIUS_SCREENSHOT_DIR", "screenshots"))
        timeout = float(os.environ.get("TESTGENIUS_CDP_TIMEOUT", "10"))
        return cls(
            binary_path=cls.detect_binary(),
            profile_path=profile,
            cdp_port=port,
            mode=mode,
            headless=headless,
            extra_flags=extra_flags,
            screenshot_dir=screenshot_dir,
            cdp_timeout=timeout,
        )

    @property
    def cdp_http_base(self) -> str:
        return f"http://127.0.0.1:{self.cdp_port}"
