from __future__ import annotations

import pytest

from testgenius.config import ToolkitConfig
from testgenius.launcher import BrowserLauncher


def test_from_env_reads_testgenius_variables(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:  # noqa: ANN001
    monkeypatch.setenv("TESTGENIUS_BROWSER_BINARY", "/opt/chrome/chrome")
    monkeypatch.setenv("TESTGENIUS_BROWSER_PROFILE", str(tmp_path / "profile"))
    monkeypatch.setenv("TESTGENIUS_CDP_PORT", "9333")
    monkeypatch.setenv("TESTGENIUS_BROWSER_MODE", "connect")
    monkeypatch.setenv("TESTGENIUS_BROWSER_FLAGS", "--lang=en, --mute-audio ,")
    monkeypatch.setenv("TESTGENIUS_HEADLESS", "0")
    monkeypatch.setenv("TESTGENIUS_SCREENSHOT_DIR", str(tmp_path / "shots"))
    monkeypatch.setenv("TESTGENIUS_CDP_TIMEOUT", "2.5")

    cfg = ToolkitConfig.from_env()

    assert cfg.binary_path == "/opt/chrome/chrome"
    assert cfg.profile_path == str(tmp_path / "profile")
    assert cfg.cdp_port == 9333
    assert cfg.mode == "attach"
    assert cfg.extra_flags == ["--lang=en", "--mute-audio"]
    assert cfg.headless is False
    assert cfg.screenshot_dir == str(tmp_path / "shots")
    assert cfg.cdp_timeout == 2.5
    assert cfg.cdp_http_base == "http://127.0.0.1:9333"


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TESTGENIUS_BROWSER_MODE",
        "TESTGENIUS_CDP_PORT",
        "TESTGENIUS_HEADLESS",
        "TESTGENIUS_BROWSER_FLAGS",
        "TESTGENIUS_SCREENSHOT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    cfg = ToolkitConfig.from_env()
    assert cfg.mode == "launch"
    assert cfg.cdp_port == 9222
    assert cfg.headless is True
    assert cfg.extra_flags == []
    assert cfg.screenshot_dir == "screenshots"


def test_launch_command_flags(tmp_path) -> None:  # noqa: ANN001
    cfg = ToolkitConfig(binary_path="chrome", profile_path=str(tmp_path), cdp_port=9400, extra_flags=["--lang=en"])
    cmd = BrowserLauncher(cfg).build_launch_command()
    assert cmd[0] == "chrome"
    assert "--remote-debugging-port=9400" in cmd
    assert f"--user-data-dir={tmp_path}" in cmd
    assert "--headless=new" in cmd
    assert cmd[-1] == "--lang=en"

    cfg.headless = False
    assert "--headless=new" not in BrowserLauncher(cfg).build_launch_command()


def test_attach_mode_never_launches(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:  # noqa: ANN001
    cfg = ToolkitConfig(binary_path="chrome", profile_path=str(tmp_path), mode="attach")
    launcher = BrowserLauncher(cfg)
    monkeypatch.setattr(launcher, "cdp_ready", lambda timeout=0.4: False)

    result = launcher.ensure_running()

    assert result.started is False
    assert "Attach mode" in result.message
    assert launcher.process is None
