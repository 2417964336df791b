from __future__ import annotations

import pytest
from conftest import FakeDriver, FakeElement

from testgenius.context import ExecutionContext
from testgenius.server.contract import SUPPORTED_PROTOCOL_VERSIONS, initialize_result, select_protocol, tools_list
from testgenius.server.registry import ToolRegistry, create_all_tools
from testgenius.server.types import ToolOutcome

EXPECTED_TOOLS = [
    "smart_navigate",
    "smart_click",
    "smart_fill",
    "smart_verify",
    "smart_wait",
    "smart_screenshot",
    "smart_get_content",
]


def test_tools_list_order_and_shape() -> None:
    tools = tools_list()
    assert [t["name"] for t in tools] == EXPECTED_TOOLS
    for tool in tools:
        assert set(tool) == {"name", "description", "inputSchema"}
        schema = tool["inputSchema"]
        assert schema["type"] == "object"
        assert schema["additionalProperties"] is False


def test_required_parameters_are_declared() -> None:
    required = {t["name"]: t["inputSchema"].get("required", []) for t in tools_list()}
    assert required["smart_navigate"] == ["url"]
    assert required["smart_click"] == ["selector"]
    assert required["smart_fill"] == ["selector", "value"]
    assert required["smart_verify"] == ["type", "expected"]
    assert required["smart_wait"] == ["type"]
    assert required["smart_screenshot"] == []
    assert required["smart_get_content"] == []


def test_registry_builds_seven_tools_matching_contract(driver: FakeDriver) -> None:
    registry = ToolRegistry(driver)
    assert registry.tool_names == EXPECTED_TOOLS
    assert registry.definitions() == tools_list()
    assert [t.name for t in create_all_tools(driver)] == EXPECTED_TOOLS


def test_tools_share_one_context(driver: FakeDriver) -> None:
    driver.add("#go")
    driver.add("#q", FakeElement())
    registry = ToolRegistry(driver)

    registry.call("smart_navigate", {"url": "https://example.com"})
    registry.call("smart_click", {"selector": "#go"})
    registry.call("smart_fill", {"selector": "#q", "value": "x"})
    registry.call("smart_click", {"selector": "#missing"})

    snap = registry.context.snapshot()
    assert snap["successCount"] == 3
    assert snap["errorCount"] == 1
    assert snap["lastAction"] == "fill"
    assert snap["currentUrl"] == "https://example.com"


def test_dispatch_unknown_tool_raises(driver: FakeDriver) -> None:
    registry = ToolRegistry(driver)
    assert not registry.has("smart_hover")
    with pytest.raises(KeyError):
        registry.dispatch("smart_hover", {})


def test_context_requires_driver() -> None:
    with pytest.raises(ValueError, match="Browser not initialized"):
        ExecutionContext(driver=None)  # type: ignore[arg-type]


def test_outcome_markers() -> None:
    assert ToolOutcome.success("ok").to_text() == "✅ ok"
    assert ToolOutcome.warning("meh").to_text() == "⚠️ meh"
    assert ToolOutcome.failure("no").to_text() == "❌ no"
    assert ToolOutcome.content("data").to_text() == "📄 data"
    assert ToolOutcome.warning("meh").ok is True
    assert ToolOutcome.failure("no").to_content_list() == [{"type": "text", "text": "❌ no"}]


def test_protocol_negotiation() -> None:
    assert select_protocol("2024-11-05") == "2024-11-05"
    assert select_protocol("1999-01-01") == SUPPORTED_PROTOCOL_VERSIONS[0]
    result = initialize_result("2024-11-05")
    assert result["serverInfo"]["name"] == "testgenius"
    assert "tools" in result["capabilities"]
