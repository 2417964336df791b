"""Tool schema definitions (planner-facing contract).

Each entry is `{name, description, inputSchema}` as listed by `tools/list`.
Defaults are stated in the schema because the planner only sees this text.
"""

from __future__ import annotations

from typing import Any

SELECTOR_STRATEGIES = ("css", "text", "exact-text", "xpath", "id", "name")
FILL_STRATEGIES = ("fill", "type")
VERIFY_TYPES = ("text", "element", "url", "title", "count")
WAIT_TYPES = ("element", "text", "time", "network")
CONTENT_TYPES = ("full", "text", "elements")


def object_schema(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
    }
    if required:
        schema["required"] = required
    return schema


NAVIGATE_TOOL: dict[str, Any] = {
    "name": "smart_navigate",
    "description": "Navigate to a URL with intelligent error handling and page load verification",
    "inputSchema": object_schema(
        {
            "url": {"type": "string", "description": "URL to navigate to"},
            "waitForLoad": {"type": "boolean", "default": True, "description": "Wait for page to fully load"},
        },
        required=["url"],
    ),
}

CLICK_TOOL: dict[str, Any] = {
    "name": "smart_click",
    "description": """Click on an element with intelligent element detection and multiple strategies.
Use strategy="text" for button text, strategy="css" for CSS selectors.
If the requested strategy finds nothing, text -> xpath -> css -> id -> name are tried in that order;
the result names the strategy that matched.""",
    "inputSchema": object_schema(
        {
            "selector": {"type": "string", "description": "Element selector or text to click"},
            "strategy": {
                "type": "string",
                "enum": list(SELECTOR_STRATEGIES),
                "default": "css",
                "description": "Selection strategy",
            },
            "timeout": {"type": "number", "default": 10000, "description": "Timeout in milliseconds"},
            "force": {
                "type": "boolean",
                "default": False,
                "description": "Force click even if element is not clickable",
            },
        },
        required=["selector"],
    ),
}

FILL_TOOL: dict[str, Any] = {
    "name": "smart_fill",
    "description": """Fill any input field with text.
Use common selectors like input[type="email"] for email fields, input[type="password"] for password fields.
A selector containing "email" or "password" also tries, in order:
- input[type="<kind>"], input[name*="<kind>"], input[placeholder*="<kind>"], #<kind>, .<kind>-input, then the selector itself.
The written value is read back; a mismatch is reported with a ⚠️ prefix.""",
    "inputSchema": object_schema(
        {
            "selector": {"type": "string", "description": "CSS selector of input field"},
            "value": {"type": "string", "description": "Text to enter"},
            "strategy": {
                "type": "string",
                "enum": list(FILL_STRATEGIES),
                "default": "fill",
                "description": "Input strategy",
            },
            "clearFirst": {"type": "boolean", "default": True, "description": "Clear field before filling"},
            "pressEnter": {"type": "boolean", "default": False, "description": "Press Enter after filling"},
        },
        required=["selector", "value"],
    ),
}

VERIFY_TOOL: dict[str, Any] = {
    "name": "smart_verify",
    "description": """Verify page content, elements, or conditions with intelligent checking.
- text: element text contains expected (selector required)
- element: selector matches an element
- url / title: current URL / title contains expected (case-sensitive)
- count: number of matches equals expected exactly (selector required, expected must be a number)""",
    "inputSchema": object_schema(
        {
            "type": {"type": "string", "enum": list(VERIFY_TYPES), "description": "Type of verification"},
            "selector": {"type": "string", "description": "Element selector for text/element/count verification"},
            "expected": {"type": ["string", "number"], "description": "Expected value or text"},
            "timeout": {"type": "number", "description": "Timeout in milliseconds"},
        },
        required=["type", "expected"],
    ),
}

WAIT_TOOL: dict[str, Any] = {
    "name": "smart_wait",
    "description": "Wait for elements, conditions, or time with intelligent timeout handling",
    "inputSchema": object_schema(
        {
            "type": {"type": "string", "enum": list(WAIT_TYPES), "description": "Type of wait"},
            "selector": {"type": "string", "description": "Element selector for element wait"},
            "value": {"type": "string", "description": "Text value for text wait"},
            "timeout": {"type": "number", "default": 10000, "description": "Timeout in milliseconds"},
        },
        required=["type"],
    ),
}

SCREENSHOT_TOOL: dict[str, Any] = {
    "name": "smart_screenshot",
    "description": "Take a screenshot with intelligent naming and error handling",
    "inputSchema": object_schema(
        {
            "name": {"type": "string", "description": "Screenshot filename"},
            "description": {"type": "string", "description": "Description of what the screenshot captures"},
        }
    ),
}

GET_CONTENT_TOOL: dict[str, Any] = {
    "name": "smart_get_content",
    "description": """Get page content with intelligent analysis and filtering.
The returned content is cut to 500 characters ("..." marks a cut).""",
    "inputSchema": object_schema(
        {
            "type": {
                "type": "string",
                "enum": list(CONTENT_TYPES),
                "default": "text",
                "description": "Type of content to retrieve",
            },
            "selector": {"type": "string", "description": "Element selector for specific content"},
        }
    ),
}

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    NAVIGATE_TOOL,
    CLICK_TOOL,
    FILL_TOOL,
    VERIFY_TOOL,
    WAIT_TOOL,
    SCREENSHOT_TOOL,
    GET_CONTENT_TOOL,
]

__all__ = [
    "CLICK_TOOL",
    "CONTENT_TYPES",
    "FILL_TOOL",
    "GET_CONTENT_TOOL",
    "NAVIGATE_TOOL",
    "SCREENSHOT_TOOL",
    "SELECTOR_STRATEGIES",
    "TOOL_DEFINITIONS",
    "VERIFY_TOOL",
    "VERIFY_TYPES",
    "WAIT_TOOL",
    "WAIT_TYPES",
]
