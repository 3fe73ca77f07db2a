from __future__ import annotations

import asyncio

import tools
from tools import echo, reverse_echo


def test_all_lists_tools_in_discovery_order() -> None:
    assert [mod.tool_spec.name for mod in tools.ALL] == ["echo", "reverseEcho"]


def test_tool_schemas_require_a_string_message() -> None:
    for mod in tools.ALL:
        schema = mod.tool_spec.inputSchema
        assert schema["required"] == ["message"]
        assert schema["properties"]["message"]["type"] == "string"
        assert schema["additionalProperties"] is False


def test_echo_handler() -> None:
    assert asyncio.run(echo.handle({"message": "hi"})) == "hi"


def test_reverse_echo_handler() -> None:
    assert asyncio.run(reverse_echo.handle({"message": "abc"})) == "cba"
    assert asyncio.run(reverse_echo.handle({"message": ""})) == ""
