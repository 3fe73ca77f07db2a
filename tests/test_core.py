from __future__ import annotations

import asyncio
from typing import Any

import pytest
from mcp import types

from conftest import make_module
from core import AppServer, ToolCallFailed, to_content
from registry import DuplicateNameError
from results import ErrorKind


def test_app_server_registers_and_freezes_default_tools() -> None:
    app = AppServer()

    assert [tool.name for tool in app.registry.list_all()] == ["echo", "reverseEcho"]
    assert app.registry.frozen is True


def test_duplicate_tool_modules_abort_startup() -> None:
    async def handle(arguments: dict[str, Any]) -> str:
        return ""

    modules = [make_module("dup", handle), make_module("dup", handle)]

    with pytest.raises(DuplicateNameError):
        AppServer(tool_modules=modules)


def test_call_returns_text_content() -> None:
    app = AppServer()

    content = asyncio.run(app.call("reverseEcho", {"message": "abc"}))

    assert [item.text for item in content] == ["cba"]


def test_call_failure_raises_tool_call_failed() -> None:
    app = AppServer()

    with pytest.raises(ToolCallFailed) as excinfo:
        asyncio.run(app.call("echo", {}))

    assert excinfo.value.failure.kind is ErrorKind.INVALID_ARGUMENTS
    assert str(excinfo.value).startswith("InvalidArguments: message")


def test_structured_payload_is_json_encoded() -> None:
    assert to_content({"a": 1})[0].text == '{"a": 1}'
    assert to_content("plain")[0].text == "plain"


def test_mcp_list_tools_handler_exposes_registry() -> None:
    app = AppServer()
    handler = app.server.request_handlers[types.ListToolsRequest]

    result = asyncio.run(handler(types.ListToolsRequest(method="tools/list")))

    assert [tool.name for tool in result.root.tools] == ["echo", "reverseEcho"]
