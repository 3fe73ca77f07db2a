from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from mcp.types import Tool

from registry import ToolRegistry


def make_tool(name: str, properties: dict[str, Any] | None = None, required: list[str] | None = None, **schema: Any) -> Tool:
    input_schema: dict[str, Any] = {"type": "object", "properties": properties or {}}
    if required is not None:
        input_schema["required"] = required
    input_schema.update(schema)
    return Tool(name=name, description=f"{name} tool", inputSchema=input_schema)


def make_module(name: str, handler: Any, **schema: Any) -> SimpleNamespace:
    return SimpleNamespace(tool_spec=make_tool(name, **schema), handle=handler)


@pytest.fixture
def registry() -> ToolRegistry:
    return ToolRegistry()
