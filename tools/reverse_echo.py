"""
MCP Tool: reverseEcho

메시지를 문자 단위로 뒤집어 돌려줍니다.
"""

from typing import Any, Dict

from mcp.types import Tool

tool_spec = Tool(
    name="reverseEcho",
    description="Echoes in reverse the message sent by the client.",
    inputSchema={
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "message": {"type": "string", "description": "뒤집을 메시지"},
        },
        "required": ["message"],
    },
)


async def handle(arguments: Dict[str, Any]) -> str:
    return arguments["message"][::-1]
