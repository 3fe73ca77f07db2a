"""
MCP Tool: echo

클라이언트가 보낸 메시지를 그대로 돌려주는 가장 단순한 도구입니다.
MCP 클라이언트 ↔ 서버 사이의 요청/응답 경로가 살아있는지 확인할 때 유용합니다.
"""

from typing import Any, Dict

from mcp.types import Tool

# ---------------------------------------------------------------------------
# tool_spec: 도구 메타데이터(메뉴판)
# - message 하나만 받으며, 정의되지 않은 키는 거부합니다.
# ---------------------------------------------------------------------------
tool_spec = Tool(
    name="echo",
    description="Echoes the message back to the client.",
    inputSchema={
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "message": {
                "type": "string",
                "description": "돌려받을 메시지",
                "examples": ["hi", "hello world"],
            }
        },
        "required": ["message"],
    },
)


async def handle(arguments: Dict[str, Any]) -> str:
    # 디스패처가 스키마 검증을 마친 뒤 호출하므로 message는 항상 문자열입니다.
    return arguments["message"]
