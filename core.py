"""
MCP 서버 코어(core.py)
======================

이 파일은 등록된 MCP 도구(툴)들을 한 서버에서 제공하기 위한 핵심 로직을 담고 있습니다.

전체 흐름 요약
--------------
1) 서버를 만들고(ToolRegistry에 tools.ALL 을 등록한 뒤 freeze)
2) `list_tools()` 핸들러: 클라이언트(LLM)에게 사용 가능한 도구 "메뉴판"을 제공
3) `call_tool()` 핸들러: Dispatcher 에 검증/실행을 맡기고 결과를 MCP 콘텐츠로 변환
4) `run_stdio()`: 표준입출력(STDIO)으로 MCP 서버를 구동
   (HTTP 전송은 `http_app.create_app()` 이 담당합니다)

용어
----
- **MCP**: Model Context Protocol. LLM과 "도구"를 연결해 주는 표준 인터페이스.
- **Tool**: LLM이 호출할 수 있는 기능 단위(예: echo, reverseEcho).
- **ToolRegistry**: 도구 메타데이터와 실행 함수를 이름으로 보관/조회하는 작은 등록소.
- **Dispatcher**: 인자 검증 → 핸들러 실행 → 결과(Success/Failure) 변환 담당.
"""

import json
import logging
from typing import Any, Dict, List, Optional

# MCP SDK (저수준 서버 API). 데코레이터 팩토리(@server.list_tools(), @server.call_tool())를 제공합니다.
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from dispatcher import Dispatcher
from registry import ToolRegistry
from results import Failure, InvocationRequest
from tools import ALL as TOOL_MODULES

logger = logging.getLogger("mcp.core")

SERVER_NAME = "mcp-echo-server"
SERVER_VERSION = "1.0.0"


class ToolCallFailed(Exception):
    """Failure 결과를 MCP 오류 응답(isError)으로 내보낼 때 사용합니다."""

    def __init__(self, failure: Failure) -> None:
        super().__init__(f"{failure.kind.value}: {failure.message}")
        self.failure = failure


def to_content(payload: Any) -> List[TextContent]:
    """Success payload 를 MCP 텍스트 콘텐츠로 변환합니다. 구조화 값은 JSON 으로 인코딩."""
    if isinstance(payload, str):
        text = payload
    else:
        text = json.dumps(payload, ensure_ascii=False)
    return [TextContent(type="text", text=text)]


class AppServer:
    """등록된 MCP 툴들을 한 서버에서 제공하는 코어 서버.

    생성되면:
      - Server 인스턴스를 만들고
      - ToolRegistry에 툴들을 등록한 뒤 freeze 하고
      - list_tools/call_tool 핸들러를 MCP 서버에 연결합니다.

    Parameters
    ----------
    tool_modules : list, optional
        `tool_spec`/`handle` 을 export 하는 모듈 목록. 기본값은 tools.ALL.
    timeout : float, optional
        도구 실행 기본 제한 시간(초).
    """

    def __init__(self, tool_modules: Optional[list] = None, timeout: Optional[float] = None) -> None:
        self.server = Server(SERVER_NAME)
        self.registry = ToolRegistry()
        self._register_tools(TOOL_MODULES if tool_modules is None else tool_modules)
        # 전송 계층이 요청을 받기 전에 등록을 마감합니다.
        self.registry.freeze()
        self.dispatcher = Dispatcher(self.registry, timeout=timeout)

        # -------------------------------------------------------------
        # 1) list_tools 핸들러: 클라이언트가 "무슨 도구가 있나요?"라고 물을 때 호출됨
        # -------------------------------------------------------------
        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            return self.registry.tools

        # -------------------------------------------------------------
        # 2) call_tool 핸들러: 인자 검증은 Dispatcher 가 담당하므로 SDK 검증은 끕니다.
        # -------------------------------------------------------------
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
            return await self.call(name, arguments)

    def _register_tools(self, modules: list) -> None:
        """툴 모듈들을 레지스트리에 등록합니다.

        각 모듈은 `tool_spec`(메타데이터)와 `handle`(실행 함수)를 export 합니다.
        이름이 겹치면 DuplicateNameError 가 그대로 올라가 서버 시작이 중단됩니다.
        """
        for mod in modules:
            self.registry.register(mod.tool_spec, mod.handle)

    async def call(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """MCP call_tool 요청 1건을 처리합니다. 실패는 ToolCallFailed 로 올립니다."""
        logger.info("call_tool start name=%s", name)
        result = await self.dispatcher.dispatch(
            InvocationRequest(tool_name=name, arguments=arguments if arguments is not None else {})
        )
        if isinstance(result, Failure):
            logger.info("call_tool failed name=%s kind=%s", name, result.kind.value)
            raise ToolCallFailed(result)

        content = to_content(result.payload)
        logger.info("call_tool done name=%s size=%s", name, len(content[0].text))
        return content

    def initialization_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=SERVER_NAME,
            server_version=SERVER_VERSION,
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
        )

    async def run_stdio(self) -> None:
        """MCP 서버를 표준입출력(STDIO) 전송으로 실행합니다."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("MCP server starting transport=stdio")
            await self.server.run(read_stream, write_stream, self.initialization_options())
            logger.info("MCP server stopped")
