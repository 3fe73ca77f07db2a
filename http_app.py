"""
HTTP 전송 계층(http_app.py)
==========================

AppServer 를 Starlette ASGI 앱으로 감쌉니다.

라우트
------
- GET  /status      : 고정 문자열을 돌려주는 상태 확인
- GET  /tools       : 등록된 도구 목록(이름/설명/입력 스키마)
- POST /tools/call  : {"name": ..., "arguments": {...}} → {"status": "ok"|"error", ...}
- /mcp              : MCP streamable HTTP 엔드포인트 (SDK 세션 매니저)
"""

import contextlib
import json
import logging
from typing import Any, AsyncIterator, Dict

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Mount, Route
from starlette.types import Receive, Scope, Send

from config import Settings
from core import AppServer
from results import ErrorKind, Failure, InvocationRequest

logger = logging.getLogger("mcp.http")

STATUS_TEXT = "MCP Server - Ready for use with HTTP transport"

# 실패 종류별 HTTP 상태 코드
_STATUS_CODES = {
    ErrorKind.UNKNOWN_TOOL: 404,
    ErrorKind.INVALID_ARGUMENTS: 400,
    ErrorKind.HANDLER_ERROR: 422,
    ErrorKind.TIMEOUT: 504,
}


def _bad_request(message: str) -> JSONResponse:
    failure = Failure(ErrorKind.INVALID_ARGUMENTS, message)
    return JSONResponse(failure.to_response(), status_code=400)


def create_app(app_server: AppServer, settings: Settings = Settings()) -> Starlette:
    """Starlette 앱을 만듭니다. MCP 세션 매니저는 앱 lifespan 동안만 동작합니다."""
    session_manager = StreamableHTTPSessionManager(
        app=app_server.server,
        json_response=settings.json_response,
        stateless=True,
    )

    async def handle_mcp(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    async def status(request: Request) -> PlainTextResponse:
        return PlainTextResponse(STATUS_TEXT)

    async def list_tools(request: Request) -> JSONResponse:
        tools = [
            tool.model_dump(mode="json", by_alias=True, exclude_none=True)
            for tool in app_server.registry.list_all()
        ]
        return JSONResponse({"tools": tools})

    async def call_tool(request: Request) -> JSONResponse:
        try:
            body: Any = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _bad_request("body: request must be valid JSON")
        if not isinstance(body, dict):
            return _bad_request("body: expected object")

        name = body.get("name", body.get("toolName"))
        if not isinstance(name, str) or not name:
            return _bad_request("name: required string field is missing")
        arguments: Dict[str, Any] = body.get("arguments") if "arguments" in body else {}

        result = await app_server.dispatcher.dispatch(
            InvocationRequest(tool_name=name, arguments=arguments)
        )
        if isinstance(result, Failure):
            return JSONResponse(result.to_response(), status_code=_STATUS_CODES[result.kind])
        return JSONResponse(result.to_response())

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info("MCP server starting transport=http")
            try:
                yield
            finally:
                logger.info("MCP server stopped")

    return Starlette(
        routes=[
            Route("/status", status, methods=["GET"]),
            Route("/tools", list_tools, methods=["GET"]),
            Route("/tools/call", call_tool, methods=["POST"]),
            Mount("/mcp", app=handle_mcp),
        ],
        lifespan=lifespan,
    )
