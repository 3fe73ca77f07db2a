#!/usr/bin/env python3
"""
엔트리포인트(server.py)
=======================

이 파일은 MCP 서버를 **실행**하는 가장 바깥쪽 진입점입니다.
실제 서버 로직은 `core.py`/`http_app.py` 에 두고, 여기서는 설정, 로깅, 예외 처리만 담당합니다.

전체 흐름
--------
1) 설정 로드: 환경변수(`config.Settings.from_env`)
2) 로깅 설정: `LOG_LEVEL` 로 로그 레벨을 제어합니다.
3) `AppServer` 생성: 도구 등록/freeze 와 핸들러(list_tools/call_tool) 연결을 마칩니다.
4) 전송 실행: 기본은 HTTP(uvicorn), `MCP_TRANSPORT=stdio` 이면 표준입출력.

팁
--
- 개발 중에는 `LOG_LEVEL=DEBUG python server.py` 로 상세 로그를 보면서 동작을 확인하세요.
- 상태 확인: `curl http://127.0.0.1:8000/status`
"""

import asyncio
import logging
import sys

import uvicorn

from config import ConfigError, Settings
from core import AppServer
from http_app import create_app

logger = logging.getLogger("mcp.entry")  # 엔트리포인트 전용 로거 이름


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def main() -> int:
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        configure_logging("INFO")
        logger.error("Invalid configuration: %s", e)
        return 2

    configure_logging(settings.log_level)

    try:
        # 등록 단계 오류(이름 중복 등)는 서버를 띄우지 않고 종료합니다.
        app = AppServer(timeout=settings.tool_timeout)
    except Exception:
        logger.exception("Tool registration failed")
        return 1

    try:
        if settings.transport == "stdio":
            asyncio.run(app.run_stdio())
        else:
            uvicorn.run(
                create_app(app, settings),
                host=settings.host,
                port=settings.port,
                log_level=settings.log_level.lower(),
            )
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception:
        logger.exception("Server error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
