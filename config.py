"""
실행 설정(config.py)
====================

서버 실행에 필요한 값들을 환경변수에서 읽어 `Settings` 로 묶습니다.

환경변수
--------
- LOG_LEVEL         : 로그 레벨 (기본 INFO)
- MCP_HOST          : HTTP 바인드 주소 (기본 127.0.0.1)
- MCP_PORT          : HTTP 포트 (기본 8000)
- MCP_TRANSPORT     : http | stdio (기본 http)
- MCP_TOOL_TIMEOUT  : 도구 실행 제한 시간(초). 비어 있으면 제한 없음
- MCP_JSON_RESPONSE : true 이면 streamable HTTP 응답을 SSE 대신 JSON 으로 보냄
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

TRANSPORTS = ("http", "stdio")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    """환경변수 값이 잘못되었을 때 발생합니다."""


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
    transport: str = "http"
    tool_timeout: Optional[float] = None
    json_response: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        log_level = env.get("LOG_LEVEL", "INFO").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"LOG_LEVEL must be one of {LOG_LEVELS}: {log_level!r}")

        port_raw = env.get("MCP_PORT", "8000").strip()
        try:
            port = int(port_raw)
        except ValueError:
            raise ConfigError(f"MCP_PORT must be an integer: {port_raw!r}") from None
        if not 0 < port < 65536:
            raise ConfigError(f"MCP_PORT out of range: {port}")

        transport = env.get("MCP_TRANSPORT", "http").strip().lower()
        if transport not in TRANSPORTS:
            raise ConfigError(f"MCP_TRANSPORT must be one of {TRANSPORTS}: {transport!r}")

        timeout_raw = env.get("MCP_TOOL_TIMEOUT", "").strip()
        tool_timeout = None
        if timeout_raw:
            try:
                tool_timeout = float(timeout_raw)
            except ValueError:
                raise ConfigError(f"MCP_TOOL_TIMEOUT must be a number: {timeout_raw!r}") from None
            if tool_timeout <= 0:
                raise ConfigError(f"MCP_TOOL_TIMEOUT must be positive: {tool_timeout}")

        json_raw = env.get("MCP_JSON_RESPONSE", "false").strip().lower()
        if json_raw not in _TRUE | _FALSE:
            raise ConfigError(f"MCP_JSON_RESPONSE must be a boolean: {json_raw!r}")

        return cls(
            log_level=log_level,
            host=env.get("MCP_HOST", "127.0.0.1").strip() or "127.0.0.1",
            port=port,
            transport=transport,
            tool_timeout=tool_timeout,
            json_response=json_raw in _TRUE,
        )
