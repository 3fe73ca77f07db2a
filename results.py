"""
호출 요청/결과 타입
===================

디스패처가 주고받는 값 객체들입니다.

- InvocationRequest : 들어온 호출 1건 (도구 이름 + 인자)
- Success / Failure : 호출 결과(태그드 유니온). 전송 계층은 `to_response()` 로 직렬화합니다.
- ErrorKind         : 실패 종류
- ToolError         : 핸들러가 도메인 오류를 알릴 때 던지는 예외
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union


class ErrorKind(str, Enum):
    """디스패치 시점에 발생할 수 있는 실패 종류."""

    UNKNOWN_TOOL = "UnknownTool"
    INVALID_ARGUMENTS = "InvalidArguments"
    HANDLER_ERROR = "HandlerError"
    TIMEOUT = "Timeout"


class ToolError(Exception):
    """핸들러가 도메인 오류를 알릴 때 사용합니다. 메시지가 그대로 호출자에게 전달됩니다."""


@dataclass(frozen=True)
class InvocationRequest:
    tool_name: str
    arguments: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Success:
    payload: Any

    @property
    def ok(self) -> bool:
        return True

    def to_response(self) -> Dict[str, Any]:
        return {"status": "ok", "result": self.payload}


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    def to_response(self) -> Dict[str, Any]:
        return {"status": "error", "kind": self.kind.value, "message": self.message}


InvocationResult = Union[Success, Failure]
