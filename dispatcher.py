"""
디스패처(dispatcher.py)
=======================

들어온 호출 요청을 **검증 → 실행 → 결과 변환** 하는 프로토콜 계층입니다.

처리 순서
---------
1) 레지스트리에서 도구 이름을 찾습니다. 없으면 Failure(UnknownTool).
2) 인자를 inputSchema에 맞춰 검사합니다(첫 위반에서 중단). 실패하면 Failure(InvalidArguments).
3) 핸들러를 실행합니다. 제한 시간이 주어지면 그 안에 끝나야 합니다.
4) 핸들러가 Failure를 돌려주거나 예외를 던지면 Failure(HandlerError),
   시간이 초과되면 Failure(Timeout).
5) 그 외에는 Success(payload). 단, JSON 으로 직렬화할 수 없는 값은 Failure(HandlerError).

어떤 예외도 dispatch() 밖으로 나가지 않습니다. 전송 계층은 결과 값만 직렬화하면 됩니다.
"""

import asyncio
import inspect
import json
import logging
from typing import Any, Dict, Optional

from registry import ToolHandler, ToolRegistry
from results import ErrorKind, Failure, InvocationRequest, InvocationResult, Success, ToolError
from utils.schema import first_violation

logger = logging.getLogger("mcp.dispatcher")


class Dispatcher:
    """레지스트리에 등록된 도구로 호출을 라우팅합니다.

    Parameters
    ----------
    registry : ToolRegistry
        조회 대상 레지스트리. 디스패처는 읽기만 합니다.
    timeout : Optional[float]
        호출별 timeout 인자가 없을 때 사용할 기본 제한 시간(초). None 이면 제한 없음.
    """

    def __init__(self, registry: ToolRegistry, timeout: Optional[float] = None) -> None:
        self.registry = registry
        self.timeout = timeout

    async def dispatch(
        self, request: InvocationRequest, timeout: Optional[float] = None
    ) -> InvocationResult:
        name = request.tool_name
        entry = self.registry.lookup(name)
        if entry is None:
            logger.warning("dispatch unknown tool name=%s", name)
            return Failure(ErrorKind.UNKNOWN_TOOL, f"Unknown tool: {name}")

        tool, handler = entry
        violation = first_violation(request.arguments, tool.inputSchema or {})
        if violation is not None:
            logger.warning("dispatch invalid arguments name=%s reason=%s", name, violation)
            return Failure(ErrorKind.INVALID_ARGUMENTS, violation)

        limit = timeout if timeout is not None else self.timeout
        try:
            outcome = await asyncio.wait_for(_invoke(handler, dict(request.arguments)), limit)
        except asyncio.TimeoutError:
            logger.warning("dispatch timeout name=%s limit=%s", name, limit)
            return Failure(ErrorKind.TIMEOUT, f"Tool '{name}' timed out after {limit}s")
        except ToolError as e:
            logger.warning("dispatch handler error name=%s error=%s", name, e)
            return Failure(ErrorKind.HANDLER_ERROR, str(e))
        except Exception as e:
            logger.exception("dispatch handler crashed name=%s", name)
            return Failure(ErrorKind.HANDLER_ERROR, str(e) or type(e).__name__)

        if isinstance(outcome, Failure):
            # 핸들러가 돌려준 실패는 종류와 상관없이 HandlerError 로 정규화합니다.
            return Failure(ErrorKind.HANDLER_ERROR, outcome.message)
        payload = outcome.payload if isinstance(outcome, Success) else outcome
        if not isinstance(payload, str):
            # 전송 계층이 직렬화하지 못하는 값은 여기서 실패로 바꿉니다.
            try:
                json.dumps(payload, allow_nan=False)
            except (TypeError, ValueError) as e:
                logger.warning("dispatch unserialisable payload name=%s error=%s", name, e)
                return Failure(
                    ErrorKind.HANDLER_ERROR,
                    f"Tool '{name}' returned a value that is not JSON-serialisable: {type(payload).__name__}",
                )
        return Success(payload)


async def _invoke(handler: ToolHandler, arguments: Dict[str, Any]) -> Any:
    # 동기 핸들러는 이벤트 루프를 막지 않도록 워커 스레드에서 실행
    if inspect.iscoroutinefunction(handler):
        return await handler(arguments)
    result = await asyncio.to_thread(handler, arguments)
    if inspect.isawaitable(result):
        return await result
    return result
