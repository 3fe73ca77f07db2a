"""
Tool Registry
=============

이 모듈은 MCP 서버에서 사용할 **툴 메타데이터(Tool)와 실행 핸들러**를
이름으로 매핑/관리하는 단순한 레지스트리 구현을 제공합니다.

설계 요점
---------
- `register(tool, handler)` 로 (이름 → (Tool, 핸들러)) 테이블을 채웁니다.
- `lookup(name)` 은 등록된 (Tool, 핸들러) 쌍을, 없으면 None 을 반환합니다.
- `list_all()` 은 클라이언트가 사용할 수 있는 도구 "메뉴판"을 순회합니다.
- 서버가 요청을 받기 시작하기 전에 `freeze()` 를 호출합니다.
  그 이후의 등록은 거부되므로, 런타임에는 잠금 없이 읽기만 합니다.
- 이름 중복에는 명시적인 예외를 던져 초기 설정 오류를 빠르게 드러냅니다.

간단한 사용 예
--------------
>>> registry = ToolRegistry()
>>> registry.register(tool_spec, handle)  # 한 번만 등록
>>> registry.freeze()
>>> [t.name for t in registry.list_all()]
['echo']
>>> tool, handler = registry.lookup("echo")
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from mcp.types import Tool

logger = logging.getLogger("mcp.registry")

# 툴 핸들러 시그니처: arguments(dict) → payload(str/구조화 값) 또는 Failure
# - 비동기 함수가 기본이며, 동기 함수는 디스패처가 워커 스레드에서 실행합니다.
ToolHandler = Callable[[Dict[str, Any]], Union[Awaitable[Any], Any]]

# lookup() 결과: (메타데이터, 핸들러)
ToolEntry = Tuple[Tool, ToolHandler]


class DuplicateNameError(ValueError):
    """같은 이름의 도구가 이미 등록되어 있을 때 발생합니다."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate tool: {name}")
        self.name = name


class RegistryFrozenError(RuntimeError):
    """서버 시작(freeze) 이후에 등록을 시도했을 때 발생합니다."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Registry is frozen, cannot register tool: {name}")
        self.name = name


class _DescriptorView(Iterable[Tool]):
    """list_all()이 돌려주는 지연(lazy) 뷰.

    매번 `iter()` 를 호출할 때마다 처음부터 다시 순회하므로 재시작이 가능합니다.
    """

    def __init__(self, entries: Dict[str, ToolEntry]) -> None:
        self._entries = entries

    def __iter__(self) -> Iterator[Tool]:
        for tool, _ in self._entries.values():
            yield tool

    def __len__(self) -> int:
        return len(self._entries)


class ToolRegistry:
    """툴 메타데이터와 실행 핸들러를 이름으로 매핑/관리하는 레지스트리.

    Attributes
    ----------
    _entries : Dict[str, ToolEntry]
        도구 이름 → (Tool 메타데이터, 실행 핸들러).
        list_tools() 응답과 call_tool 라우팅의 근간이 됩니다.
    _frozen : bool
        True 이면 더 이상 등록을 받지 않습니다.
    """

    def __init__(self) -> None:
        # 서버 초기화 시 한 번 채워지고, freeze() 이후에는 읽기만 합니다.
        self._entries: Dict[str, ToolEntry] = {}
        self._frozen = False

    def register(self, tool: Tool, handler: ToolHandler) -> None:
        """도구 하나를 레지스트리에 등록합니다.

        Parameters
        ----------
        tool : Tool
            MCP가 이해하는 도구 메타데이터(이름/설명/입력 스키마 포함).
        handler : ToolHandler
            해당 도구를 실제로 실행하는 함수.

        Raises
        ------
        DuplicateNameError
            같은 이름의 도구가 이미 등록되어 있는 경우. 레지스트리는 변경되지 않습니다.
        RegistryFrozenError
            freeze() 이후에 호출된 경우.
        """
        name = tool.name
        if self._frozen:
            raise RegistryFrozenError(name)
        if name in self._entries:
            raise DuplicateNameError(name)

        self._entries[name] = (tool, handler)
        logger.debug("registered tool name=%s", name)

    def freeze(self) -> None:
        """등록 단계를 마감합니다. 이후의 register()는 거부됩니다."""
        self._frozen = True
        logger.info("registry frozen tools=%s", len(self._entries))

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> Optional[ToolEntry]:
        """이름에 해당하는 (Tool, 핸들러) 쌍을 반환합니다. 없으면 None."""
        return self._entries.get(name)

    def list_all(self) -> Iterable[Tool]:
        """등록된 모든 도구의 메타데이터를 지연 순회하는 뷰를 반환합니다.

        Notes
        -----
        - dict는 삽입 순서를 보존하므로, 등록 순서가 곧 노출 순서가 됩니다.
        - 반환된 뷰는 여러 번 순회할 수 있습니다.
        """
        return _DescriptorView(self._entries)

    @property
    def tools(self) -> List[Tool]:
        """list_tools() 핸들러에서 그대로 반환할 Tool 리스트(스냅샷)."""
        return list(self.list_all())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
