"""
Tool Registry
=============

이 모듈은 MCP 서버에서 사용할 **도구 선언(ToolDescriptor)과 실행 핸들러**를
이름으로 매핑/관리하고, call_tool 요청을 알맞은 핸들러로 라우팅(dispatch)합니다.

왜 필요한가?
------------
- 서버 코어(`core.py`)는 list_tools()/call_tool() 핸들러를 단 한 번만 정의하고,
  실제 도구 목록과 라우팅, 인자 검증은 이 레지스트리에 위임합니다.
- 핸들러는 항상 **검증이 끝난 인자**만 받습니다. 필수 인자 누락/타입 불일치는
  여기서 걸러져 Error 결과로 바뀌고, 핸들러는 호출되지 않습니다.

설계 요점
---------
- `register(descriptor, handler)` 로 (이름 → 선언 / 이름 → 핸들러) 두 테이블을 동시에 채웁니다.
- 이름 중복 등록은 서버 시작 시점의 설정 오류이므로 `ValueError`를 던집니다.
- `dispatch(request)` 는 어떤 요청에도 예외 대신 `InvocationResult`를 돌려줍니다.
  (미등록 도구 / 필수 인자 누락 / 타입 불일치 → Error)
- 레지스트리는 시작 시 한 번 채워지고 이후에는 읽기만 하므로 락이 필요 없습니다.

간단한 사용 예
--------------
>>> registry = ToolRegistry()
>>> registry.register(greet.tool_spec, greet.handle)
>>> menu = registry.tools                 # list_tools()에서 그대로 반환
>>> await registry.dispatch(InvocationRequest("greet", {"name": "Bob"}))
InvocationResult(kind=<ResultKind.TEXT: 'text'>, content='Hello, Bob!')
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping

from mcp.types import Tool

from schema import InvocationRequest, InvocationResult, ToolDescriptor, classify

# 비동기 툴 핸들러 시그니처: arguments(dict) → InvocationResult
ToolHandler = Callable[[Mapping[str, Any]], Awaitable[InvocationResult]]

logger = logging.getLogger("mcp.registry")


class ToolRegistry:
    """도구 선언과 실행 핸들러를 이름으로 매핑/관리하는 레지스트리.

    Attributes
    ----------
    _descriptors : Dict[str, ToolDescriptor]
        도구 이름 → 선언. list_tools() 응답과 인자 검증의 근간이 됩니다.
    _handlers : Dict[str, ToolHandler]
        도구 이름 → 비동기 실행 핸들러. dispatch 라우팅에 사용됩니다.
    """

    def __init__(self) -> None:
        self._descriptors: Dict[str, ToolDescriptor] = {}
        self._handlers: Dict[str, ToolHandler] = {}

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def register(self, descriptor: ToolDescriptor, handler: ToolHandler) -> None:
        """도구 하나를 레지스트리에 등록합니다.

        Raises
        ------
        ValueError
            같은 이름의 도구가 이미 등록되어 있는 경우.
        """
        name = descriptor.name
        if name in self._descriptors:
            raise ValueError(f"Duplicate tool: {name}")

        self._descriptors[name] = descriptor
        self._handlers[name] = handler
        logger.debug("registered tool name=%s params=%s", name, [p.name for p in descriptor.parameters])

    @property
    def tools(self) -> List[Tool]:
        """등록된 모든 도구의 MCP Tool 리스트(메뉴판). 등록 순서가 곧 노출 순서입니다."""
        return [d.to_tool() for d in self._descriptors.values()]

    def get_descriptor(self, name: str) -> ToolDescriptor:
        if name not in self._descriptors:
            raise ValueError(f"Unknown tool: {name}")
        return self._descriptors[name]

    def get_handler(self, name: str) -> ToolHandler:
        """이름에 해당하는 비동기 핸들러를 반환합니다.

        Raises
        ------
        ValueError
            미등록 이름이 들어온 경우.
        """
        if name not in self._handlers:
            raise ValueError(f"Unknown tool: {name}")
        return self._handlers[name]

    async def dispatch(self, request: InvocationRequest) -> InvocationResult:
        """요청 하나를 검증하고 핸들러를 실행합니다.

        1) 이름으로 도구를 찾음 (없으면 Error, 핸들러는 절대 호출하지 않음)
        2) 필수 파라미터마다 존재 여부와 타입을 확인 (문자열로 "변환 가능한" 값은 인정하지 않음)
        3) 핸들러 실행
        4) 핸들러 결과를 그대로 반환
        """
        name = request.tool_name
        if name not in self:
            logger.debug("dispatch rejected unknown tool name=%s", name)
            return InvocationResult.error(f"Unknown tool: {name}")

        descriptor = self.get_descriptor(name)
        arguments = request.arguments
        for param in descriptor.required:
            if param.name not in arguments or classify(arguments[param.name]) is not param.type:
                logger.debug("dispatch rejected name=%s param=%s", name, param.name)
                return InvocationResult.error(param.type_error())

        handler = self.get_handler(name)
        return await handler(arguments)
