"""
MCP Tool: greet

이름을 받아 인사말을 돌려주는 가장 단순한 도구입니다.
클라이언트 ↔ 서버 간 STDIO 경로, list_tools → call_tool 흐름이
제대로 동작하는지 확인할 때도 유용합니다.

구성 요소
--------
1) tool_spec  : LLM이 참고하는 도구 선언(이름/설명/파라미터)
2) handle()   : call_tool("greet")이 들어왔을 때 실행되는 비동기 함수

동작
----
- 필수 문자열 파라미터 `name` 하나를 받습니다.
- 성공 시 "Hello, {name}!" 텍스트를, `name`이 없거나 문자열이 아니면
  "name must be a string" 에러를 반환합니다.
"""

import logging
from typing import Any, Mapping

from schema import InvocationResult, ParameterSpec, ParamType, ToolDescriptor

logger = logging.getLogger("mcp.tools.greet")

NAME = ParameterSpec(
    name="name",
    type=ParamType.STRING,
    required=True,
    description="Name of the person to greet",
)

tool_spec = ToolDescriptor(
    name="greet",
    description="Say hello to someone",
    parameters=(NAME,),
)


async def handle(arguments: Mapping[str, Any]) -> InvocationResult:
    # name이 문자열이 아니면 Error
    name = arguments.get("name")
    if not isinstance(name, str):
        return InvocationResult.error(NAME.type_error())

    logger.debug("greeting name=%r", name)
    return InvocationResult.text(f"Hello, {name}!")
