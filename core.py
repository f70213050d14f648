"""
MCP 서버 코어(core.py)
======================

이 파일은 도구들을 한 서버에서 제공하기 위한 핵심 로직을 담고 있습니다.

전체 흐름 요약
--------------
1) 서버를 만들고(ToolRegistry에 tools.ALL의 도구들을 등록)
2) `list_tools()` 핸들러: 클라이언트(LLM)에게 사용 가능한 도구 "메뉴판"을 제공
3) `call_tool()` 핸들러: 요청을 InvocationRequest로 바꿔 레지스트리에 dispatch하고,
   결과(InvocationResult)를 MCP 응답(CallToolResult)으로 변환
4) `run()`: 표준입출력(STDIO)으로 MCP 서버를 구동(IDE/앱이 파이프로 연결)

전송(JSON-RPC 프레이밍, 요청/응답 매칭, 읽기 루프)은 MCP SDK가 담당합니다.
"""

import logging
from typing import Any, Dict, List, Optional

from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from config import Settings
from registry import ToolRegistry
from schema import InvocationRequest
from tools import ALL as TOOL_MODULES

logger = logging.getLogger("mcp.core")


class AppServer:
    """도구들을 한 서버에서 제공하는 코어 서버.

    생성되면:
      - Server 인스턴스를 만들고
      - ToolRegistry에 툴들을 등록한 뒤
      - list_tools/call_tool 핸들러를 MCP 서버에 연결합니다.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()
        self.server = Server(self.settings.server_name)
        self.registry = ToolRegistry()
        self._register_tools()

        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            return self.registry.tools

        # SDK의 jsonschema 검증은 끄고, 인자 검증은 레지스트리 한 곳에서만 합니다.
        # (에러 메시지 형식을 "name must be a string"처럼 일정하게 유지)
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: Dict[str, Any]) -> CallToolResult:
            return await self.call_tool(name, arguments)

    def _register_tools(self) -> None:
        """tools/__init__.py 의 ALL 목록을 순회하며 `tool_spec`/`handle` 쌍을 등록합니다."""
        for mod in TOOL_MODULES:
            self.registry.register(mod.tool_spec, mod.handle)
        logger.info("registered %d tool(s): %s", len(self.registry), [t.name for t in self.registry.tools])

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        """요청 한 건을 처리합니다.

        잘못된 요청(미등록 도구, 인자 누락/타입 불일치)은 isError=True 결과로 돌아갑니다.
        핸들러 내부에서 예외가 새어 나오면 스택트레이스를 남기고 다시 던지며,
        SDK가 해당 요청 하나만 에러 응답으로 바꿔 줍니다(서버 루프는 계속 동작).
        """
        logger.info("call_tool start name=%s", name)
        try:
            result = await self.registry.dispatch(InvocationRequest(name, arguments))
        except Exception:
            logger.exception("call_tool error name=%s", name)
            raise

        logger.info("call_tool done name=%s is_error=%s size=%s", name, result.is_error, len(result.content))
        return result.to_call_tool_result()

    def initialization_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=self.settings.server_name,
            server_version=self.settings.server_version,
            # capabilities는 서버가 어떤 기능을 지원하는지 알려주는 선언
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
        )

    async def run(self) -> None:
        """MCP 서버를 표준입출력(STDIO) 전송으로 실행합니다. 전송이 닫히면 반환합니다."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info(
                "MCP server starting name=%s version=%s",
                self.settings.server_name,
                self.settings.server_version,
            )
            await self.server.run(read_stream, write_stream, self.initialization_options())
            logger.info("MCP server stopped")
