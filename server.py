#!/usr/bin/env python3
"""
엔트리포인트(server.py)
=======================

MCP 서버를 **실행**하는 가장 바깥쪽 진입점입니다.
실제 서버 로직은 `core.py`에 두고, 여기서는 설정/로깅/실행/예외 처리만 담당합니다.

전체 흐름
--------
1) 설정 로드: 환경변수(`LOG_LEVEL`, `MCP_SERVER_NAME`, `MCP_SERVER_VERSION`)
2) 로깅 설정: stdout은 MCP 프로토콜 채널이므로 로그는 반드시 stderr로 보냅니다.
3) `AppServer` 생성 후 `app.run()`으로 STDIO 서버 구동
4) 예외 처리: Ctrl+C는 정상 종료, 그 밖의 예외는 스택트레이스를 남기고 종료 코드 1

실행
----
- `hello-mcp-server` (설치 후 콘솔 스크립트) 또는 `python server.py`
- 개발 중에는 `LOG_LEVEL=DEBUG hello-mcp-server` 로 상세 로그를 확인하세요.
"""

import asyncio
import logging
import sys

from config import Settings, load_settings
from core import AppServer

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

logger = logging.getLogger("mcp.entry")


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


async def main(settings: Settings) -> None:
    """서버를 생성하고 전송이 닫힐 때까지 실행합니다."""
    app = AppServer(settings)
    await app.run()


def cli() -> None:
    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    configure_logging(settings.log_level)
    try:
        asyncio.run(main(settings))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception:
        logger.exception("Server error")
        sys.exit(1)


if __name__ == "__main__":
    cli()
