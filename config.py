"""
설정(config.py)

서버 설정은 모두 환경변수로 받습니다. 시작 시 `load_settings()`를 한 번 호출해
불변 `Settings`로 고정하고, 이후에는 읽기만 합니다.

- LOG_LEVEL          : 로그 레벨 (기본 INFO)
- MCP_SERVER_NAME    : initialize 때 클라이언트에 알리는 서버 이름 (기본 hello-mcp-server)
- MCP_SERVER_VERSION : 서버 버전 (기본 1.0.0)
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_SERVER_NAME = "hello-mcp-server"
DEFAULT_SERVER_VERSION = "1.0.0"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    server_name: str = DEFAULT_SERVER_NAME
    server_version: str = DEFAULT_SERVER_VERSION
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """환경변수에서 설정을 읽습니다. 알 수 없는 로그 레벨이면 ValueError."""
    env = os.environ if environ is None else environ

    log_level = (env.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    # getLevelName은 등록된 이름이면 숫자를, 아니면 "Level X" 문자열을 돌려줍니다.
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Invalid LOG_LEVEL: {log_level}")

    return Settings(
        server_name=env.get("MCP_SERVER_NAME") or DEFAULT_SERVER_NAME,
        server_version=env.get("MCP_SERVER_VERSION") or DEFAULT_SERVER_VERSION,
        log_level=log_level,
    )
