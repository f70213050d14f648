"""
도구 스키마와 호출 결과 타입(schema.py)
======================================

레지스트리/디스패처가 주고받는 값들을 정의하는 모듈입니다.
MCP SDK의 `Tool`, `CallToolResult`는 "전송용" 타입이고,
여기 정의된 타입들은 서버 내부에서 쓰는 "도메인" 타입입니다.

구성 요소
--------
- `ParamType`       : 파라미터 타입(string/number/boolean/object/array)
- `ParameterSpec`   : 파라미터 하나의 선언(이름/타입/필수 여부/설명)
- `ToolDescriptor`  : 도구 하나의 선언(이름/설명/파라미터 목록). `to_tool()`로 MCP Tool 변환
- `InvocationRequest`: call_tool로 들어온 (도구 이름, 인자) 한 건
- `InvocationResult` : Text 또는 Error 두 가지 형태만 갖는 결과. `to_call_tool_result()`로 변환
- `classify(value)` : JSON으로 디코딩된 값이 어떤 ParamType인지 판별 (암묵적 형변환 없음)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from mcp.types import CallToolResult, TextContent, Tool


class ParamType(str, enum.Enum):
    """JSON Schema의 `type` 값과 1:1로 대응하는 파라미터 타입."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"

    @property
    def article(self) -> str:
        # 에러 메시지용 관사: "a string" / "an object"
        return "an" if self.value[0] in "aeiou" else "a"


def classify(value: Any) -> Optional[ParamType]:
    """디코딩된 인자 값의 타입을 판별합니다.

    null(None)이나 JSON에 없는 타입이면 None을 반환합니다.
    bool은 int의 하위 클래스이므로 number보다 먼저 검사해야 합니다.
    """
    if isinstance(value, str):
        return ParamType.STRING
    if isinstance(value, bool):
        return ParamType.BOOLEAN
    if isinstance(value, (int, float)):
        return ParamType.NUMBER
    if isinstance(value, Mapping):
        return ParamType.OBJECT
    if isinstance(value, (list, tuple)):
        return ParamType.ARRAY
    return None


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    type: ParamType
    required: bool = False
    description: str = ""

    def type_error(self) -> str:
        """누락/타입 불일치 시 사용할 메시지. 예: "name must be a string"."""
        return f"{self.name} must be {self.type.article} {self.type.value}"

    def to_property(self) -> Dict[str, Any]:
        prop: Dict[str, Any] = {"type": self.type.value}
        if self.description:
            prop["description"] = self.description
        return prop


@dataclass(frozen=True)
class ToolDescriptor:
    """도구 메타데이터. 서버 시작 시 한 번 만들어지고 이후 변경되지 않습니다."""

    name: str
    description: str
    parameters: Tuple[ParameterSpec, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # 리스트로 넘겨도 불변 튜플로 고정
        object.__setattr__(self, "parameters", tuple(self.parameters))
        names = [p.name for p in self.parameters]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate parameter in tool {self.name}: {names}")

    @property
    def required(self) -> Tuple[ParameterSpec, ...]:
        return tuple(p for p in self.parameters if p.required)

    def input_schema(self) -> Dict[str, Any]:
        """LLM에 노출할 JSON Schema(inputSchema)를 만듭니다."""
        return {
            "type": "object",
            "properties": {p.name: p.to_property() for p in self.parameters},
            "required": [p.name for p in self.required],
        }

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
        )


@dataclass(frozen=True)
class InvocationRequest:
    tool_name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # 클라이언트가 arguments를 생략하면 SDK는 None을 넘깁니다.
        if self.arguments is None:
            object.__setattr__(self, "arguments", {})


class ResultKind(str, enum.Enum):
    TEXT = "text"
    ERROR = "error"


@dataclass(frozen=True)
class InvocationResult:
    """호출 결과. Text(value) 또는 Error(message) 둘 중 하나입니다.

    직접 생성하기보다 `InvocationResult.text()` / `InvocationResult.error()`를 사용하세요.
    """

    kind: ResultKind
    content: str

    @classmethod
    def text(cls, value: str) -> "InvocationResult":
        return cls(ResultKind.TEXT, value)

    @classmethod
    def error(cls, message: str) -> "InvocationResult":
        return cls(ResultKind.ERROR, message)

    @property
    def is_error(self) -> bool:
        return self.kind is ResultKind.ERROR

    def to_call_tool_result(self) -> CallToolResult:
        """MCP 응답 형태(CallToolResult)로 변환합니다. Error일 때만 isError=True."""
        return CallToolResult(
            content=[TextContent(type="text", text=self.content)],
            isError=self.is_error,
        )
