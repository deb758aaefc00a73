"""
리플렉션 멤버 기술자(descriptor) 모듈.

런타임이 보고한 메서드/필드 정보를 담는다. 조회 API의 입력이다.

문자열 표기:
    메서드: "com.example.OrderController#create(int, java.lang.String)"
    필드:   "com.example.OrderController#status"
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

_METHOD_PATTERN = re.compile(r"^(?P<cls>[^#\s]+)#(?P<name>[^(\s]+)\((?P<params>.*)\)$")
_FIELD_PATTERN = re.compile(r"^(?P<cls>[^#\s]+)#(?P<name>[^(\s]+)$")


def _split_top_level(params: str) -> list[str]:
    """제네릭 인자 안의 쉼표는 건너뛰고 최상위 쉼표로만 나눈다."""
    parts: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(params):
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth = max(depth - 1, 0)
        elif ch == "," and depth == 0:
            parts.append(params[start:i])
            start = i + 1
    parts.append(params[start:])
    return parts


class MethodDescriptor(BaseModel):
    """리플렉션으로 얻은 메서드. parameter_types는 런타임 표기를 그대로 쓴다 (예: "int", "Integer", "[I")."""

    model_config = ConfigDict(frozen=True)

    declaring_class: str
    name: str
    parameter_types: list[str] = []

    @classmethod
    def parse(cls, text: str) -> MethodDescriptor:
        """
        "클래스#이름(타입, 타입)" 표기를 파싱한다.

        Raises:
            ValueError: 표기가 맞지 않을 때
        """
        match = _METHOD_PATTERN.match(text.strip())
        if match is None:
            raise ValueError(f"메서드 표기가 올바르지 않습니다: {text!r}")
        params = [p.strip() for p in _split_top_level(match["params"]) if p.strip()]
        return cls(declaring_class=match["cls"], name=match["name"], parameter_types=params)

    def __str__(self) -> str:
        return f"{self.declaring_class}#{self.name}({', '.join(self.parameter_types)})"


class FieldDescriptor(BaseModel):
    """리플렉션으로 얻은 필드."""

    model_config = ConfigDict(frozen=True)

    declaring_class: str
    name: str

    @classmethod
    def parse(cls, text: str) -> FieldDescriptor:
        match = _FIELD_PATTERN.match(text.strip())
        if match is None:
            raise ValueError(f"필드 표기가 올바르지 않습니다: {text!r}")
        return cls(declaring_class=match["cls"], name=match["name"])

    def __str__(self) -> str:
        return f"{self.declaring_class}#{self.name}"
