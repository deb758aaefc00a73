"""
파라미터 타입 이름 해석 모듈.

변경 감지 해시와 아티팩트의 paramTypes에 들어갈 타입 이름을 최선을 다해(best-effort) 구한다.
각 단계는 값 또는 None을 돌려주고, 아래 순서대로 명시적으로 이어 붙인다:

    1. 프런트엔드의 구조적 해석 결과 (ParameterDeclaration.resolved_type)
    2. 타입 문자열에서 단순 이름 추출
       "java.util.List<String>?" → 끝의 '?' 제거 → '<' 이후 제거 → 마지막 '.' 뒤 → "List"
    3. 자리표시자 "Unknown"

어느 단계도 예외를 던지지 않는다. 해석 실패는 오류가 아니라 정해진 대체 경로이다.
"""

from __future__ import annotations

from collections.abc import Iterable

from javadoc_runtime.declarations import ParameterDeclaration

UNKNOWN_TYPE = "Unknown"


def simple_name_from_text(type_text: str | None) -> str | None:
    """
    타입 문자열에서 단순 이름을 뽑는다. 뽑을 수 없으면 None.

    예:
        "kotlin.Int?"              → "Int"
        "java.util.Map<K, V>"      → "Map"
        "int[]"                    → "int[]"
    """
    if not type_text:
        return None
    text = type_text.strip().removesuffix("?")
    text = text.split("<", 1)[0].strip()
    name = text.rsplit(".", 1)[-1].strip()
    return name or None


def best_effort_type_name(parameter: ParameterDeclaration) -> str:
    """해석 결과 → 문자열 추출 → "Unknown" 순으로 파라미터 타입 이름을 정한다."""
    return (
        parameter.resolved_type
        or simple_name_from_text(parameter.type_text)
        or UNKNOWN_TYPE
    )


def parameter_type_names(parameters: Iterable[ParameterDeclaration]) -> list[str]:
    """파라미터 목록의 타입 이름을 선언 순서대로 반환한다."""
    return [best_effort_type_name(p) for p in parameters]
