"""
시그니처 매칭 모듈.

런타임 리플렉션이 보고하는 파라미터 타입 이름과, 추출 시점에 기록된 타입 이름은
표기가 다를 수 있다 (int ↔ Integer, Int ↔ int, IntArray ↔ int[] ↔ [I, 정규화 이름 ↔ 단순 이름).
이 모듈은 두 표기가 같은 타입을 가리키는지 판단하고, 클래스 문서에서 메서드/필드를 찾는다.

타입 동치 규칙 (위에서부터 검사, 처음 성공한 규칙에서 멈춘다):
    1. 문자열 완전 일치
    2. 원시 타입 ↔ 박싱 타입 / 배열 표기 표 (int ↔ Integer, int[] ↔ [I)
    3. 소스 언어 관용 이름 ↔ 플랫폼 이름 표 (Int ↔ int, Int ↔ Integer, IntArray ↔ int[])
    4. 마지막 '.' 뒤 단순 이름 일치
    5. 한쪽의 단순 이름 == 다른 쪽 전체 이름
    6. 한쪽이 다른 쪽으로 끝남 (외부 클래스로 한정된 중첩 클래스 이름)

메서드는 저장된 순서대로 훑어 이름, 파라미터 개수, 모든 위치의 타입이 맞는 첫 항목을 고른다.
시그니처가 진짜로 모호한 오버로드는 더 이상 구분하지 않는다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from javadoc_runtime.models import ClassDoc, FieldDoc, MethodDoc

logger = logging.getLogger(__name__)

# (원시 타입, 박싱 타입, 1차원 배열의 JVM 이름)
_PRIMITIVES = (
    ("boolean", "Boolean", "[Z"),
    ("byte", "Byte", "[B"),
    ("char", "Character", "[C"),
    ("short", "Short", "[S"),
    ("int", "Integer", "[I"),
    ("long", "Long", "[J"),
    ("float", "Float", "[F"),
    ("double", "Double", "[D"),
)

# (소스 언어 관용 이름, 원시 타입)
_IDIOMATIC_ALIASES = (
    ("Boolean", "boolean"),
    ("Byte", "byte"),
    ("Char", "char"),
    ("Short", "short"),
    ("Int", "int"),
    ("Long", "long"),
    ("Float", "float"),
    ("Double", "double"),
)


def _pair_table(pairs: Iterable[tuple[str, str]]) -> frozenset[frozenset[str]]:
    # 순서 없는 쌍으로 저장하여 양방향 조회가 같은 결과를 내게 한다
    return frozenset(frozenset(pair) for pair in pairs)


def _primitive_pairs() -> Iterable[tuple[str, str]]:
    for primitive, boxed, jvm_array in _PRIMITIVES:
        yield primitive, boxed
        yield f"{primitive}[]", jvm_array


def _alias_pairs() -> Iterable[tuple[str, str]]:
    boxed_of = {primitive: boxed for primitive, boxed, _ in _PRIMITIVES}
    jvm_array_of = {primitive: jvm_array for primitive, _, jvm_array in _PRIMITIVES}
    for alias, primitive in _IDIOMATIC_ALIASES:
        yield alias, primitive
        # Boolean, Long 등은 관용 이름과 박싱 이름이 같아 쌍을 이루지 않는다
        if alias != boxed_of[primitive]:
            yield alias, boxed_of[primitive]
        yield f"{alias}Array", f"{primitive}[]"
        yield f"{alias}Array", jvm_array_of[primitive]


PRIMITIVE_EQUIVALENTS = _pair_table(_primitive_pairs())
ALIAS_EQUIVALENTS = _pair_table(_alias_pairs())


def _simple_name(type_name: str) -> str:
    return type_name.rsplit(".", 1)[-1]


def is_type_match(stored: str, reflected: str) -> bool:
    """저장된 타입 이름과 리플렉션 타입 이름이 같은 타입을 가리키는지 판단한다."""
    if stored == reflected:
        return True

    pair = frozenset((stored, reflected))
    if pair in PRIMITIVE_EQUIVALENTS:
        return True
    if pair in ALIAS_EQUIVALENTS:
        return True

    stored_simple = _simple_name(stored)
    reflected_simple = _simple_name(reflected)
    if stored_simple == reflected_simple:
        return True
    if stored_simple == reflected or stored == reflected_simple:
        return True

    return stored.endswith(reflected) or reflected.endswith(stored)


def parameter_types_match(stored: Sequence[str], reflected: Sequence[str]) -> bool:
    """개수가 같고 모든 위치의 타입이 동치이면 True."""
    if len(stored) != len(reflected):
        return False
    return all(is_type_match(s, r) for s, r in zip(stored, reflected))


def find_method(class_doc: ClassDoc, name: str, param_types: Sequence[str]) -> MethodDoc:
    """
    이름과 파라미터 타입이 맞는 첫 번째 메서드 문서를 찾는다.

    Args:
        class_doc: 검색 대상 클래스 문서
        name: 메서드 이름
        param_types: 리플렉션이 보고한 파라미터 타입 이름 (위치 순서)

    Returns:
        찾은 MethodDoc. 없으면 요청한 이름과 타입을 담은 빈 MethodDoc
    """
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("메서드 검색 %s.%s(%s)", class_doc.name, name, ", ".join(param_types))
        for method in class_doc.methods:
            logger.debug("  후보 %s(%s)", method.name, ", ".join(method.param_types))

    for method in class_doc.methods:
        if method.name != name:
            continue
        if parameter_types_match(method.param_types, param_types):
            return method
        if len(method.param_types) == len(param_types):
            _log_type_mismatch(method, param_types)

    return MethodDoc.empty(name, list(param_types))


def _log_type_mismatch(method: MethodDoc, param_types: Sequence[str]):
    if not logger.isEnabledFor(logging.DEBUG):
        return
    for stored, reflected in zip(method.param_types, param_types):
        logger.debug("    %s vs %s = %s", stored, reflected, is_type_match(stored, reflected))


def find_field(class_doc: ClassDoc, name: str) -> FieldDoc:
    """
    이름이 정확히 일치하는 필드 문서를 찾는다.

    필드는 오버로드되지 않는다고 가정한다. 같은 이름이 없거나 둘 이상이면 빈 FieldDoc.
    """
    matches = [field for field in class_doc.fields if field.name == name]
    if len(matches) == 1:
        return matches[0]
    return FieldDoc.empty(name)
