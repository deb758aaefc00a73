"""
선언 모델 모듈.

추출 프런트엔드(tree-sitter Java 파서)가 만들어 처리기에 넘기는 구조 정보를 정의한다.
원본 주석 문자열과 파라미터 타입 등, 문서화와 변경 감지에 필요한 만큼만 담는다.

데이터 흐름:
    Java 소스 →[DeclarationExtractor]→ ClassDeclaration →[DocumentationProcessor]→ ClassDoc
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Literal

from pydantic import BaseModel, ConfigDict

CONSTRUCTOR_NAME = "<init>"  # JVM이 생성자에 부여하는 이름


class ParameterDeclaration(BaseModel):
    """메서드/생성자의 파라미터 하나."""

    model_config = ConfigDict(frozen=True)

    name: str
    type_text: str                     # 소스에 적힌 타입 문자열 (예: "java.util.List<String>")
    resolved_type: str | None = None   # 구조적 해석 결과 (예: "List"). 해석 실패 시 None


class FunctionDeclaration(BaseModel):
    """메서드 또는 생성자 선언."""

    model_config = ConfigDict(frozen=True)

    name: str
    parameters: list[ParameterDeclaration] = []
    doc_comment: str | None = None     # /** */ 구분자를 제거한 원본 주석
    annotations: list[str] = []


class FieldDeclaration(BaseModel):
    """필드, enum 상수, record 컴포넌트 선언."""

    model_config = ConfigDict(frozen=True)

    name: str
    type_text: str | None = None
    doc_comment: str | None = None


class ClassDeclaration(BaseModel):
    """
    클래스/인터페이스/enum/record 선언 하나와 그 멤버.

    중첩 선언은 nested_classes에 담기며, 각각 독립된 아티팩트로 처리된다.
    """

    model_config = ConfigDict(frozen=True)

    name: str                          # 단순 이름 (예: "Inner")
    qualified_name: str                # 정규화된 이름 (예: "com.example.Outer.Inner")
    package_name: str | None = None
    kind: Literal["class", "interface", "enum", "record", "annotation"] = "class"
    annotations: list[str] = []        # 예: ["@RestController"]
    doc_comment: str | None = None
    functions: list[FunctionDeclaration] = []
    constructors: list[FunctionDeclaration] = []
    fields: list[FieldDeclaration] = []
    nested_classes: list[ClassDeclaration] = []
    file_path: str | None = None

    def walk(self) -> Iterator[ClassDeclaration]:
        """자신과 모든 중첩 선언을 깊이 우선으로 순회한다."""
        yield self
        for nested in self.nested_classes:
            yield from nested.walk()
