"""
문서 모델 모듈.

Javadoc 주석을 파싱한 결과와, 이를 클래스/메서드/필드 단위로 묶은 구조를 정의한다.
추출 시점에 JSON 아티팩트로 직렬화되고, 런타임에 다시 역직렬화되어 조회된다.

데이터 흐름:
    Java 소스 →[추출]→ ClassDeclaration →[파싱]→ ClassDoc →[직렬화]→ JSON 아티팩트
    JSON 아티팩트 →[역직렬화]→ ClassDoc →[시그니처 매칭]→ MethodDoc / FieldDoc

JSON 키는 camelCase(paramTypes, inlineTags, seeAlso, isConstructor)이고,
파이썬 속성은 snake_case이다. 입력 시에는 두 이름을 모두 허용한다.

모든 모델은 생성 후 변경할 수 없다(frozen). 문서가 없는 경우에도 None 대신
각 모델의 empty() 값을 돌려주므로 호출 측은 항상 검사 가능한 객체를 받는다.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocModel(BaseModel):
    """문서 모델 공통 설정. camelCase 별칭, 불변, 알 수 없는 키 무시."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",              # 이후 버전에서 추가된 필드는 읽을 때 무시
    )


class InlineTag(DocModel):
    """주석 본문 안의 인라인 태그 ({@link ...} 등). 스키마에만 존재하고 파서는 채우지 않는다."""

    name: str
    content: str


class CommentText(DocModel):
    """
    주석 본문 하나.

    text가 공백뿐이고 inline_tags도 비어 있으면 빈 주석으로 취급한다.
    """

    text: str = ""
    inline_tags: list[InlineTag] = []

    def is_empty(self) -> bool:
        return not self.text.strip() and not self.inline_tags

    @classmethod
    def empty(cls) -> CommentText:
        return cls(text="")


class ParamDoc(DocModel):
    """@param 태그 하나. name은 태그 뒤의 토큰 그대로이며 실제 파라미터와 대조하지 않는다."""

    name: str
    comment: CommentText = CommentText()


class ThrowsDoc(DocModel):
    """@throws / @exception 태그 하나. name은 타입으로 해석하지 않은 원문 토큰이다."""

    name: str
    comment: CommentText = CommentText()


class SeeAlsoDoc(DocModel):
    """@see 태그 하나. 링크 문자열은 파싱하지 않고 그대로 보관한다."""

    link: str


class OtherTagDoc(DocModel):
    """인식하지 못한 나머지 태그 (@author, @since, @constructor 등)."""

    name: str
    comment: CommentText = CommentText()


class FieldDoc(DocModel):
    """필드 문서."""

    name: str
    comment: CommentText = CommentText()

    @classmethod
    def empty(cls, field_name: str) -> FieldDoc:
        return cls(name=field_name, comment=CommentText.empty())


class MethodDoc(DocModel):
    """
    메서드 또는 생성자 문서.

    param_types는 선언된 파라미터 목록에서, params는 문서의 @param 태그에서 온다.
    두 목록은 서로 독립적이며 인덱스로 정렬되어 있다고 가정하면 안 된다.
    """

    name: str
    param_types: list[str] = []        # 위치 순서의 파라미터 타입 단순 이름 (예: ["int", "String"])
    comment: CommentText = CommentText()
    params: list[ParamDoc] = []
    returns: CommentText = CommentText()
    throws: list[ThrowsDoc] = []
    see_also: list[SeeAlsoDoc] = []
    other: list[OtherTagDoc] = []
    is_constructor: bool = False

    @classmethod
    def empty(cls, method_name: str, param_types: list[str]) -> MethodDoc:
        """조회에 실패했을 때 돌려줄, 요청한 이름과 타입만 가진 빈 문서."""
        return cls(name=method_name, param_types=list(param_types), comment=CommentText.empty())


class ClassDoc(DocModel):
    """
    클래스 하나의 전체 문서. 아티팩트 파일 하나에 대응한다.

    name은 정규화된 이름이다 (예: "com.example.OrderController",
    중첩 클래스는 "com.example.Outer.Inner").
    """

    name: str
    comment: CommentText = CommentText()
    methods: list[MethodDoc] = []
    constructors: list[MethodDoc] = []
    fields: list[FieldDoc] = []
    see_also: list[SeeAlsoDoc] = []
    other: list[OtherTagDoc] = []

    def is_empty(self) -> bool:
        return (
            self.comment.is_empty()
            and not self.methods
            and not self.constructors
            and not self.fields
        )

    @classmethod
    def empty(cls, class_name: str) -> ClassDoc:
        return cls(name=class_name, comment=CommentText.empty())

    def to_json(self, indent: int | None = None) -> str:
        """아티팩트 형식(camelCase JSON)으로 직렬화한다."""
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, data: str | bytes) -> ClassDoc:
        """
        아티팩트 JSON을 역직렬화한다.

        Raises:
            pydantic.ValidationError: JSON 문법 오류 또는 스키마 불일치
        """
        return cls.model_validate_json(data)
