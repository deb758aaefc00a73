"""
Javadoc 주석 파서 모듈.

원본 주석 문자열 하나를 본문(free text)과 태그 섹션으로 나누어 ParsedDoc으로 변환한다.

처리 방식:
    1. 줄 단위로 나누고 각 줄 앞의 장식 문자('*', 공백, 탭)를 제거한다.
    2. 한 번의 순회로 상태 기계를 돌린다. 상태는 현재 열린 섹션 종류(SectionKind)이고,
       현재 섹션의 줄을 모으는 누적 버퍼가 있다.
    3. 새 태그 줄을 만나거나 입력이 끝나면 이전 섹션을 닫는다(종류별 핸들러).

지원 태그:
    @param, @return(s), @throws/@exception, @see
    그 밖의 @태그는 모두 OtherTagDoc으로 보관한다 (@author, @since 등)

인라인 태그({@link ...})는 추출하지 않는다.

사용 예:
    parsed = parse_comment("Does the thing.\\n@param x the input value")
    parsed.main_comment.text   # "Does the thing."
    parsed.params[0].name      # "x"
"""

from __future__ import annotations

import enum
import logging
import re

from pydantic import BaseModel, ConfigDict

from javadoc_runtime.models import CommentText, OtherTagDoc, ParamDoc, SeeAlsoDoc, ThrowsDoc

logger = logging.getLogger(__name__)

_DECORATION_CHARS = "* \t"
_WHITESPACE_RUN = re.compile(r"\s+")


class SectionKind(enum.Enum):
    """주석 안에서 현재 열려 있는 섹션 종류."""

    NONE = "none"        # 태그가 나오기 전의 본문
    PARAM = "param"
    RETURN = "return"
    THROWS = "throws"
    SEE = "see"
    OTHER = "other"


# (접두어, 섹션 종류). 위에서부터 순서대로 검사한다.
# OTHER는 '@'로 시작하는 나머지 모든 줄이며 아래 _match_tag에서 처리한다.
_TAG_PREFIXES: tuple[tuple[str, SectionKind], ...] = (
    ("@param ", SectionKind.PARAM),
    ("@returns ", SectionKind.RETURN),
    ("@return ", SectionKind.RETURN),
    ("@throws ", SectionKind.THROWS),
    ("@exception ", SectionKind.THROWS),
    ("@see ", SectionKind.SEE),
)


class ParsedDoc(BaseModel):
    """주석 하나를 파싱한 결과."""

    model_config = ConfigDict(frozen=True)

    main_comment: CommentText = CommentText()
    params: list[ParamDoc] = []
    returns: CommentText = CommentText()
    throws: list[ThrowsDoc] = []
    see_also: list[SeeAlsoDoc] = []
    other: list[OtherTagDoc] = []


class _SectionCollector:
    """
    닫힌 섹션의 결과를 모으는 내부 버퍼.

    섹션 종류마다 핸들러가 하나씩 있고, close()가 종류에 맞는 핸들러로 분기한다.
    """

    def __init__(self):
        self.main_lines: list[str] = []
        self.params: list[ParamDoc] = []
        self.returns = CommentText.empty()
        self.throws: list[ThrowsDoc] = []
        self.see_also: list[SeeAlsoDoc] = []
        self.other: list[OtherTagDoc] = []
        self._handlers = {
            SectionKind.NONE: self._close_main,
            SectionKind.PARAM: self._close_param,
            SectionKind.RETURN: self._close_return,
            SectionKind.THROWS: self._close_throws,
            SectionKind.SEE: self._close_see,
            SectionKind.OTHER: self._close_other,
        }

    def close(self, kind: SectionKind, lines: list[str]):
        if not lines:
            return
        self._handlers[kind](lines)

    def _close_main(self, lines: list[str]):
        self.main_lines.extend(lines)

    def _close_param(self, lines: list[str]):
        named = _split_named_section(lines)
        if named is None:
            logger.debug("잘못된 @param 섹션을 건너뜀: %r", lines[0])
            return
        name, description = named
        self.params.append(ParamDoc(name=name, comment=CommentText(text=description)))

    def _close_return(self, lines: list[str]):
        # 마지막 @return이 이전 값을 덮어쓴다
        self.returns = CommentText(text=_join(lines))

    def _close_throws(self, lines: list[str]):
        named = _split_named_section(lines)
        if named is None:
            logger.debug("잘못된 @throws 섹션을 건너뜀: %r", lines[0])
            return
        name, description = named
        self.throws.append(ThrowsDoc(name=name, comment=CommentText(text=description)))

    def _close_see(self, lines: list[str]):
        self.see_also.append(SeeAlsoDoc(link=_join(lines)))

    def _close_other(self, lines: list[str]):
        first = lines[0]
        if not first.startswith("@"):
            return
        parts = _WHITESPACE_RUN.split(first, maxsplit=1)
        tag_name = parts[0][1:]
        content = _join([parts[1] if len(parts) > 1 else ""] + lines[1:])
        self.other.append(OtherTagDoc(name=tag_name, comment=CommentText(text=content)))

    def build(self) -> ParsedDoc:
        return ParsedDoc(
            main_comment=CommentText(text=_join(self.main_lines)),
            params=self.params,
            returns=self.returns,
            throws=self.throws,
            see_also=self.see_also,
            other=self.other,
        )


def parse_comment(raw: str | None) -> ParsedDoc:
    """
    원본 주석 문자열을 ParsedDoc으로 변환한다.

    None이거나 공백뿐인 입력은 모든 항목이 빈 ParsedDoc을 돌려준다.
    잘못된 형식의 섹션은 버려질 뿐 예외는 발생하지 않는다.

    Args:
        raw: /** */ 구분자를 제거한 주석 문자열

    Returns:
        본문과 태그 섹션으로 나뉜 ParsedDoc
    """
    if raw is None or not raw.strip():
        return ParsedDoc()

    collector = _SectionCollector()
    section = SectionKind.NONE
    buffer: list[str] = []

    for line in normalize_lines(raw):
        matched = _match_tag(line)
        if matched is None:
            buffer.append(line)
            continue
        # 새 태그 시작: 이전 섹션을 닫고 새 버퍼를 연다
        collector.close(section, buffer)
        section, first_line = matched
        buffer = [first_line]

    collector.close(section, buffer)
    return collector.build()


def normalize_lines(raw: str) -> list[str]:
    """주석을 줄 단위로 나누고 각 줄 앞의 '*', 공백, 탭을 제거한다."""
    return [line.lstrip(_DECORATION_CHARS) for line in raw.splitlines()]


def _match_tag(line: str) -> tuple[SectionKind, str] | None:
    """
    태그로 시작하는 줄이면 (섹션 종류, 누적 버퍼의 첫 줄)을 반환한다.

    알려진 태그는 접두어를 뗀 나머지를, 그 밖의 @태그는 줄 전체를 첫 줄로 쓴다.
    태그가 아니면 None.
    """
    for prefix, kind in _TAG_PREFIXES:
        if line.startswith(prefix):
            return kind, line[len(prefix):]
    if line.startswith("@"):
        return SectionKind.OTHER, line
    return None


def _split_named_section(lines: list[str]) -> tuple[str, str] | None:
    """
    @param/@throws 섹션을 (이름, 설명)으로 나눈다.

    첫 줄을 첫 공백 구간에서 나누어 앞은 이름, 뒤와 나머지 줄은 설명이 된다.
    첫 줄에 이름 뒤의 부분이 없으면 None.
    """
    parts = _WHITESPACE_RUN.split(lines[0].lstrip(), maxsplit=1)
    if len(parts) < 2 or not parts[0]:
        return None
    name, rest = parts
    return name, _join([rest] + lines[1:])


def _join(lines: list[str]) -> str:
    return "\n".join(lines).strip()
