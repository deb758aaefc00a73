"""
문서 처리기 모듈.

프런트엔드가 넘긴 ClassDeclaration을 골라내고, 변경 감지 게이트를 통과한 선언만
주석을 파싱하여 ClassDoc으로 조립한 뒤 저장소에 기록한다.

한 라운드의 흐름:
    1. 캐시 라운드 시작 (비활성화/강제 재생성이면 상태 초기화)
    2. 처리 대상 선택
       - process_all_declarations: 모든 선언과 그 중첩 선언
       - 그 외: target_annotation이 붙은 선언만
       - packages 접두어 목록으로 다시 거름
    3. 선언마다: 지문 계산 → 게이트 → 파싱/조립 → 기록
       한 선언의 실패는 로그만 남기고 나머지 선언은 계속 처리한다.

사용 예:
    processor = DocumentationProcessor(FileArtifactStore(Path("build/javadoc")), settings)
    report = processor.process(declarations)
    print(report.emitted)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from pydantic import BaseModel

from javadoc_runtime.config import Settings
from javadoc_runtime.declarations import ClassDeclaration, FunctionDeclaration
from javadoc_runtime.models import ClassDoc, CommentText, FieldDoc, MethodDoc
from javadoc_runtime.processing.comment_parser import ParsedDoc, parse_comment
from javadoc_runtime.processing.fingerprint import IncrementalCache, compute_fingerprint
from javadoc_runtime.processing.type_names import parameter_type_names
from javadoc_runtime.store import ArtifactStore

logger = logging.getLogger(__name__)


class ProcessingReport(BaseModel):
    """한 라운드의 처리 결과. 각 목록은 정규화된 클래스 이름이다."""

    emitted: list[str] = []            # 아티팩트를 새로 기록한 클래스
    skipped: list[str] = []            # 변경이 없어 건너뛴 클래스
    failed: list[str] = []             # 처리 중 오류가 난 클래스


class DocumentationProcessor:
    """
    선언 → 문서 변환과 아티팩트 기록을 담당한다.

    Args:
        store: 아티팩트를 기록할 저장소
        settings: 처리 옵션. None이면 기본 Settings()
        cache: 변경 감지 캐시. None이면 settings의 플래그로 새로 만든다
    """

    def __init__(
        self,
        store: ArtifactStore,
        settings: Settings | None = None,
        cache: IncrementalCache | None = None,
    ):
        self.store = store
        self.settings = settings or Settings()
        self.cache = cache or IncrementalCache(
            disable_cache=self.settings.disable_cache,
            force_regenerate=self.settings.force_regenerate,
        )

    # ── 처리 대상 선택 ──────────────────────────────────────

    def select(self, declarations: Iterable[ClassDeclaration]) -> list[ClassDeclaration]:
        """
        이번 라운드에서 처리할 선언을 고른다.

        중첩 선언도 각각 독립된 처리 대상이며, 정규화된 이름 기준으로 중복을 제거한다.
        """
        selected: dict[str, ClassDeclaration] = {}
        for declaration in declarations:
            for candidate in declaration.walk():
                if candidate.qualified_name in selected:
                    continue
                if not self.settings.process_all_declarations and not self._has_target_annotation(candidate):
                    continue
                if not self._in_packages(candidate):
                    continue
                selected[candidate.qualified_name] = candidate
        return list(selected.values())

    def _has_target_annotation(self, declaration: ClassDeclaration) -> bool:
        # 소스의 어노테이션은 정규화 이름 또는 단순 이름으로 쓰일 수 있다
        target = self.settings.target_annotation.lstrip("@")
        target_simple = target.rsplit(".", 1)[-1]
        for annotation in declaration.annotations:
            name = annotation.lstrip("@")
            if name == target or name == target_simple:
                return True
        return False

    def _in_packages(self, declaration: ClassDeclaration) -> bool:
        prefixes = self.settings.packages
        if prefixes is None:
            return True
        package_name = declaration.package_name or ""
        return any(package_name.startswith(prefix) for prefix in prefixes)

    # ── 라운드 처리 ────────────────────────────────────────

    def process(self, declarations: Iterable[ClassDeclaration]) -> ProcessingReport:
        """
        한 라운드를 처리한다.

        Returns:
            기록/건너뜀/실패한 클래스 이름을 담은 ProcessingReport
        """
        self.cache.begin_round()
        targets = self.select(declarations)
        logger.debug("처리할 클래스 %d개 발견", len(targets))

        if self.settings.max_workers > 1 and len(targets) > 1:
            with ThreadPoolExecutor(max_workers=self.settings.max_workers) as pool:
                outcomes = list(pool.map(self._process_safely, targets))
        else:
            outcomes = [self._process_safely(target) for target in targets]

        report = ProcessingReport()
        for target, outcome in zip(targets, outcomes):
            getattr(report, outcome).append(target.qualified_name)

        logger.debug(
            "총 %d개 클래스 처리됨, 이번 라운드 기록 %d개 / 건너뜀 %d개 / 실패 %d개",
            self.cache.processed_count,
            len(report.emitted),
            len(report.skipped),
            len(report.failed),
        )
        return report

    def _process_safely(self, declaration: ClassDeclaration) -> str:
        """process_class를 실행하고 결과를 "emitted" / "skipped" / "failed"로 돌려준다."""
        try:
            class_doc = self.process_class(declaration)
        except Exception:
            logger.exception("클래스 %s 처리 중 오류", declaration.qualified_name)
            return "failed"
        return "skipped" if class_doc is None else "emitted"

    def process_class(self, declaration: ClassDeclaration) -> ClassDoc | None:
        """
        선언 하나를 게이트에 통과시키고, 통과하면 문서를 조립하여 기록한다.

        Returns:
            기록한 ClassDoc. 변경이 없어 건너뛰었으면 None
        """
        class_name = declaration.qualified_name
        fingerprint = compute_fingerprint(declaration)
        previous = self.cache.fingerprint_for(class_name)

        if not self.cache.acquire(class_name, fingerprint):
            logger.debug("%s 건너뜀 - 내용 변경 없음 (hash: %s)", class_name, fingerprint)
            return None

        logger.debug("%s 처리 (hash: %s, prev: %s)", class_name, fingerprint, previous)
        class_doc = self.build_class_doc(declaration)
        self.store.write(class_doc)
        return class_doc

    # ── 문서 조립 ──────────────────────────────────────────

    def build_class_doc(self, declaration: ClassDeclaration) -> ClassDoc:
        """클래스 주석, 메서드, 생성자, 필드 문서를 모아 ClassDoc을 만든다."""
        parsed = parse_comment(declaration.doc_comment)
        return ClassDoc(
            name=declaration.qualified_name,
            comment=parsed.main_comment,
            methods=[self.build_method_doc(f) for f in declaration.functions],
            constructors=[self.build_method_doc(c, is_constructor=True) for c in declaration.constructors],
            fields=self.build_field_docs(declaration, parsed),
            see_also=parsed.see_also,
            other=parsed.other,
        )

    def build_method_doc(self, function: FunctionDeclaration, is_constructor: bool = False) -> MethodDoc:
        parsed = parse_comment(function.doc_comment)
        return MethodDoc(
            name=function.name,
            param_types=parameter_type_names(function.parameters),
            comment=parsed.main_comment,
            params=parsed.params,
            returns=parsed.returns,
            throws=parsed.throws,
            see_also=parsed.see_also,
            other=parsed.other,
            is_constructor=is_constructor,
        )

    def build_field_docs(self, declaration: ClassDeclaration, class_comment: ParsedDoc) -> list[FieldDoc]:
        """
        필드 문서를 만든다. 주석 우선순위:

        1. 필드에 직접 붙은 주석
        2. 클래스 주석에서 같은 이름을 가진 @param (record 컴포넌트, 생성자 프로퍼티)
        3. 빈 주석
        """
        fields = []
        for field in declaration.fields:
            comment = parse_comment(field.doc_comment).main_comment
            if comment.is_empty():
                comment = _single_param_comment(class_comment, field.name)
            fields.append(FieldDoc(name=field.name, comment=comment))
        return fields


def _single_param_comment(parsed: ParsedDoc, name: str) -> CommentText:
    matches = [param for param in parsed.params if param.name == name]
    if len(matches) == 1:
        return matches[0].comment
    return CommentText.empty()
