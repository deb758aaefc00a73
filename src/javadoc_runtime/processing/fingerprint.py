"""
변경 감지 모듈.

클래스 선언의 문서화 대상 표면(시그니처 + 주석 원문)으로 지문(fingerprint)을 계산하고,
이전 라운드와 비교하여 파싱/아티팩트 재생성이 필요한지 판단한다.

지문 구성 (이 순서대로 이어 붙인 뒤 MD5):
    1. 정규화된 클래스 이름
    2. 클래스 주석 원문 (없으면 "")
    3. 멤버 함수마다 ("<이름>_<타입1,타입2,...>" 정렬 키 오름차순)
       이름, 콤마로 이은 파라미터 타입, 주석 원문
    4. 생성자마다 (같은 정렬 키 순서)
       "constructor", 콤마로 이은 파라미터 타입, 주석 원문

정렬 키 덕분에 프런트엔드가 멤버를 어떤 순서로 넘겨도 지문은 같다.
MD5는 변경 감지용 체크섬이며 보안 용도가 아니다.

사용 예:
    cache = IncrementalCache()
    fingerprint = compute_fingerprint(declaration)
    if cache.acquire(declaration.qualified_name, fingerprint):
        ...  # 파싱 후 아티팩트 기록
"""

from __future__ import annotations

import hashlib
import logging
import threading

from javadoc_runtime.declarations import ClassDeclaration, FunctionDeclaration
from javadoc_runtime.processing.type_names import parameter_type_names

logger = logging.getLogger(__name__)

CONSTRUCTOR_MARKER = "constructor"


def member_sort_key(function: FunctionDeclaration) -> str:
    """멤버 함수 정렬 키. 예: "process_String,int" """
    return f"{function.name}_{','.join(parameter_type_names(function.parameters))}"


def _ordered(functions: list[FunctionDeclaration]) -> list[FunctionDeclaration]:
    # 이름과 타입이 같은 경우에도 입력 순서에 좌우되지 않도록 주석 원문을 보조 키로 쓴다
    return sorted(functions, key=lambda f: (member_sort_key(f), f.doc_comment or ""))


def compute_fingerprint(declaration: ClassDeclaration) -> str:
    """
    클래스 선언의 지문을 계산한다.

    Returns:
        32자리 소문자 16진수 MD5 문자열
    """
    parts = [declaration.qualified_name, declaration.doc_comment or ""]

    for function in _ordered(declaration.functions):
        parts.append(function.name)
        parts.append(",".join(parameter_type_names(function.parameters)))
        parts.append(function.doc_comment or "")

    for constructor in _ordered(declaration.constructors):
        parts.append(CONSTRUCTOR_MARKER)
        parts.append(",".join(parameter_type_names(constructor.parameters)))
        parts.append(constructor.doc_comment or "")

    content = "".join(parts)
    logger.debug("지문 입력 %s: %s...", declaration.qualified_name, content[:100])
    return hashlib.md5(content.encode("utf-8"), usedforsecurity=False).hexdigest()


class IncrementalCache:
    """
    처리 완료된 선언 키와 마지막 지문을 기억하는 변경 감지 캐시.

    추출 세션마다 하나씩 만들어 쓴다. 여러 스레드에서 동시에 써도 안전하며,
    acquire()는 "검사 → 표시"를 하나의 잠금 안에서 수행한다.
    clear()/begin_round()는 라운드 사이에서만 호출해야 한다.

    Args:
        disable_cache: True면 항상 처리한다 (게이트 우회)
        force_regenerate: True면 라운드 시작 시 상태를 비우고 모두 처리한다
    """

    def __init__(self, disable_cache: bool = False, force_regenerate: bool = False):
        self.disable_cache = disable_cache
        self.force_regenerate = force_regenerate
        self._processed: set[str] = set()
        self._fingerprints: dict[str, str] = {}
        self._lock = threading.Lock()

    def should_process(self, key: str, fingerprint: str) -> bool:
        """이 선언을 (다시) 처리해야 하는지 판단한다. 상태는 바꾸지 않는다."""
        with self._lock:
            return self._should_process(key, fingerprint)

    def _should_process(self, key: str, fingerprint: str) -> bool:
        previous = self._fingerprints.get(key)
        return (
            self.disable_cache
            or self.force_regenerate
            or previous is None
            or previous != fingerprint
            or key not in self._processed
        )

    def record_processed(self, key: str, fingerprint: str):
        """선언을 처리 완료로 표시하고 지문을 기록한다."""
        with self._lock:
            self._processed.add(key)
            self._fingerprints[key] = fingerprint

    def acquire(self, key: str, fingerprint: str) -> bool:
        """
        처리가 필요하면 곧바로 처리 완료로 표시하고 True를 반환한다.

        파싱/기록 전에 표시하므로, 기록 중 실패하더라도 같은 라운드에서
        같은 선언을 무한히 다시 처리하지 않는다.
        """
        with self._lock:
            if not self._should_process(key, fingerprint):
                return False
            self._processed.add(key)
            self._fingerprints[key] = fingerprint
            return True

    def begin_round(self):
        """캐시 비활성화나 강제 재생성이 켜져 있으면 모든 상태를 비운다."""
        if self.disable_cache or self.force_regenerate:
            self.clear()
            logger.debug("캐시 비활성화 또는 강제 재생성 - 모든 클래스를 처리합니다")

    def clear(self):
        with self._lock:
            self._processed.clear()
            self._fingerprints.clear()

    def fingerprint_for(self, key: str) -> str | None:
        with self._lock:
            return self._fingerprints.get(key)

    @property
    def processed_count(self) -> int:
        with self._lock:
            return len(self._processed)
