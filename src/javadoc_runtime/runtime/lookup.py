"""
런타임 문서 조회 모듈.

저장소의 JSON 아티팩트를 처음 요청될 때 읽어 캐시에 보관하고,
리플렉션 기술자(MethodDescriptor, FieldDescriptor)로 메서드/필드 문서를 찾는다.

모든 조회는 실패하지 않는다:
- 아티팩트가 없으면 빈 ClassDoc
- 아티팩트가 깨져 있으면 DEBUG 로그를 남기고 빈 ClassDoc (빈 결과도 캐시하여 반복 파싱을 막는다)
- 메서드/필드가 없으면 요청한 이름을 담은 빈 MethodDoc / FieldDoc

캐시는 읽기 위주이며, 경쟁 상태에서 같은 키를 두 번 채워도 같은 값이므로 잠금을 쓰지 않는다.
장기 실행 프로세스는 clear_cache()로 메모리를 비울 수 있다.

사용 예:
    docs = RuntimeDocs(FileArtifactStore(Path("build/javadoc")))
    method_doc = docs.get_documentation(MethodDescriptor.parse("com.example.Api#create(int)"))
"""

from __future__ import annotations

import functools
import logging

from pydantic import ValidationError

from javadoc_runtime.models import ClassDoc, FieldDoc, MethodDoc
from javadoc_runtime.runtime.descriptors import FieldDescriptor, MethodDescriptor
from javadoc_runtime.runtime.matching import find_field, find_method
from javadoc_runtime.store import ArtifactStore

logger = logging.getLogger(__name__)


class RuntimeDocs:
    """
    클래스 문서 조회기.

    프로세스마다 하나를 만들어 쓰며, 테스트에서는 저장소를 바꿔 독립 인스턴스를 만든다.

    Args:
        store: 아티팩트를 읽을 저장소
    """

    def __init__(self, store: ArtifactStore):
        self.store = store
        self._cache: dict[str, ClassDoc] = {}

    def get_class_doc(self, qualified_name: str) -> ClassDoc:
        """정규화된 클래스 이름으로 문서를 조회한다."""
        cached = self._cache.get(qualified_name)
        if cached is not None:
            return cached
        class_doc = self._load(qualified_name)
        return self._cache.setdefault(qualified_name, class_doc)

    def _load(self, qualified_name: str) -> ClassDoc:
        try:
            raw = self.store.read(qualified_name)
        except (OSError, ValueError) as e:
            # ValueError: UTF-8이 아니거나 이름에 NUL처럼 경로로 쓸 수 없는 문자가 있을 때
            logger.debug("%s 아티팩트를 읽지 못했습니다: %s", qualified_name, e)
            return ClassDoc.empty(qualified_name)
        if raw is None:
            return ClassDoc.empty(qualified_name)
        try:
            return ClassDoc.from_json(raw)
        except ValidationError as e:
            logger.debug("%s 아티팩트를 파싱하지 못했습니다: %s", qualified_name, e)
            return ClassDoc.empty(qualified_name)

    def get_method_doc(self, method: MethodDescriptor) -> MethodDoc:
        class_doc = self.get_class_doc(method.declaring_class)
        return find_method(class_doc, method.name, method.parameter_types)

    def get_field_doc(self, field: FieldDescriptor) -> FieldDoc:
        class_doc = self.get_class_doc(field.declaring_class)
        return find_field(class_doc, field.name)

    @functools.singledispatchmethod
    def get_documentation(self, target):
        """
        대상 종류에 맞는 문서를 반환한다.

        str → ClassDoc, MethodDescriptor → MethodDoc, FieldDescriptor → FieldDoc
        """
        raise TypeError(f"지원하지 않는 조회 대상입니다: {type(target).__name__}")

    @get_documentation.register(str)
    def _(self, target: str) -> ClassDoc:
        return self.get_class_doc(target)

    @get_documentation.register(MethodDescriptor)
    def _(self, target: MethodDescriptor) -> MethodDoc:
        return self.get_method_doc(target)

    @get_documentation.register(FieldDescriptor)
    def _(self, target: FieldDescriptor) -> FieldDoc:
        return self.get_field_doc(target)

    def clear_cache(self):
        """캐시된 클래스 문서를 모두 버린다."""
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)
