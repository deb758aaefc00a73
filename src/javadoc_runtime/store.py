"""
아티팩트 저장소 모듈.

클래스 문서(ClassDoc) 하나를 JSON 파일 하나로 저장하고 읽는다.
파일 경로는 정규화된 클래스 이름의 '.'을 디렉터리 구분자로 바꾸고 .json을 붙인 것이다.

    com.example.OrderController  →  <root>/com/example/OrderController.json
    com.example.Outer.Inner      →  <root>/com/example/Outer/Inner.json

저장소는 Protocol로 정의하므로 파일 저장소와 메모리 저장소가 상속 없이 같은 자리에 쓰인다.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Protocol

from javadoc_runtime.models import ClassDoc

logger = logging.getLogger(__name__)

ARTIFACT_SUFFIX = ".json"


def artifact_path(qualified_name: str) -> PurePosixPath:
    """정규화된 이름을 저장소 루트 기준 상대 경로로 바꾼다."""
    return PurePosixPath(qualified_name.replace(".", "/") + ARTIFACT_SUFFIX)


class ArtifactStore(Protocol):
    def write(self, class_doc: ClassDoc) -> None: ...
    def read(self, qualified_name: str) -> str | None: ...


class FileArtifactStore:
    """
    디렉터리 기반 아티팩트 저장소.

    Args:
        root: 아티팩트 루트 디렉터리
        indent: JSON 들여쓰기 (None이면 한 줄로 기록)
    """

    def __init__(self, root: Path, indent: int | None = None):
        self.root = Path(root)
        self.indent = indent

    def path_for(self, qualified_name: str) -> Path:
        return self.root / artifact_path(qualified_name)

    def write(self, class_doc: ClassDoc) -> None:
        path = self.path_for(class_doc.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(class_doc.to_json(indent=self.indent), encoding="utf-8")
        logger.debug("아티팩트 생성: %s", path)

    def read(self, qualified_name: str) -> str | None:
        """아티팩트 원문을 반환한다. 파일이 없으면 None."""
        path = self.path_for(qualified_name)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None


class InMemoryArtifactStore:
    """dict 기반 저장소. I/O 없이 테스트나 단일 프로세스 파이프라인에서 쓴다."""

    def __init__(self, artifacts: dict[str, str] | None = None):
        self.artifacts: dict[str, str] = dict(artifacts or {})
        self.write_count = 0

    def write(self, class_doc: ClassDoc) -> None:
        self.artifacts[class_doc.name] = class_doc.to_json()
        self.write_count += 1

    def read(self, qualified_name: str) -> str | None:
        return self.artifacts.get(qualified_name)
