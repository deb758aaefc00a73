"""공통 테스트 픽스처."""

import os
from pathlib import Path

import pytest

from javadoc_runtime.config import Settings
from javadoc_runtime.store import FileArtifactStore, InMemoryArtifactStore
from tests.factories import order_api

FIXTURES = Path(__file__).parent / "fixtures"
JAVA_FIXTURES = FIXTURES / "java"
ARTIFACT_FIXTURES = FIXTURES / "artifacts"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """실행 환경의 JAVADOC_* 변수와 .env 파일이 설정에 섞이지 않게 한다."""
    for key in list(os.environ):
        if key.startswith("JAVADOC_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def memory_store():
    return InMemoryArtifactStore()


@pytest.fixture
def file_store(tmp_path):
    return FileArtifactStore(tmp_path / "artifacts")


@pytest.fixture
def fixture_store():
    """미리 만들어 둔 아티팩트 디렉터리. 읽기 전용으로 쓴다."""
    return FileArtifactStore(ARTIFACT_FIXTURES)


@pytest.fixture
def all_settings():
    return Settings(process_all_declarations=True)


@pytest.fixture
def order_declaration():
    return order_api()
