"""
설정 관리 모듈.

pydantic-settings를 사용하여 .env 파일과 환경변수에서 설정을 로드한다.
환경변수는 JAVADOC_ 접두어를 붙인 대문자 이름과 매칭된다.
예: force_regenerate → JAVADOC_FORCE_REGENERATE

프런트엔드 옵션 이름(packages, disable-cache, force-regenerate, debug,
process-all-declarations)으로 된 매핑은 Settings.from_options()로 변환한다.

사용 예:
    settings = Settings()
    print(settings.output_dir)

    settings = Settings.from_options({"packages": "com.example.api", "debug": "true"})
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

DEFAULT_TARGET_ANNOTATION = "org.springframework.web.bind.annotation.RestController"

# 예전 옵션 이름 → 설정 필드
_OPTION_ALIASES = {"all_files": "process_all_declarations"}


class Settings(BaseSettings):
    """
    추출/조회 전역 설정.

    packages가 None이면 패키지 필터링을 하지 않는다.
    process_all_declarations가 False면 target_annotation이 붙은 클래스만 처리한다.
    """

    # 처리 대상 패키지 접두어 허용 목록 (콤마 구분 문자열도 허용)
    packages: Annotated[list[str] | None, NoDecode] = None

    # 변경 감지 게이트
    disable_cache: bool = False                        # 게이트를 완전히 우회
    force_regenerate: bool = False                     # 라운드 시작 시 캐시를 비우고 전부 처리

    # 처리 대상 선택
    process_all_declarations: bool = False
    target_annotation: str = DEFAULT_TARGET_ANNOTATION

    # 입출력 경로
    source_path: Path = Path("src/main/java")          # 파싱할 Java 소스 루트
    output_dir: Path = Path("build/javadoc")           # JSON 아티팩트 루트

    # 동시 처리 스레드 수 (1이면 순차 처리)
    max_workers: int = Field(default=1, ge=1)

    # 로깅
    debug: bool = False                                # 상세 추적 로그, JSON 들여쓰기
    log_level: str = "INFO"

    # pydantic-settings 설정: .env 파일 경로와 인코딩, 환경변수 접두어
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "JAVADOC_",
        "extra": "ignore",
    }

    @field_validator("packages", mode="before")
    @classmethod
    def _parse_packages(cls, v: Any) -> Any:
        """콤마 구분 문자열을 리스트로 바꾼다. 비어 있으면 None (필터 없음)."""
        if isinstance(v, str):
            v = [s.strip() for s in v.split(",")]
        if isinstance(v, list):
            v = [s for s in v if s]
            return v or None
        return v

    @classmethod
    def from_options(cls, options: Mapping[str, Any], **overrides: Any) -> Settings:
        """
        하이픈 표기의 프런트엔드 옵션 매핑으로 설정을 만든다.

        "kdoc." 같은 네임스페이스 접두어가 붙은 키도 마지막 점 뒤의 이름으로 받아들인다.
        """
        values: dict[str, Any] = {}
        for key, value in options.items():
            name = key.rsplit(".", 1)[-1].replace("-", "_")
            values[_OPTION_ALIASES.get(name, name)] = value
        values.update(overrides)
        return cls(**values)

    @property
    def json_indent(self) -> int | None:
        """디버그 모드에서만 아티팩트 JSON을 들여쓴다."""
        return 2 if self.debug else None

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()
