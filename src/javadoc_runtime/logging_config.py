"""
로깅 설정 모듈.

루트 로거를 한 번만 설정한다. 콘솔 출력은 rich의 RichHandler를 사용한다.
각 모듈은 logging.getLogger(__name__)로 자기 로거를 얻어 쓴다.

디버그 모드(Settings.debug)에서는 레벨을 DEBUG로 낮춘다. 건너뛴 섹션,
지문 계산 입력, 시그니처 매칭 상세 같은 추적 로그는 모두 DEBUG 레벨이다.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

LOG_FORMAT = "[%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

_configured = False


def setup_logging(level: str = "INFO"):
    """
    루트 로거에 RichHandler를 붙인다. 두 번째 호출부터는 레벨만 바꾼다.

    Args:
        level: 로그 레벨 이름 (예: "INFO"). 디버그 모드는 Settings.effective_log_level이 "DEBUG"로 넘긴다
    """
    global _configured
    resolved = getattr(logging, level.upper(), logging.INFO)

    if _configured:
        logging.getLogger().setLevel(resolved)
        return
    _configured = True

    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
