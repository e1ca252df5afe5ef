from __future__ import annotations

from typing import Optional


class RecommendationError(Exception):
    """추천 모듈 공통 예외."""


class DataUnavailableError(RecommendationError):
    """
    행동 로그/카탈로그 저장소에 접근할 수 없을 때.

    재시도는 하지 않는다. 호출자(서비스 계층)가 잡아서 빈 추천으로 처리.
    """

    def __init__(self, source: str, message: Optional[str] = None):
        self.source = source
        super().__init__(message or f"data source unavailable: {source}")
