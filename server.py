"""
경관 추천 서버 - FastAPI 메인 파일.

하이브리드 협업 필터링(user-based + item-based) 기반 경관 추천 API를 제공합니다.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from scenic_recommendation.interface.api_interface import (
    get_recommendation_ids,
    get_user_recommendations,
)

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# --- Schemas ---


class ScenicRecommendation(BaseModel):
    """개별 추천 경관"""
    id: int
    name: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[str] = None
    price: Optional[float] = None
    category_name: Optional[str] = None
    rating: Optional[float] = None
    comment_count: int = 0


class RecommendationResponse(BaseModel):
    user_id: int
    recommendation_type: str
    recommendations: List[ScenicRecommendation]
    total_count: int
    timestamp: str


class RecommendationIdsResponse(BaseModel):
    user_id: int
    recommendation_type: str
    scenic_ids: List[int]
    total_count: int
    timestamp: str


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


def transform_spot(raw: dict) -> ScenicRecommendation:
    """interface 계층 dict → 응답 스키마"""
    return ScenicRecommendation(
        id=raw["id"],
        name=raw.get("name"),
        image_url=raw.get("imageUrl"),
        location=raw.get("location"),
        price=raw.get("price"),
        category_name=raw.get("categoryName"),
        rating=raw.get("rating"),
        comment_count=raw.get("commentCount") or 0,
    )


# --- Lifespan ---


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("[Startup] Scenic Recommendation Server starting...")
    yield
    logger.info("[Shutdown] Scenic Recommendation Server shutting down...")


app = FastAPI(
    title="Scenic Recommendation Server",
    description="하이브리드 협업 필터링 기반 경관 추천 API",
    version="1.0.0",
    lifespan=lifespan,
)


# --- API Endpoints ---


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok", service="scenic-recommendation", version="1.0.0")


@app.get("/recommendation/collaborative-filtering/recommend", response_model=RecommendationResponse)
def get_recommendations(
    user_id: int = Query(..., alias="userId", description="사용자 ID"),
    top_n: int = Query(10, alias="topN", ge=1, description="추천 개수"),
):
    """
    협업 필터링 추천 경관 목록 (상세 정보 포함).

    행동 기록이 없는 사용자는 전체 인기 경관을 받습니다.
    """
    try:
        logger.info(f"[API] CF recommendations: user_id={user_id}, top_n={top_n}")
        raw_result = get_user_recommendations(user_id=user_id, limit=top_n)
        recommendations = [transform_spot(s) for s in raw_result.get("results", [])]

        logger.info(f"[API] Returned {len(recommendations)} recommendations")
        return RecommendationResponse(
            user_id=user_id,
            recommendation_type=raw_result.get("mode", "collaborative_filtering"),
            recommendations=recommendations,
            total_count=len(recommendations),
            timestamp=datetime.utcnow().isoformat(),
        )
    except Exception as e:
        logger.error(f"[API] Recommendation error: {e}")
        raise HTTPException(status_code=500, detail=f"추천 서비스를 일시적으로 사용할 수 없습니다: {e}")


@app.get("/recommendation/collaborative-filtering/recommend-ids", response_model=RecommendationIdsResponse)
def get_recommendation_id_list(
    user_id: int = Query(..., alias="userId", description="사용자 ID"),
    top_n: int = Query(10, alias="topN", ge=1, description="추천 개수"),
):
    """추천 경관 ID 목록만 반환 (경량 응답)."""
    try:
        logger.info(f"[API] CF recommendation ids: user_id={user_id}, top_n={top_n}")
        raw_result = get_recommendation_ids(user_id=user_id, limit=top_n)
        ids = list(raw_result.get("results", []))

        return RecommendationIdsResponse(
            user_id=user_id,
            recommendation_type=raw_result.get("mode", "collaborative_filtering"),
            scenic_ids=ids,
            total_count=len(ids),
            timestamp=datetime.utcnow().isoformat(),
        )
    except Exception as e:
        logger.error(f"[API] Recommendation ids error: {e}")
        raise HTTPException(status_code=500, detail=f"추천 서비스를 일시적으로 사용할 수 없습니다: {e}")
