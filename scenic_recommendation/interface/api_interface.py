from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import DEFAULT_TOP_N
from .recommend import recommend_scenic_ids, recommend_scenic_spots

logger = logging.getLogger(__name__)


# ------------------------------------------------------
# 협업 필터링 추천 API (경관 상세 정보 포함)
# ------------------------------------------------------
def get_user_recommendations(user_id: int, limit: int = DEFAULT_TOP_N) -> Dict[str, Any]:
    results = recommend_scenic_spots(user_id, top_n=limit)
    logger.info(f"[API Interface] user_id={user_id} → 경관 {len(results)}개")
    return {
        "user_id": user_id,
        "count": len(results),
        "results": results,
        "mode": "collaborative_filtering",
    }


# ------------------------------------------------------
# 경량 API: ID 목록만
# ------------------------------------------------------
def get_recommendation_ids(user_id: int, limit: int = DEFAULT_TOP_N) -> Dict[str, Any]:
    ids = recommend_scenic_ids(user_id, top_n=limit)
    return {
        "user_id": user_id,
        "count": len(ids),
        "results": ids,
        "mode": "collaborative_filtering",
    }
