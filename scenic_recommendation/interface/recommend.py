import logging
from typing import Any, Dict, List, Optional

from ..config import DEFAULT_TOP_N
from ..data import BehaviorDataLoader, create_data_loader
from ..service.pipeline import CollaborativeFilteringRecommender

logger = logging.getLogger(__name__)

_loader: Optional[BehaviorDataLoader] = None
_recommender: Optional[CollaborativeFilteringRecommender] = None


def _get_loader() -> BehaviorDataLoader:
    global _loader
    if _loader is None:
        _loader = create_data_loader()
    return _loader


def _get_recommender() -> CollaborativeFilteringRecommender:
    global _recommender
    if _recommender is None:
        _recommender = CollaborativeFilteringRecommender(_get_loader())
    return _recommender


def recommend_scenic_ids(user_id: int, top_n: int = DEFAULT_TOP_N) -> List[int]:
    """추천 경관 ID 목록만 (상세 정보 없음)."""
    try:
        recommender = _get_recommender()
    except Exception:
        # 로더 생성(DB 연결) 실패도 빈 추천
        logger.exception("[Recommend] 추천기 초기화 실패")
        return []
    return recommender.recommend(user_id, top_n)


def recommend_scenic_spots(user_id: int, top_n: int = DEFAULT_TOP_N) -> List[Dict[str, Any]]:
    """
    추천 ID 순서를 유지한 채 카탈로그 정보로 채운다.
    카탈로그에 없는 ID 는 제외.
    """
    ids = recommend_scenic_ids(user_id, top_n)
    if not ids:
        return []

    try:
        spots = _get_loader().get_scenic_spots_by_ids(ids)
    except Exception:
        logger.exception(f"[Recommend] 경관 정보 조회 실패: ids={ids}")
        return []

    by_id = {s.id: s for s in spots}
    results = []
    for sid in ids:
        spot = by_id.get(sid)
        if spot is None:
            logger.warning(f"[Recommend] 경관 ID {sid} 가 카탈로그에 없어 제외")
            continue
        results.append(spot.to_frontend_dict())
    return results
