from __future__ import annotations

import logging
from typing import List, Optional

from ..cf.aggregator import build_behavior_matrix, popularity_scores, transpose
from ..cf.predictor import item_based_scores, user_based_scores
from ..cf.ranker import merge_scores, select_popular, select_top_n
from ..config import CFPolicy, DEFAULT_TOP_N
from ..data import BehaviorDataLoader
from ..models.data_models import RecommendationResult

logger = logging.getLogger(__name__)


class CollaborativeFilteringRecommender:
    """
    하이브리드 협업 필터링 추천기.

    매 호출마다 전체 로그를 다시 읽고 행렬/유사도를 처음부터 계산한다.
    요청 간에 공유하는 상태는 없다.
    """

    def __init__(self, loader: BehaviorDataLoader, policy: Optional[CFPolicy] = None):
        self.loader = loader
        self.policy = policy or CFPolicy.from_env()

    def recommend_with_scores(self, user_id: int, top_n: int = DEFAULT_TOP_N) -> List[RecommendationResult]:
        """
        점수 포함 추천 결과. 데이터 소스 오류는 그대로 올려보낸다.
        """
        logs = self.loader.load_behavior_logs()
        logger.info(
            f"[CF Pipeline] 📥 ratings={len(logs.ratings)}, bookmarks={len(logs.bookmarks)}, "
            f"orders={len(logs.orders)}, tickets={len(logs.ticket_to_scenic)}"
        )

        matrix, stats = build_behavior_matrix(logs, self.policy)
        logger.info(f"[CF Pipeline] 📊 행동 행렬: users={len(matrix)}, dropped_records={stats.dropped}")
        if stats.dropped:
            logger.info(f"[CF Pipeline]   └─ {stats.as_dict()}")

        # 콜드스타트 → 인기 랭킹
        if user_id not in matrix:
            logger.warning(f"[CF Pipeline] ⚠️ user {user_id} 행동 기록 없음 → 인기 경관 반환")
            return select_popular(popularity_scores(logs, self.policy), top_n)

        user_scores = user_based_scores(user_id, matrix, self.policy)
        logger.info(f"[CF Pipeline] 👥 user-based 후보 {len(user_scores)}개")

        item_scores = item_based_scores(user_id, matrix, self.policy, item_matrix=transpose(matrix))
        logger.info(f"[CF Pipeline] 🏞️ item-based 후보 {len(item_scores)}개")

        final_scores = merge_scores(user_scores, item_scores, self.policy)
        interacted = set(matrix[user_id])
        results = select_top_n(final_scores, interacted, top_n, user_scores, item_scores)

        novel_count = sum(1 for r in results if r.novel)
        logger.info(
            f"[CF Pipeline] ✅ 최종 {len(results)}개 (novel={novel_count}, familiar={len(results) - novel_count})"
        )
        return results

    def recommend(self, user_id: int, top_n: int = DEFAULT_TOP_N) -> List[int]:
        """
        추천 경관 ID 목록 (점수 없음).
        추천은 부가 기능이므로 어떤 실패든 빈 리스트로 대체한다.
        """
        logger.info("=" * 60)
        logger.info(f"[CF Pipeline] 🚀 협업 필터링 추천 시작: user_id={user_id}, top_n={top_n}")
        try:
            results = self.recommend_with_scores(user_id, top_n)
        except Exception:
            logger.exception(f"[CF Pipeline] ❌ 추천 실패: user_id={user_id}")
            return []

        ids = [r.scenic_id for r in results]
        logger.info(f"[CF Pipeline] 🎯 추천 경관 ID: {ids}")
        logger.info("=" * 60)
        return ids

