"""
하이브리드 협업 필터링 코어.

- aggregator: 평점/즐겨찾기/주문 → 행동 행렬, 인기 점수
- similarity: 사용자 피어슨 / 아이템 코사인 유사도
- predictor: user-based / item-based 후보 점수
- ranker: 점수 융합, novelty 우선 선택, 인기 fallback
"""
from .aggregator import build_behavior_matrix, popularity_scores, transpose
from .predictor import item_based_scores, user_based_scores
from .ranker import merge_scores, select_popular, select_top_n
from .similarity import item_similarity, user_similarity

__all__ = [
    "build_behavior_matrix",
    "popularity_scores",
    "transpose",
    "item_based_scores",
    "user_based_scores",
    "merge_scores",
    "select_popular",
    "select_top_n",
    "item_similarity",
    "user_similarity",
]
