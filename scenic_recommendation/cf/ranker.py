from __future__ import annotations

from typing import AbstractSet, Dict, List, Mapping, Optional, Tuple

from ..config import CFPolicy, DEFAULT_POLICY
from ..models.data_models import RecommendationResult


def merge_scores(
    user_scores: Mapping[int, float],
    item_scores: Mapping[int, float],
    policy: Optional[CFPolicy] = None,
) -> Dict[int, float]:
    """final = 0.6 * user_based + 0.4 * item_based (두 key 집합의 합집합)"""
    policy = policy or DEFAULT_POLICY
    merged: Dict[int, float] = {}
    for item_id in set(user_scores) | set(item_scores):
        merged[item_id] = (
            policy.user_based_weight * user_scores.get(item_id, 0.0)
            + policy.item_based_weight * item_scores.get(item_id, 0.0)
        )
    return merged


def rank_scores(scores: Mapping[int, float]) -> List[Tuple[int, float]]:
    # 점수 내림차순, 동점이면 id 오름차순
    return sorted(scores.items(), key=lambda kv: (-kv[1], kv[0]))


def select_top_n(
    final_scores: Mapping[int, float],
    interacted: AbstractSet[int],
    top_n: int,
    user_scores: Optional[Mapping[int, float]] = None,
    item_scores: Optional[Mapping[int, float]] = None,
) -> List[RecommendationResult]:
    """
    1) 사용자가 아직 행동하지 않은 (novel) 후보를 점수순으로 top_n 개
    2) 모자라면 이미 행동한 (familiar) 후보로 점수순 보충
    """
    if top_n <= 0:
        return []

    user_scores = user_scores or {}
    item_scores = item_scores or {}
    ranked = rank_scores(final_scores)
    novel = [(sid, s) for sid, s in ranked if sid not in interacted]
    familiar = [(sid, s) for sid, s in ranked if sid in interacted]

    picked = [(sid, s, True) for sid, s in novel[:top_n]]
    if len(picked) < top_n:
        needed = top_n - len(picked)
        picked.extend((sid, s, False) for sid, s in familiar[:needed])

    return [
        RecommendationResult(
            scenic_id=sid,
            score=score,
            novel=is_novel,
            features={
                "user_based": float(user_scores.get(sid, 0.0)),
                "item_based": float(item_scores.get(sid, 0.0)),
            },
        )
        for sid, score, is_novel in picked
    ]


def select_popular(popularity: Mapping[int, float], top_n: int) -> List[RecommendationResult]:
    if top_n <= 0:
        return []
    return [
        RecommendationResult(scenic_id=sid, score=score, novel=True, features={"popularity": score})
        for sid, score in rank_scores(popularity)[:top_n]
    ]
