from __future__ import annotations

from collections import defaultdict
from typing import Dict, Optional

from ..config import CFPolicy, DEFAULT_POLICY
from ..models.data_models import BehaviorMatrix
from .aggregator import transpose
from .similarity import item_similarity, user_similarity


def find_similar_users(
    user_id: int, matrix: BehaviorMatrix, policy: Optional[CFPolicy] = None
) -> Dict[int, float]:
    policy = policy or DEFAULT_POLICY
    target = matrix.get(user_id)
    if not target:
        return {}

    similarities: Dict[int, float] = {}
    for other_id, behaviors in matrix.items():
        if other_id == user_id:
            continue
        sim = user_similarity(target, behaviors, policy.min_co_occurrence)
        if sim > 0:
            similarities[other_id] = sim
    return similarities


def find_similar_items(
    item_id: int, item_matrix: BehaviorMatrix, policy: Optional[CFPolicy] = None
) -> Dict[int, float]:
    policy = policy or DEFAULT_POLICY
    base = item_matrix.get(item_id)
    if not base:
        return {}

    similarities: Dict[int, float] = {}
    for other_id, users in item_matrix.items():
        if other_id == item_id:
            continue
        sim = item_similarity(base, users, policy.min_co_occurrence)
        if sim > 0:
            similarities[other_id] = sim
    return similarities


def user_based_scores(
    user_id: int, matrix: BehaviorMatrix, policy: Optional[CFPolicy] = None
) -> Dict[int, float]:
    """
    유사 사용자들의 강한 행동(>= 3, 즐겨찾기 이상)을 유사도로 가중 합산.
    score[item] += similarity * behavior
    """
    policy = policy or DEFAULT_POLICY
    scores: Dict[int, float] = defaultdict(float)

    for other_id, sim in find_similar_users(user_id, matrix, policy).items():
        for item_id, behavior in matrix[other_id].items():
            if behavior >= policy.min_neighbor_behavior:
                scores[item_id] += sim * behavior
    return dict(scores)


def item_based_scores(
    user_id: int,
    matrix: BehaviorMatrix,
    policy: Optional[CFPolicy] = None,
    item_matrix: Optional[BehaviorMatrix] = None,
) -> Dict[int, float]:
    """
    사용자가 행동한 각 아이템에 대해 유사 아이템을 찾아
    score[similar] += similarity * (그 사용자 자신의 원 아이템 점수)
    """
    policy = policy or DEFAULT_POLICY
    behaviors = matrix.get(user_id)
    if not behaviors:
        return {}
    if item_matrix is None:
        item_matrix = transpose(matrix)

    scores: Dict[int, float] = defaultdict(float)
    for item_id, own_weight in behaviors.items():
        for similar_id, sim in find_similar_items(item_id, item_matrix, policy).items():
            scores[similar_id] += sim * own_weight
    return dict(scores)
