from __future__ import annotations

import math
from typing import Hashable, List, Mapping

import numpy as np

from ..config import MIN_CO_OCCURRENCE


def _common_keys(a: Mapping[Hashable, float], b: Mapping[Hashable, float]) -> List[Hashable]:
    # 정렬해서 합산 순서를 고정 -> sim(a, b) == sim(b, a)
    return sorted(a.keys() & b.keys())


def user_similarity(
    behaviors_a: Mapping[int, float],
    behaviors_b: Mapping[int, float],
    min_common: int = MIN_CO_OCCURRENCE,
) -> float:
    """
    두 사용자의 피어슨 상관계수를 [0, 1] 로 옮긴 값.

    - 공통 아이템이 min_common 개 미만이면 0
    - 평균은 공통 아이템이 아니라 각 사용자의 전체 행동으로 계산
    - 분산이 0 이면 0
    """
    common = _common_keys(behaviors_a, behaviors_b)
    if len(common) < min_common:
        return 0.0

    mean_a = float(np.mean(list(behaviors_a.values())))
    mean_b = float(np.mean(list(behaviors_b.values())))

    diff_a = np.array([behaviors_a[k] for k in common], dtype=float) - mean_a
    diff_b = np.array([behaviors_b[k] for k in common], dtype=float) - mean_b

    denominator_a = float(np.dot(diff_a, diff_a))
    denominator_b = float(np.dot(diff_b, diff_b))
    if denominator_a == 0 or denominator_b == 0:
        return 0.0

    correlation = float(np.dot(diff_a, diff_b)) / math.sqrt(denominator_a * denominator_b)
    correlation = max(-1.0, min(1.0, correlation))
    # [-1, 1] -> [0, 1]
    return (correlation + 1.0) / 2.0


def item_similarity(
    users_a: Mapping[int, float],
    users_b: Mapping[int, float],
    min_common: int = MIN_CO_OCCURRENCE,
) -> float:
    """
    두 아이템의 코사인 유사도.
    0 으로 패딩하지 않고 공통 사용자 좌표만으로 계산한다.
    """
    common = _common_keys(users_a, users_b)
    if len(common) < min_common:
        return 0.0

    vec_a = np.array([users_a[k] for k in common], dtype=float)
    vec_b = np.array([users_b[k] for k in common], dtype=float)

    norm_a = float(np.dot(vec_a, vec_a))
    norm_b = float(np.dot(vec_b, vec_b))
    if norm_a == 0 or norm_b == 0:
        return 0.0

    cosine = float(np.dot(vec_a, vec_b)) / (math.sqrt(norm_a) * math.sqrt(norm_b))
    return max(-1.0, min(1.0, cosine))
