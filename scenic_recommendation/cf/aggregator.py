"""
행동 로그(평점 / 즐겨찾기 / 주문) → 통합 user-item 행동 행렬.

각 로그는 Interaction 레코드 스트림으로 변환되고, 행렬은 그 스트림을
덧셈으로 접어서(fold) 만든다. 같은 (user, scenic) 쌍의 행동은 덮어쓰지
않고 합산한다 (즐겨찾기 3.0 + 주문 4.0 = 7.0).
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from ..config import CFPolicy, DEFAULT_POLICY, normalize_order_status
from ..models.data_models import (
    AggregationStats,
    BehaviorLogs,
    BehaviorMatrix,
    Bookmark,
    Interaction,
    Rating,
    SourceKind,
    TicketOrder,
)

logger = logging.getLogger(__name__)


def _is_id(value) -> bool:
    # bool 은 int 의 하위 타입이므로 따로 제외
    return isinstance(value, int) and not isinstance(value, bool)


def _as_number(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


# ------------------------------------------------------
# 소스별 Interaction 변환
# ------------------------------------------------------
def rating_interactions(
    ratings: Iterable[Rating], stats: AggregationStats
) -> Iterator[Interaction]:
    for r in ratings:
        value = _as_number(r.rating)
        if not (_is_id(r.user_id) and _is_id(r.scenic_id)):
            stats.ratings_malformed += 1
            continue
        # 평점 없음 / 0 이하는 신호 없음
        if value is None or value <= 0:
            stats.ratings_filtered += 1
            continue
        stats.ratings_used += 1
        yield Interaction(r.user_id, r.scenic_id, SourceKind.RATING, value)


def bookmark_interactions(
    bookmarks: Iterable[Bookmark], stats: AggregationStats, policy: CFPolicy
) -> Iterator[Interaction]:
    for b in bookmarks:
        if not (_is_id(b.user_id) and _is_id(b.scenic_id)):
            stats.bookmarks_malformed += 1
            continue
        stats.bookmarks_used += 1
        yield Interaction(b.user_id, b.scenic_id, SourceKind.BOOKMARK, policy.bookmark_weight)


def order_interactions(
    orders: Iterable[TicketOrder],
    ticket_to_scenic: Mapping[int, int],
    stats: AggregationStats,
    policy: CFPolicy,
) -> Iterator[Interaction]:
    for o in orders:
        if not (_is_id(o.user_id) and _is_id(o.ticket_id)):
            stats.orders_malformed += 1
            continue
        # 결제 완료(1) / 이용 완료(4) 주문만
        if normalize_order_status(o.status) not in policy.valid_order_statuses:
            stats.orders_filtered += 1
            continue
        scenic_id = ticket_to_scenic.get(o.ticket_id)
        if not _is_id(scenic_id):
            stats.orders_unresolved += 1
            continue
        stats.orders_used += 1
        yield Interaction(o.user_id, scenic_id, SourceKind.ORDER, policy.order_weight)


def iter_interactions(
    logs: BehaviorLogs,
    stats: Optional[AggregationStats] = None,
    policy: Optional[CFPolicy] = None,
) -> Iterator[Interaction]:
    policy = policy or DEFAULT_POLICY
    stats = stats if stats is not None else AggregationStats()
    yield from rating_interactions(logs.ratings, stats)
    yield from bookmark_interactions(logs.bookmarks, stats, policy)
    yield from order_interactions(logs.orders, logs.ticket_to_scenic, stats, policy)


def fold_interactions(interactions: Iterable[Interaction]) -> BehaviorMatrix:
    matrix: Dict[int, Dict[int, float]] = defaultdict(dict)
    for it in interactions:
        row = matrix[it.user_id]
        row[it.scenic_id] = row.get(it.scenic_id, 0.0) + it.weight
    return dict(matrix)


def build_behavior_matrix(
    logs: BehaviorLogs, policy: Optional[CFPolicy] = None
) -> Tuple[BehaviorMatrix, AggregationStats]:
    """
    세 가지 로그를 합쳐 user -> (scenic -> weight) 행렬 생성.
    누락/해석 불가 레코드(정수가 아닌 id 포함)는 조용히 건너뛰고 stats 에만 집계된다.
    """
    stats = AggregationStats()
    matrix = fold_interactions(iter_interactions(logs, stats, policy))
    # 가중치 0 인 항목은 "신호 없음"과 같으므로 제거
    matrix = {
        user_id: {sid: w for sid, w in row.items() if w > 0}
        for user_id, row in matrix.items()
    }
    matrix = {user_id: row for user_id, row in matrix.items() if row}
    return matrix, stats


def transpose(matrix: BehaviorMatrix) -> BehaviorMatrix:
    """user -> (item -> w) 를 item -> (user -> w) 로 뒤집는다."""
    item_matrix: Dict[int, Dict[int, float]] = defaultdict(dict)
    for user_id, row in matrix.items():
        for item_id, weight in row.items():
            item_matrix[item_id][user_id] = weight
    return dict(item_matrix)


def popularity_scores(
    logs: BehaviorLogs, policy: Optional[CFPolicy] = None
) -> Dict[int, float]:
    """
    콜드스타트용 전역 인기 점수.
    평점은 4점 이상만, 즐겨찾기 3점, 유효 주문 4점씩 합산.
    """
    policy = policy or DEFAULT_POLICY
    scores: Dict[int, float] = defaultdict(float)
    for it in iter_interactions(logs, policy=policy):
        if it.source is SourceKind.RATING and it.weight < policy.popular_rating_threshold:
            continue
        scores[it.scenic_id] += it.weight
    return {sid: s for sid, s in scores.items() if s > 0}
