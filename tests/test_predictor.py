import pytest

from scenic_recommendation.cf.aggregator import build_behavior_matrix, transpose
from scenic_recommendation.cf.predictor import (
    find_similar_items,
    find_similar_users,
    item_based_scores,
    user_based_scores,
)
from scenic_recommendation.config import CFPolicy


@pytest.fixture
def matrix(similar_users_logs):
    matrix, _ = build_behavior_matrix(similar_users_logs)
    return matrix


def test_find_similar_users_skips_self_and_zero(matrix):
    assert find_similar_users(1, matrix) == {2: 1.0}


def test_user_based_keeps_only_strong_behaviors(matrix):
    # user 2 의 행동 중 3 이상만: 10 (5.0), 13 (4.0)
    assert user_based_scores(1, matrix) == {10: 5.0, 13: 4.0}


def test_user_based_threshold_is_policy(matrix):
    scores = user_based_scores(1, matrix, CFPolicy(min_neighbor_behavior=1.0))
    assert scores == {10: 5.0, 11: 1.0, 13: 4.0, 14: 2.0}


def test_user_based_accumulates_over_neighbors():
    # 두 이웃 모두 10, 11 에서 user 1 과 같은 방향 (유사도 1.0)
    matrix = {
        1: {10: 1.0, 11: 3.0},
        2: {10: 1.0, 11: 5.0, 20: 3.0},
        3: {10: 2.0, 11: 6.0, 20: 4.0},
    }
    assert find_similar_users(1, matrix) == {2: 1.0, 3: 1.0}
    scores = user_based_scores(1, matrix)
    assert scores[20] == pytest.approx(3.0 + 4.0)
    assert scores[11] == pytest.approx(5.0 + 6.0)
    assert 10 not in scores


def test_find_similar_items(matrix):
    item_matrix = transpose(matrix)
    similar = find_similar_items(10, item_matrix)
    assert set(similar) == {11}
    assert similar[11] == pytest.approx(1.0)


def test_item_based_uses_target_users_own_weight(matrix):
    scores = item_based_scores(1, matrix)
    # 10 (내 점수 5) → 유사 11, 11 (내 점수 1) → 유사 10
    assert scores == pytest.approx({11: 5.0, 10: 1.0})


def test_item_based_accepts_precomputed_transpose(matrix):
    assert item_based_scores(1, matrix, item_matrix=transpose(matrix)) == pytest.approx(
        item_based_scores(1, matrix)
    )


def test_unknown_user_has_no_scores(matrix):
    assert user_based_scores(99, matrix) == {}
    assert item_based_scores(99, matrix) == {}
    assert find_similar_users(99, matrix) == {}
