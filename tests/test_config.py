from decimal import Decimal

import pytest

from scenic_recommendation.config import (
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_PAID,
    CFPolicy,
    normalize_order_status,
)


def test_defaults():
    policy = CFPolicy()
    assert policy.bookmark_weight == 3.0
    assert policy.order_weight == 4.0
    assert policy.valid_order_statuses == {ORDER_STATUS_PAID, ORDER_STATUS_COMPLETED}
    assert (policy.user_based_weight, policy.item_based_weight) == (0.6, 0.4)
    assert policy.min_neighbor_behavior == 3.0
    assert policy.popular_rating_threshold == 4
    assert policy.min_co_occurrence == 2


def test_from_env(monkeypatch):
    monkeypatch.setenv("CF_BOOKMARK_WEIGHT", "2.5")
    monkeypatch.setenv("CF_VALID_ORDER_STATUSES", "paid, 7")
    monkeypatch.setenv("CF_MIN_CO_OCCURRENCE", "3")
    policy = CFPolicy.from_env()

    assert policy.bookmark_weight == 2.5
    assert policy.valid_order_statuses == {1, 7}
    assert policy.min_co_occurrence == 3
    assert policy.order_weight == 4.0


def test_from_env_rejects_unknown_status(monkeypatch):
    monkeypatch.setenv("CF_VALID_ORDER_STATUSES", "shipped")
    with pytest.raises(ValueError):
        CFPolicy.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"bookmark_weight": -1.0},
        {"item_based_weight": -0.1},
        {"min_co_occurrence": 0},
    ],
)
def test_invalid_policy(kwargs):
    with pytest.raises(ValueError):
        CFPolicy(**kwargs)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (1, 1), ("4", 4), ("Paid", 1), ("completed", 4), ("unknown", None), (None, None), (True, None),
        (4.0, 4), (Decimal("1"), 1), (1.9, None), ("1.5", None), (float("nan"), None),
    ],
)
def test_normalize_order_status(raw, expected):
    assert normalize_order_status(raw) == expected
