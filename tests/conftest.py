import pytest

from scenic_recommendation.data.memory_loader import InMemoryDataLoader
from scenic_recommendation.models.data_models import (
    BehaviorLogs,
    Bookmark,
    Rating,
    ScenicSpot,
    TicketOrder,
)


@pytest.fixture
def similar_users_logs() -> BehaviorLogs:
    """
    user 1 과 user 2 는 경관 10, 11 에서 완전히 같은 패턴 (유사도 1.0).
    user 3 은 공통 경관이 하나뿐이라 누구와도 유사도 0.
    """
    return BehaviorLogs(
        ratings=[
            Rating(1, 10, 5), Rating(1, 11, 1), Rating(1, 12, 3),
            Rating(2, 10, 5), Rating(2, 11, 1), Rating(2, 13, 4), Rating(2, 14, 2),
            Rating(3, 10, 1), Rating(3, 15, 5),
        ],
    )


@pytest.fixture
def popularity_logs() -> BehaviorLogs:
    return BehaviorLogs(
        ratings=[Rating(1, 10, 5), Rating(2, 10, 4), Rating(1, 11, 3), Rating(2, 12, 5)],
        bookmarks=[Bookmark(3, 11), Bookmark(3, 13)],
        orders=[TicketOrder(1, 100, 1), TicketOrder(2, 101, 0)],
        ticket_to_scenic={100: 12, 101: 13},
    )


@pytest.fixture
def spots():
    return [
        ScenicSpot(id=10, name="West Lake"),
        ScenicSpot(id=11, name="Huangshan"),
        ScenicSpot(id=12, name="Forbidden City"),
        ScenicSpot(id=13, name="Jiuzhaigou"),
    ]


@pytest.fixture
def memory_loader(similar_users_logs, spots):
    return InMemoryDataLoader(similar_users_logs, spots)
