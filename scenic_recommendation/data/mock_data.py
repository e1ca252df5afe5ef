from typing import List

from ..models.data_models import BehaviorLogs, Bookmark, Rating, ScenicSpot, TicketOrder


def get_mock_scenic_spots() -> List[ScenicSpot]:
    return [
        ScenicSpot(id=1, name="West Lake", location="Hangzhou", price=0.0, category_name="Lake"),
        ScenicSpot(id=2, name="Huangshan", location="Huangshan", price=190.0, category_name="Mountain"),
        ScenicSpot(id=3, name="Forbidden City", location="Beijing", price=60.0, category_name="Heritage"),
        ScenicSpot(id=4, name="Jiuzhaigou", location="Aba", price=169.0, category_name="Valley"),
        ScenicSpot(id=5, name="The Bund", location="Shanghai", price=0.0, category_name="City"),
        ScenicSpot(id=6, name="Zhangjiajie", location="Zhangjiajie", price=225.0, category_name="Mountain"),
    ]


def get_mock_behavior_logs() -> BehaviorLogs:
    return BehaviorLogs(
        ratings=[
            Rating(1, 1, 5), Rating(1, 2, 4), Rating(1, 3, 2),
            Rating(2, 1, 5), Rating(2, 2, 5), Rating(2, 3, 1), Rating(2, 4, 4),
            Rating(3, 1, 4), Rating(3, 3, 5), Rating(3, 5, 3),
            Rating(4, 2, 4), Rating(4, 4, 5), Rating(4, 6, 4),
        ],
        bookmarks=[
            Bookmark(1, 4), Bookmark(2, 6), Bookmark(3, 5), Bookmark(4, 1),
        ],
        orders=[
            TicketOrder(2, 101, 1), TicketOrder(4, 106, 4),
            TicketOrder(1, 103, 2), TicketOrder(3, 999, 1),
        ],
        ticket_to_scenic={101: 1, 102: 2, 103: 3, 104: 4, 105: 5, 106: 6},
    )
