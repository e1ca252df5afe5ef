from .recommend import recommend_scenic_ids, recommend_scenic_spots
from .api_interface import get_recommendation_ids, get_user_recommendations

__all__ = [
    "recommend_scenic_ids",
    "recommend_scenic_spots",
    "get_recommendation_ids",
    "get_user_recommendations",
]
