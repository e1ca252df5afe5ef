from .data_models import (
    AggregationStats,
    BehaviorLogs,
    BehaviorMatrix,
    Bookmark,
    Interaction,
    Rating,
    RecommendationResult,
    ScenicSpot,
    SourceKind,
    TicketOrder,
)

__all__ = [
    "AggregationStats",
    "BehaviorLogs",
    "BehaviorMatrix",
    "Bookmark",
    "Interaction",
    "Rating",
    "RecommendationResult",
    "ScenicSpot",
    "SourceKind",
    "TicketOrder",
]
