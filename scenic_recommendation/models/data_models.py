from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# userId -> (scenicId -> 누적 행동 점수)
BehaviorMatrix = Dict[int, Dict[int, float]]


class SourceKind(str, Enum):
    RATING = "rating"
    BOOKMARK = "bookmark"
    ORDER = "order"


# ------------------------------------------------------
# 원본 로그 레코드 (필드 누락 레코드도 표현 가능하게 Optional)
# ------------------------------------------------------
@dataclass
class Rating:
    user_id: Optional[int]
    scenic_id: Optional[int]
    rating: Optional[float] = None


@dataclass
class Bookmark:
    user_id: Optional[int]
    scenic_id: Optional[int]


@dataclass
class TicketOrder:
    user_id: Optional[int]
    ticket_id: Optional[int]
    status: Optional[Any] = None


@dataclass(frozen=True)
class Interaction:
    """하나의 관측된 행동 신호."""
    user_id: int
    scenic_id: int
    source: SourceKind
    weight: float


@dataclass
class BehaviorLogs:
    ratings: List[Rating] = field(default_factory=list)
    bookmarks: List[Bookmark] = field(default_factory=list)
    orders: List[TicketOrder] = field(default_factory=list)
    ticket_to_scenic: Dict[int, int] = field(default_factory=dict)


@dataclass
class AggregationStats:
    ratings_used: int = 0
    ratings_malformed: int = 0
    ratings_filtered: int = 0
    bookmarks_used: int = 0
    bookmarks_malformed: int = 0
    orders_used: int = 0
    orders_malformed: int = 0
    orders_filtered: int = 0
    orders_unresolved: int = 0

    @property
    def dropped(self) -> int:
        return (
            self.ratings_malformed
            + self.ratings_filtered
            + self.bookmarks_malformed
            + self.orders_malformed
            + self.orders_filtered
            + self.orders_unresolved
        )

    def as_dict(self) -> Dict[str, int]:
        return {
            "ratings_used": self.ratings_used,
            "ratings_malformed": self.ratings_malformed,
            "ratings_filtered": self.ratings_filtered,
            "bookmarks_used": self.bookmarks_used,
            "bookmarks_malformed": self.bookmarks_malformed,
            "orders_used": self.orders_used,
            "orders_malformed": self.orders_malformed,
            "orders_filtered": self.orders_filtered,
            "orders_unresolved": self.orders_unresolved,
        }


@dataclass
class ScenicSpot:
    id: int
    name: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[str] = None
    price: Optional[float] = None
    category_name: Optional[str] = None
    rating: Optional[float] = None
    comment_count: int = 0

    def to_frontend_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "imageUrl": self.image_url,
            "location": self.location,
            "price": self.price,
            "categoryName": self.category_name,
            "rating": self.rating,
            "commentCount": self.comment_count,
        }


@dataclass
class RecommendationResult:
    scenic_id: int
    score: float
    novel: bool = True
    features: Dict[str, float] = field(default_factory=dict)

    def to_frontend_dict(self) -> Dict[str, Any]:
        return {
            "id": self.scenic_id,
            "score": self.score,
            "novel": self.novel,
            "features": self.features,
        }
