from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from ..models.data_models import BehaviorLogs, Bookmark, Rating, ScenicSpot, TicketOrder
from .base import BehaviorDataLoader


class InMemoryDataLoader(BehaviorDataLoader):
    """고정된 리스트를 그대로 돌려주는 로더 (테스트 / 데모용)."""

    def __init__(self, logs: Optional[BehaviorLogs] = None, spots: Iterable[ScenicSpot] = ()):
        self.logs = logs or BehaviorLogs()
        self.spots: Dict[int, ScenicSpot] = {s.id: s for s in spots}

    def fetch_all_ratings(self) -> List[Rating]:
        return list(self.logs.ratings)

    def fetch_all_bookmarks(self) -> List[Bookmark]:
        return list(self.logs.bookmarks)

    def fetch_all_orders(self) -> List[TicketOrder]:
        return list(self.logs.orders)

    def fetch_ticket_to_scenic_map(self) -> Dict[int, int]:
        return dict(self.logs.ticket_to_scenic)

    def get_scenic_spots_by_ids(self, scenic_ids: Sequence[int]) -> List[ScenicSpot]:
        return [self.spots[sid] for sid in scenic_ids if sid in self.spots]
