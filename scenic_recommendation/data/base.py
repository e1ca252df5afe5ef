from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from ..models.data_models import BehaviorLogs, Bookmark, Rating, ScenicSpot, TicketOrder


class BehaviorDataLoader(ABC):
    """
    행동 로그 + 경관(scenic spot) 카탈로그 조회 인터페이스.

    fetch_* 는 필터링 없이 전체 로그를 그대로 돌려준다.
    저장소에 접근할 수 없으면 DataUnavailableError 를 던진다.
    """

    @abstractmethod
    def fetch_all_ratings(self) -> List[Rating]:
        ...

    @abstractmethod
    def fetch_all_bookmarks(self) -> List[Bookmark]:
        ...

    @abstractmethod
    def fetch_all_orders(self) -> List[TicketOrder]:
        ...

    @abstractmethod
    def fetch_ticket_to_scenic_map(self) -> Dict[int, int]:
        ...

    @abstractmethod
    def get_scenic_spots_by_ids(self, scenic_ids: Sequence[int]) -> List[ScenicSpot]:
        ...

    def load_behavior_logs(self) -> BehaviorLogs:
        return BehaviorLogs(
            ratings=self.fetch_all_ratings(),
            bookmarks=self.fetch_all_bookmarks(),
            orders=self.fetch_all_orders(),
            ticket_to_scenic=self.fetch_ticket_to_scenic_map(),
        )

    def close(self) -> None:
        pass
