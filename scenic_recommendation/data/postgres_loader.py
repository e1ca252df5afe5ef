from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Sequence

import psycopg2
from psycopg2.extras import RealDictCursor

from ..errors import DataUnavailableError
from ..models.data_models import Bookmark, Rating, ScenicSpot, TicketOrder
from .base import BehaviorDataLoader

logger = logging.getLogger(__name__)


PG_HOST = os.getenv("PG_HOST", "localhost")
PG_PORT = int(os.getenv("PG_PORT", "5432"))
PG_DBNAME = os.getenv("PG_DBNAME", "tourism")
PG_USER = os.getenv("PG_USER", "postgres")
PG_PASSWORD = os.getenv("PG_PASSWORD", "")
PG_CONNECT_TIMEOUT = int(os.getenv("PG_CONNECT_TIMEOUT", "10"))


RATINGS_QUERY = "SELECT user_id, scenic_id, rating FROM comment"
BOOKMARKS_QUERY = "SELECT user_id, scenic_id FROM scenic_collection"
ORDERS_QUERY = "SELECT user_id, ticket_id, status FROM ticket_order"
TICKETS_QUERY = "SELECT id, scenic_id FROM ticket"
SCENIC_SPOTS_QUERY = """
SELECT s.id, s.name, s.image_url, s.location, s.price,
       c.name AS category_name,
       AVG(cm.rating) AS rating,
       COUNT(cm.id) AS comment_count
FROM scenic_spot s
LEFT JOIN scenic_category c ON s.category_id = c.id
LEFT JOIN comment cm ON cm.scenic_id = s.id
WHERE s.id = ANY(%s)
GROUP BY s.id, s.name, s.image_url, s.location, s.price, c.name
"""


def _to_float(value: Any) -> Optional[float]:
    # NUMERIC 컬럼은 Decimal 로 들어온다
    return float(value) if value is not None else None


class PostgresDataLoader(BehaviorDataLoader):
    """
    PostgreSQL 에서 행동 로그와 경관 정보를 로드.

    - comment(user_id, scenic_id, rating)
    - scenic_collection(user_id, scenic_id)
    - ticket_order(user_id, ticket_id, status)
    - ticket(id, scenic_id)
    - scenic_spot / scenic_category
    """

    def __init__(self, conn=None):
        self._conn = conn if conn is not None else self._connect()

    @staticmethod
    def _connect():
        try:
            conn = psycopg2.connect(
                host=PG_HOST,
                port=PG_PORT,
                dbname=PG_DBNAME,
                user=PG_USER,
                password=PG_PASSWORD,
                connect_timeout=PG_CONNECT_TIMEOUT,
                cursor_factory=RealDictCursor,
            )
        except psycopg2.Error as e:
            logger.error(f"[PostgresDataLoader] 연결 실패: {PG_HOST}:{PG_PORT}/{PG_DBNAME} ({e})")
            raise DataUnavailableError("connection", str(e)) from e
        # 조회 전용: 트랜잭션을 열어 둔 채(idle in transaction) 남기지 않는다
        conn.autocommit = True
        return conn

    def _ensure_connection(self):
        # 서버가 끊은 연결은 다음 호출에서 다시 맺는다
        if self._conn.closed:
            logger.warning("[PostgresDataLoader] 연결이 닫혀 있어 재연결합니다")
            self._conn = self._connect()
        return self._conn

    def _reset_after_error(self):
        if self._conn.closed:
            return
        try:
            self._conn.rollback()
        except psycopg2.Error:
            logger.warning("[PostgresDataLoader] rollback 실패, 연결을 닫습니다", exc_info=True)
            self._conn.close()

    def _fetch(self, source: str, query: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        conn = self._ensure_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(query, params)
                rows = cur.fetchall()
        except psycopg2.Error as e:
            logger.error(f"[PostgresDataLoader] {source} 조회 실패: {e}")
            # 실패한 트랜잭션이 다음 요청까지 남지 않도록 정리
            self._reset_after_error()
            raise DataUnavailableError(source, str(e)) from e
        return list(rows)

    def fetch_all_ratings(self) -> List[Rating]:
        rows = self._fetch("ratings", RATINGS_QUERY)
        return [
            Rating(user_id=row.get("user_id"), scenic_id=row.get("scenic_id"), rating=row.get("rating"))
            for row in rows
        ]

    def fetch_all_bookmarks(self) -> List[Bookmark]:
        rows = self._fetch("bookmarks", BOOKMARKS_QUERY)
        return [Bookmark(user_id=row.get("user_id"), scenic_id=row.get("scenic_id")) for row in rows]

    def fetch_all_orders(self) -> List[TicketOrder]:
        rows = self._fetch("orders", ORDERS_QUERY)
        return [
            TicketOrder(user_id=row.get("user_id"), ticket_id=row.get("ticket_id"), status=row.get("status"))
            for row in rows
        ]

    def fetch_ticket_to_scenic_map(self) -> Dict[int, int]:
        rows = self._fetch("tickets", TICKETS_QUERY)
        mapping: Dict[int, int] = {}
        for row in rows:
            ticket_id = row.get("id")
            scenic_id = row.get("scenic_id")
            if ticket_id is not None and scenic_id is not None:
                mapping[ticket_id] = scenic_id
        return mapping

    def get_scenic_spots_by_ids(self, scenic_ids: Sequence[int]) -> List[ScenicSpot]:
        if not scenic_ids:
            return []
        rows = self._fetch("scenic_spots", SCENIC_SPOTS_QUERY, (list(scenic_ids),))
        return [
            ScenicSpot(
                id=row["id"],
                name=row.get("name"),
                image_url=row.get("image_url"),
                location=row.get("location"),
                price=_to_float(row.get("price")),
                category_name=row.get("category_name"),
                rating=_to_float(row.get("rating")),
                comment_count=int(row.get("comment_count") or 0),
            )
            for row in rows
        ]

    def close(self):
        try:
            self._conn.close()
        except psycopg2.Error:
            logger.warning("[PostgresDataLoader] 연결 종료 중 오류", exc_info=True)
