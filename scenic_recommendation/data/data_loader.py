from __future__ import annotations

import logging
import os
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pymongo import MongoClient
from pymongo.errors import PyMongoError
from sshtunnel import SSHTunnelForwarder

from ..errors import DataUnavailableError
from ..models.data_models import Bookmark, Rating, ScenicSpot, TicketOrder
from .base import BehaviorDataLoader

logger = logging.getLogger(__name__)


# -----------------------------------------
#  MongoDB / SSH 터널 설정
# -----------------------------------------
# MONGO_SSH_HOST 가 비어 있으면 터널 없이 직접 접속
SSH_HOST = os.getenv("MONGO_SSH_HOST")
SSH_PORT = int(os.getenv("MONGO_SSH_PORT", "22"))
SSH_USERNAME = os.getenv("MONGO_SSH_USER", "ubuntu")
SSH_PEM_KEY_PATH = os.getenv("MONGO_SSH_PEM")

MONGODB_HOST = os.getenv("MONGO_HOST", "127.0.0.1")
MONGODB_PORT = int(os.getenv("MONGO_PORT", "27017"))
MONGODB_USERNAME = os.getenv("MONGO_USER")
MONGODB_PASSWORD = os.getenv("MONGO_PASSWORD")
MONGODB_DB_NAME = os.getenv("MONGO_DB", "tourism")
MONGODB_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "30000"))

# 전역 SSH 터널 (싱글톤)
_ssh_tunnel: Optional[SSHTunnelForwarder] = None


def get_ssh_tunnel() -> SSHTunnelForwarder:
    """SSH 터널을 싱글톤으로 가져오거나 생성합니다."""
    import paramiko

    global _ssh_tunnel
    if _ssh_tunnel is None or not _ssh_tunnel.is_active:
        pkey = paramiko.RSAKey.from_private_key_file(str(Path(SSH_PEM_KEY_PATH).expanduser()))
        _ssh_tunnel = SSHTunnelForwarder(
            (SSH_HOST, SSH_PORT),
            ssh_username=SSH_USERNAME,
            ssh_pkey=pkey,
            remote_bind_address=(MONGODB_HOST, MONGODB_PORT),
            local_bind_address=("127.0.0.1", 0),
            allow_agent=False,
            host_pkey_directories=[],
        )
        _ssh_tunnel.start()
    return _ssh_tunnel


def _build_mongo_uri(host: str, port: int) -> str:
    auth_source = os.getenv("MONGO_AUTH_SOURCE", "admin")
    if MONGODB_USERNAME:
        return (
            f"mongodb://{MONGODB_USERNAME}:{MONGODB_PASSWORD}"
            f"@{host}:{port}/?authSource={auth_source}&directConnection=true"
        )
    return f"mongodb://{host}:{port}/?directConnection=true"


class MongoDataLoader(BehaviorDataLoader):
    """
    MongoDB 기반 행동 로그 + 경관 카탈로그 로더.

    collections: comments, scenic_collections, ticket_orders, tickets, scenic_spots
    """

    def __init__(self, client: Optional[MongoClient] = None, db_name: Optional[str] = None):
        if client is None:
            try:
                if SSH_HOST:
                    tunnel = get_ssh_tunnel()
                    uri = _build_mongo_uri("127.0.0.1", tunnel.local_bind_port)
                else:
                    uri = _build_mongo_uri(MONGODB_HOST, MONGODB_PORT)
                client = MongoClient(
                    uri,
                    serverSelectionTimeoutMS=MONGODB_TIMEOUT_MS,
                    connectTimeoutMS=MONGODB_TIMEOUT_MS,
                    socketTimeoutMS=MONGODB_TIMEOUT_MS,
                )
            except Exception as e:
                # paramiko / sshtunnel / pymongo 설정 오류 모두 연결 불가로 취급
                logger.error(f"[MongoDataLoader] 연결 실패: {e}")
                raise DataUnavailableError("connection", str(e)) from e

        self.client = client
        self.db = self.client[db_name or MONGODB_DB_NAME]

        # Collections
        self.col_comments = self.db["comments"]
        self.col_collections = self.db["scenic_collections"]
        self.col_orders = self.db["ticket_orders"]
        self.col_tickets = self.db["tickets"]
        self.col_scenic_spots = self.db["scenic_spots"]

    def _find(self, source: str, collection, query: Optional[Dict[str, Any]] = None,
              projection: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        try:
            return list(collection.find(query or {}, projection))
        except PyMongoError as e:
            logger.error(f"[MongoDataLoader] {source} 조회 실패: {e}")
            raise DataUnavailableError(source, str(e)) from e

    # ------------------------------------------------------
    # 행동 로그
    # ------------------------------------------------------
    def fetch_all_ratings(self) -> List[Rating]:
        docs = self._find("ratings", self.col_comments, projection={"user_id": 1, "scenic_id": 1, "rating": 1})
        return [Rating(d.get("user_id"), d.get("scenic_id"), d.get("rating")) for d in docs]

    def fetch_all_bookmarks(self) -> List[Bookmark]:
        docs = self._find("bookmarks", self.col_collections, projection={"user_id": 1, "scenic_id": 1})
        return [Bookmark(d.get("user_id"), d.get("scenic_id")) for d in docs]

    def fetch_all_orders(self) -> List[TicketOrder]:
        docs = self._find("orders", self.col_orders, projection={"user_id": 1, "ticket_id": 1, "status": 1})
        return [TicketOrder(d.get("user_id"), d.get("ticket_id"), d.get("status")) for d in docs]

    def fetch_ticket_to_scenic_map(self) -> Dict[int, int]:
        docs = self._find("tickets", self.col_tickets, projection={"_id": 1, "scenic_id": 1})
        return {
            d["_id"]: d["scenic_id"]
            for d in docs
            if d.get("_id") is not None and d.get("scenic_id") is not None
        }

    # ------------------------------------------------------
    # 경관 카탈로그
    # ------------------------------------------------------
    def _rating_summary(self, scenic_ids: Iterable[int]) -> Dict[int, Dict[str, float]]:
        docs = self._find(
            "scenic_spots",
            self.col_comments,
            {"scenic_id": {"$in": list(scenic_ids)}},
            {"scenic_id": 1, "rating": 1},
        )
        totals: Dict[int, List[float]] = defaultdict(list)
        counts: Dict[int, int] = defaultdict(int)
        for d in docs:
            sid = d.get("scenic_id")
            counts[sid] += 1
            if d.get("rating") is not None:
                totals[sid].append(float(d["rating"]))
        return {
            sid: {
                "rating": (sum(totals[sid]) / len(totals[sid])) if totals[sid] else None,
                "comment_count": counts[sid],
            }
            for sid in counts
        }

    def get_scenic_spots_by_ids(self, scenic_ids: Sequence[int]) -> List[ScenicSpot]:
        if not scenic_ids:
            return []
        docs = self._find("scenic_spots", self.col_scenic_spots, {"_id": {"$in": list(scenic_ids)}})
        summary = self._rating_summary(scenic_ids)

        spots = []
        for d in docs:
            sid = d["_id"]
            s = summary.get(sid, {})
            spots.append(
                ScenicSpot(
                    id=sid,
                    name=d.get("name"),
                    image_url=d.get("image_url"),
                    location=d.get("location"),
                    price=d.get("price"),
                    category_name=d.get("category_name"),
                    rating=s.get("rating"),
                    comment_count=int(s.get("comment_count", 0)),
                )
            )
        return spots

    def close(self):
        self.client.close()
