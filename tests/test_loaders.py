from decimal import Decimal

import psycopg2
import psycopg2.errors
import pytest
from pymongo.errors import ServerSelectionTimeoutError

from scenic_recommendation.data import InMemoryDataLoader, create_data_loader
from scenic_recommendation.data.data_loader import MongoDataLoader
from scenic_recommendation.data.postgres_loader import (
    BOOKMARKS_QUERY,
    ORDERS_QUERY,
    RATINGS_QUERY,
    SCENIC_SPOTS_QUERY,
    TICKETS_QUERY,
    PostgresDataLoader,
)
from scenic_recommendation.errors import DataUnavailableError
from scenic_recommendation.models.data_models import Bookmark, Rating, TicketOrder


# ------------------------------------------------------
# PostgreSQL fake
# ------------------------------------------------------
class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query, params=None):
        conn = self.conn
        if conn.aborted:
            raise psycopg2.errors.InFailedSqlTransaction(
                "current transaction is aborted, commands ignored until end of transaction block"
            )
        if conn.fail_times > 0:
            conn.fail_times -= 1
            # autocommit 이 아니면 실패 후 트랜잭션이 abort 상태로 남는다
            conn.aborted = not conn.autocommit
            raise psycopg2.OperationalError("server closed the connection unexpectedly")
        self._rows = conn.tables[query]
        self.params = params

    def fetchall(self):
        return self._rows


class FakeConnection:
    def __init__(self, tables, fail=False, fail_times=0):
        self.tables = tables
        self.fail_times = 10 ** 6 if fail else fail_times
        self.autocommit = False
        self.aborted = False
        self.rollbacks = 0
        self.closed = 0

    def cursor(self):
        return FakeCursor(self)

    def rollback(self):
        self.aborted = False
        self.rollbacks += 1

    def close(self):
        self.closed = 1


PG_TABLES = {
    RATINGS_QUERY: [
        {"user_id": 1, "scenic_id": 10, "rating": 5},
        {"user_id": 2, "scenic_id": 10, "rating": None},
    ],
    BOOKMARKS_QUERY: [{"user_id": 1, "scenic_id": 11}],
    ORDERS_QUERY: [{"user_id": 1, "ticket_id": 100, "status": 4}],
    TICKETS_QUERY: [{"id": 100, "scenic_id": 12}, {"id": 101, "scenic_id": None}],
    SCENIC_SPOTS_QUERY: [
        {
            "id": 10, "name": "West Lake", "image_url": None, "location": "Hangzhou",
            "price": Decimal("0.00"), "category_name": "Lake",
            "rating": Decimal("4.5000"), "comment_count": 2,
        },
    ],
}


def test_postgres_loader_reads_logs():
    loader = PostgresDataLoader(conn=FakeConnection(PG_TABLES))
    logs = loader.load_behavior_logs()

    assert logs.ratings == [Rating(1, 10, 5), Rating(2, 10, None)]
    assert logs.bookmarks == [Bookmark(1, 11)]
    assert logs.orders == [TicketOrder(1, 100, 4)]
    assert logs.ticket_to_scenic == {100: 12}


def test_postgres_loader_scenic_spots():
    loader = PostgresDataLoader(conn=FakeConnection(PG_TABLES))
    spots = loader.get_scenic_spots_by_ids([10])

    assert len(spots) == 1
    assert spots[0].price == 0.0
    assert spots[0].rating == 4.5
    assert spots[0].comment_count == 2
    assert loader.get_scenic_spots_by_ids([]) == []


def test_postgres_error_is_data_unavailable():
    loader = PostgresDataLoader(conn=FakeConnection(PG_TABLES, fail=True))
    with pytest.raises(DataUnavailableError) as exc_info:
        loader.fetch_all_orders()

    assert exc_info.value.source == "orders"
    assert isinstance(exc_info.value.__cause__, psycopg2.OperationalError)


def test_postgres_recovers_after_failed_query():
    conn = FakeConnection(PG_TABLES, fail_times=1)
    loader = PostgresDataLoader(conn=conn)

    with pytest.raises(DataUnavailableError):
        loader.fetch_all_ratings()
    assert conn.rollbacks == 1

    # 같은 (싱글톤) 로더의 다음 요청은 정상 조회
    assert loader.fetch_all_ratings() == [Rating(1, 10, 5), Rating(2, 10, None)]


def test_postgres_reconnects_when_connection_closed(monkeypatch):
    dropped = FakeConnection(PG_TABLES)
    dropped.close()
    fresh = FakeConnection(PG_TABLES)
    monkeypatch.setattr(PostgresDataLoader, "_connect", staticmethod(lambda: fresh))

    loader = PostgresDataLoader(conn=dropped)
    assert loader.fetch_all_bookmarks() == [Bookmark(1, 11)]
    assert loader._conn is fresh


def test_postgres_connect_enables_autocommit(monkeypatch):
    conn = FakeConnection(PG_TABLES)
    monkeypatch.setattr(psycopg2, "connect", lambda **kwargs: conn)

    PostgresDataLoader()
    assert conn.autocommit is True


def test_postgres_close():
    conn = FakeConnection(PG_TABLES)
    PostgresDataLoader(conn=conn).close()
    assert conn.closed


# ------------------------------------------------------
# MongoDB fake
# ------------------------------------------------------
def _matches(doc, query):
    for key, cond in query.items():
        if isinstance(cond, dict) and "$in" in cond:
            if doc.get(key) not in cond["$in"]:
                return False
        elif doc.get(key) != cond:
            return False
    return True


class FakeCollection:
    def __init__(self, docs, fail=False):
        self.docs = docs
        self.fail = fail

    def find(self, query=None, projection=None):
        if self.fail:
            raise ServerSelectionTimeoutError("No servers found yet")
        return iter([d for d in self.docs if _matches(d, query or {})])


class FakeDatabase(dict):
    def __missing__(self, name):
        return FakeCollection([])


class FakeMongoClient:
    def __init__(self, collections):
        self.db = FakeDatabase(collections)
        self.closed = False

    def __getitem__(self, name):
        return self.db

    def close(self):
        self.closed = True


def _mongo_client(fail_orders=False):
    return FakeMongoClient({
        "comments": FakeCollection([
            {"user_id": 1, "scenic_id": 10, "rating": 5},
            {"user_id": 2, "scenic_id": 10, "rating": 4},
            {"user_id": 2, "scenic_id": 11},
        ]),
        "scenic_collections": FakeCollection([{"user_id": 1, "scenic_id": 11}]),
        "ticket_orders": FakeCollection([{"user_id": 1, "ticket_id": 100, "status": "paid"}], fail=fail_orders),
        "tickets": FakeCollection([{"_id": 100, "scenic_id": 12}, {"_id": 101}]),
        "scenic_spots": FakeCollection([
            {"_id": 10, "name": "West Lake", "category_name": "Lake"},
            {"_id": 11, "name": "Huangshan"},
        ]),
    })


def test_mongo_loader_reads_logs():
    loader = MongoDataLoader(client=_mongo_client())
    logs = loader.load_behavior_logs()

    assert logs.ratings == [Rating(1, 10, 5), Rating(2, 10, 4), Rating(2, 11, None)]
    assert logs.bookmarks == [Bookmark(1, 11)]
    assert logs.orders == [TicketOrder(1, 100, "paid")]
    assert logs.ticket_to_scenic == {100: 12}


def test_mongo_loader_scenic_spots_with_rating_summary():
    loader = MongoDataLoader(client=_mongo_client())
    spots = {s.id: s for s in loader.get_scenic_spots_by_ids([10, 11, 99])}

    assert set(spots) == {10, 11}
    assert spots[10].rating == 4.5
    assert spots[10].comment_count == 2
    assert spots[11].rating is None
    assert spots[11].comment_count == 1


def test_mongo_error_is_data_unavailable():
    loader = MongoDataLoader(client=_mongo_client(fail_orders=True))
    with pytest.raises(DataUnavailableError) as exc_info:
        loader.load_behavior_logs()
    assert exc_info.value.source == "orders"


# ------------------------------------------------------
# backend 선택
# ------------------------------------------------------
def test_create_memory_loader():
    loader = create_data_loader("memory")
    assert isinstance(loader, InMemoryDataLoader)
    assert loader.fetch_all_ratings()


def test_create_loader_from_env(monkeypatch):
    monkeypatch.setenv("CF_DATA_BACKEND", "memory")
    assert isinstance(create_data_loader(), InMemoryDataLoader)


def test_unknown_backend():
    with pytest.raises(ValueError):
        create_data_loader("redis")
