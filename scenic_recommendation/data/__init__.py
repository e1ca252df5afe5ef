import os
from typing import Optional

from .base import BehaviorDataLoader
from .memory_loader import InMemoryDataLoader


def create_data_loader(backend: Optional[str] = None) -> BehaviorDataLoader:
    """
    CF_DATA_BACKEND (postgres | mongo | memory) 에 맞는 로더 생성.
    드라이버 import 는 실제로 쓰는 백엔드만.
    """
    backend = (backend or os.getenv("CF_DATA_BACKEND", "postgres")).strip().lower()
    if backend == "postgres":
        from .postgres_loader import PostgresDataLoader
        return PostgresDataLoader()
    if backend == "mongo":
        from .data_loader import MongoDataLoader
        return MongoDataLoader()
    if backend == "memory":
        from .mock_data import get_mock_behavior_logs, get_mock_scenic_spots
        return InMemoryDataLoader(get_mock_behavior_logs(), get_mock_scenic_spots())
    raise ValueError(f"unknown data backend: {backend}")


__all__ = ["BehaviorDataLoader", "InMemoryDataLoader", "create_data_loader"]
