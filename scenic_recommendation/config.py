from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, FrozenSet, Iterable, Optional

from dotenv import load_dotenv


# -----------------------------------------
#  환경변수 로드 (.env)
# -----------------------------------------
_CURRENT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _CURRENT_DIR.parent
_ENV_PATH = Path(os.getenv("SCENIC_ENV_FILE", str(_PROJECT_ROOT / ".env")))
load_dotenv(_ENV_PATH)


# 행동 가중치
BOOKMARK_WEIGHT = 3.0
ORDER_WEIGHT = 4.0

# ticket_order.status 코드
ORDER_STATUS_PAID = 1
ORDER_STATUS_COMPLETED = 4
ORDER_STATUS_NAMES = {
    "paid": ORDER_STATUS_PAID,
    "completed": ORDER_STATUS_COMPLETED,
}

# 하이브리드 융합 가중치 (user-based + item-based)
USER_BASED_WEIGHT = 0.6
ITEM_BASED_WEIGHT = 0.4

# 유사 사용자의 행동 중 이 값 이상만 후보로 사용 (북마크 이상)
MIN_NEIGHBOR_BEHAVIOR = 3.0
# 인기 랭킹에서 평점은 4점 이상만 반영
POPULAR_RATING_THRESHOLD = 4
# 공통 아이템/사용자가 이 개수 미만이면 유사도 0
MIN_CO_OCCURRENCE = 2

DEFAULT_TOP_N = 10


def normalize_order_status(status: Any) -> Optional[int]:
    """
    주문 상태값을 정수 코드로 변환.
    "paid" / "completed" 같은 문자열도 허용, 해석 불가면 None.
    """
    if status is None or isinstance(status, bool):
        return None
    if isinstance(status, int):
        return status
    if isinstance(status, str):
        key = status.strip().lower()
        if key in ORDER_STATUS_NAMES:
            return ORDER_STATUS_NAMES[key]
        try:
            value = float(key)
        except ValueError:
            return None
    else:
        try:
            value = float(status)
        except (TypeError, ValueError):
            return None
    # 1.9 같은 비정수 상태값은 잘라내지 않고 해석 불가로 처리
    if not value.is_integer():
        return None
    return int(value)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_statuses(name: str, default: Iterable[int]) -> FrozenSet[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return frozenset(default)
    codes = set()
    for part in raw.split(","):
        if not part.strip():
            continue
        code = normalize_order_status(part)
        if code is None:
            raise ValueError(f"{name}: 알 수 없는 주문 상태값 {part!r}")
        codes.add(code)
    return frozenset(codes)


@dataclass(frozen=True)
class CFPolicy:
    """
    협업 필터링 정책 상수 묶음.

    모든 값은 비즈니스 정책이므로 환경변수(CF_*)로 덮어쓸 수 있다.
    """
    bookmark_weight: float = BOOKMARK_WEIGHT
    order_weight: float = ORDER_WEIGHT
    valid_order_statuses: FrozenSet[int] = frozenset({ORDER_STATUS_PAID, ORDER_STATUS_COMPLETED})
    user_based_weight: float = USER_BASED_WEIGHT
    item_based_weight: float = ITEM_BASED_WEIGHT
    min_neighbor_behavior: float = MIN_NEIGHBOR_BEHAVIOR
    popular_rating_threshold: float = POPULAR_RATING_THRESHOLD
    min_co_occurrence: int = MIN_CO_OCCURRENCE

    def __post_init__(self) -> None:
        for name in ("bookmark_weight", "order_weight", "user_based_weight", "item_based_weight"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.min_co_occurrence < 1:
            raise ValueError(f"min_co_occurrence must be >= 1, got {self.min_co_occurrence}")
        # set/list 로 넘겨도 frozenset 으로 고정
        object.__setattr__(self, "valid_order_statuses", frozenset(self.valid_order_statuses))

    @classmethod
    def from_env(cls) -> "CFPolicy":
        return cls(
            bookmark_weight=_env_float("CF_BOOKMARK_WEIGHT", BOOKMARK_WEIGHT),
            order_weight=_env_float("CF_ORDER_WEIGHT", ORDER_WEIGHT),
            valid_order_statuses=_env_statuses(
                "CF_VALID_ORDER_STATUSES", (ORDER_STATUS_PAID, ORDER_STATUS_COMPLETED)
            ),
            user_based_weight=_env_float("CF_USER_BASED_WEIGHT", USER_BASED_WEIGHT),
            item_based_weight=_env_float("CF_ITEM_BASED_WEIGHT", ITEM_BASED_WEIGHT),
            min_neighbor_behavior=_env_float("CF_MIN_NEIGHBOR_BEHAVIOR", MIN_NEIGHBOR_BEHAVIOR),
            popular_rating_threshold=_env_float("CF_POPULAR_RATING_THRESHOLD", POPULAR_RATING_THRESHOLD),
            min_co_occurrence=_env_int("CF_MIN_CO_OCCURRENCE", MIN_CO_OCCURRENCE),
        )


DEFAULT_POLICY = CFPolicy()
