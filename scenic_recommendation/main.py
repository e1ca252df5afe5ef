import logging

from .data.memory_loader import InMemoryDataLoader
from .data.mock_data import get_mock_behavior_logs, get_mock_scenic_spots
from .service.pipeline import CollaborativeFilteringRecommender


def demo_user_recommendation(user_id: int = 1, top_n: int = 3):
    loader = InMemoryDataLoader(get_mock_behavior_logs(), get_mock_scenic_spots())
    recommender = CollaborativeFilteringRecommender(loader)

    print(f"=== User {user_id} Recommendations (Hybrid CF) ===")
    spots = {s.id: s for s in loader.get_scenic_spots_by_ids(range(1, 7))}
    for r in recommender.recommend_with_scores(user_id, top_n):
        name = spots[r.scenic_id].name if r.scenic_id in spots else "?"
        print(f"{name} (score={r.score:.4f}, novel={r.novel})")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    demo_user_recommendation(user_id=1)
    # 행동 기록이 없는 사용자 → 인기 경관
    demo_user_recommendation(user_id=99)
