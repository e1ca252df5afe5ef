from .pipeline import CollaborativeFilteringRecommender

__all__ = ["CollaborativeFilteringRecommender"]
