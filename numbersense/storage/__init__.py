from .progress_store import InMemoryProgressStore, JsonProgressStore, PlayerProgress, ProgressStore

__all__ = ["ProgressStore", "PlayerProgress", "InMemoryProgressStore", "JsonProgressStore"]
