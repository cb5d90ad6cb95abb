from relay.core.memory import HistoryStore, InMemoryHistoryStore

__all__ = ["HistoryStore", "InMemoryHistoryStore"]
