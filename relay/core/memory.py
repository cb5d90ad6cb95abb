"""Per-sender conversation history.

History lives only as long as the process. The relay talks to a
``HistoryStore`` so a shared backend can replace the in-memory map without
touching the webhook code.
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol


class HistoryStore(Protocol):
    def get(self, sender_id: str) -> List[Any]:
        ...

    def put(self, sender_id: str, history: List[Any]) -> None:
        ...


class InMemoryHistoryStore:
    """Dict-backed store. Not synchronized: concurrent writes are last-write-wins."""

    def __init__(self) -> None:
        self._histories: Dict[str, List[Any]] = {}

    def get(self, sender_id: str) -> List[Any]:
        return list(self._histories.get(sender_id) or [])

    def put(self, sender_id: str, history: List[Any]) -> None:
        self._histories[sender_id] = list(history)

    def clear(self) -> None:
        self._histories.clear()

    def __len__(self) -> int:
        return len(self._histories)
