from abc import ABC, abstractmethod
from typing import List
from .models import HistoryEntry


class IHistoryRepository(ABC):
    """
    Contract for play-history persistence.
    History is append-only; the same path may appear many times.
    """

    @abstractmethod
    def add(self, path: str, title: str) -> HistoryEntry:
        pass

    @abstractmethod
    def recent(self, limit: int) -> List[HistoryEntry]:
        """Newest first."""
        pass
