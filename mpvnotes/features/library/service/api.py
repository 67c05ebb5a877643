import logging
from typing import List, Optional

from mpvnotes.core.config.settings import settings
from mpvnotes.core.database.connection import init_db
from ..domain.interfaces import IHistoryRepository
from ..domain.models import HistoryEntry

logger = logging.getLogger(__name__)


class LibraryService:
    """
    Facade for play history and favorites.
    """

    def __init__(self, repo: Optional[IHistoryRepository] = None):
        if repo is None:
            from ..data.repository import SqlHistoryRepo
            init_db()
            repo = SqlHistoryRepo()
        self.repo = repo

    def record_play(self, path: str, title: str = "") -> HistoryEntry:
        entry = self.repo.add(path, title)
        logger.debug(f"History += {path}")
        return entry

    def history(self, limit: int = 50) -> List[HistoryEntry]:
        return self.repo.recent(limit)

    def favorites(self) -> List[str]:
        return settings.FAVORITES

    def candidates(self, limit: int = 50) -> List[str]:
        """Favorites first, then history; each path offered once."""
        seen = set()
        result = []
        for path in self.favorites() + [entry.path for entry in self.history(limit)]:
            if path not in seen:
                seen.add(path)
                result.append(path)
        return result
