from typing import List
from mpvnotes.core.database.connection import SessionLocal
from .sql_models import PlayHistoryModel
from ..domain.interfaces import IHistoryRepository
from ..domain.models import HistoryEntry


def _to_entry(row: PlayHistoryModel) -> HistoryEntry:
    return HistoryEntry(path=row.path, title=row.title, played_at=row.played_at)


class SqlHistoryRepo(IHistoryRepository):
    def add(self, path: str, title: str) -> HistoryEntry:
        with SessionLocal() as db:
            try:
                row = PlayHistoryModel(path=path, title=title or "")
                db.add(row)
                db.commit()
                db.refresh(row)
                return _to_entry(row)
            except Exception:
                db.rollback()
                raise

    def recent(self, limit: int) -> List[HistoryEntry]:
        with SessionLocal() as db:
            rows = (
                db.query(PlayHistoryModel)
                # id breaks ties between plays within the same clock tick
                .order_by(PlayHistoryModel.played_at.desc(), PlayHistoryModel.id.desc())
                .limit(limit)
                .all()
            )
            return [_to_entry(row) for row in rows]
