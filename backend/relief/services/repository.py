from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from relief.core.exceptions import StorageError
from relief.models.stored_collection import StoredCollection

logger = logging.getLogger(__name__)

TEACHERS = "teachers"
TIMETABLE = "timetable"
LEAVES = "leaves"
COLLECTION_NAMES = (TEACHERS, TIMETABLE, LEAVES)


class CollectionRepository:
    """Get-all / replace-all access to the named record collections.

    Each collection is one ``stored_collections`` row whose payload is the JSON list of
    records. Writes are staged on the session and only become durable on ``commit``.
    """

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _check_name(name: str) -> None:
        if name not in COLLECTION_NAMES:
            raise ValueError(f"Unknown collection {name!r}; expected one of {', '.join(COLLECTION_NAMES)}")

    def load_collection(self, name: str) -> list[dict]:
        self._check_name(name)
        try:
            record = self.db.get(StoredCollection, name)
        except SQLAlchemyError as exc:
            logger.error("Unable to load collection %s", name, exc_info=True)
            raise StorageError(f"Unable to load collection {name}", details={"collection": name}) from exc
        if record is None:
            return []
        return [dict(item) for item in record.payload or []]

    def save_collection(self, name: str, records: list[dict]) -> None:
        self._check_name(name)
        try:
            record = self.db.get(StoredCollection, name)
            if record is None:
                self.db.add(StoredCollection(name=name, payload=list(records)))
            else:
                record.payload = list(records)
            self.db.flush()
        except (SQLAlchemyError, OverflowError) as exc:
            self.db.rollback()
            logger.error("Unable to save collection %s", name, exc_info=True)
            raise StorageError(f"Unable to save collection {name}", details={"collection": name}) from exc

    def commit(self) -> None:
        try:
            self.db.commit()
        except (SQLAlchemyError, OverflowError) as exc:
            self.db.rollback()
            logger.error("Commit failed; changes rolled back", exc_info=True)
            raise StorageError("Unable to persist changes") from exc
