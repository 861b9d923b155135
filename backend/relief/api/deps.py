from collections.abc import Generator

from sqlalchemy.orm import Session

from relief.db.session import SessionLocal
from relief.services.repository import CollectionRepository
from relief.services.store import ReliefStore


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def read_store(db: Session) -> ReliefStore:
    """Snapshot of the collections for read-only endpoints."""
    return ReliefStore.load(CollectionRepository(db))
