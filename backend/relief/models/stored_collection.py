from datetime import datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from relief.db.base import Base


class StoredCollection(Base):
    """One named collection of plain records kept as a single JSON document."""

    __tablename__ = "stored_collections"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    payload: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
