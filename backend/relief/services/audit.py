from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from relief.models.activity_log import ActivityLog


def log_activity(
    db: Session,
    *,
    action: str,
    message: str,
    entity_type: str | None = None,
    entity_id: str | None = None,
    details: dict | None = None,
) -> None:
    record = ActivityLog(
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        message=message,
        details=details or {},
    )
    db.add(record)


def recent_activity(db: Session, *, limit: int = 500) -> list[ActivityLog]:
    query = select(ActivityLog).order_by(ActivityLog.created_at.desc()).limit(limit)
    return list(db.execute(query).scalars())
