from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from relief.models.relief_assignment import ReliefAssignment
from relief.schemas.leave import ReliefOutcome


def reserved_relief_teachers(db: Session, leave_date: str) -> dict[int, set[str]]:
    """Teachers already covering a relief on ``leave_date``, keyed by period."""
    rows = db.execute(
        select(ReliefAssignment.period, ReliefAssignment.substitute_teacher_id).where(
            ReliefAssignment.leave_date == leave_date,
            ReliefAssignment.substitute_teacher_id.is_not(None),
        )
    ).all()
    reserved: dict[int, set[str]] = defaultdict(set)
    for period, teacher_id in rows:
        reserved[period].add(teacher_id)
    return dict(reserved)


def record_outcomes(db: Session, outcomes: Iterable[ReliefOutcome]) -> list[ReliefAssignment]:
    records = [
        ReliefAssignment(
            leave_request_id=outcome.leave_id,
            leave_date=outcome.date,
            position=position,
            period=outcome.period,
            class_name=outcome.class_name,
            subject=outcome.subject,
            substitute_teacher_id=outcome.teacher_id,
            substitute_teacher_name=outcome.teacher_name,
            reason=outcome.reason,
        )
        for position, outcome in enumerate(outcomes)
    ]
    db.add_all(records)
    return records


def list_reliefs_for_leave(db: Session, leave_id: str) -> list[ReliefAssignment]:
    query = (
        select(ReliefAssignment)
        .where(ReliefAssignment.leave_request_id == leave_id)
        .order_by(ReliefAssignment.position)
    )
    return list(db.execute(query).scalars())
