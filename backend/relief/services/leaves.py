from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone

from relief.core.exceptions import InvalidTransitionError
from relief.schemas.leave import (
    NO_ELIGIBLE_TEACHER,
    AssignmentReport,
    LeaveRequest,
    LeaveStatus,
    ReliefOutcome,
)
from relief.schemas.timetable import placeholder_slot
from relief.services.assignment import find_replacement
from relief.services.inputs import validate_periods
from relief.services.store import ReliefStore

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _ensure_pending(request: LeaveRequest, requested: LeaveStatus) -> None:
    if not request.is_pending:
        raise InvalidTransitionError(request.id, request.status.value, requested.value)


def submit_leave(
    store: ReliefStore,
    teacher_id: str,
    date: str,
    periods: Sequence[int],
    reason: str,
) -> LeaveRequest:
    # The requesting teacher is not looked up; leaves may name unknown teachers.
    checked = validate_periods(periods)
    request = LeaveRequest(
        id=str(uuid.uuid4()),
        teacherId=teacher_id,
        date=date,
        periods=checked,
        reason=reason.strip(),
        status=LeaveStatus.pending,
        createdAt=_utc_now_iso(),
    )
    store.leaves.insert(0, request)
    logger.info("Leave %s submitted by teacher %s for %s periods %s", request.id, teacher_id, date, request.periods)
    return request


def approve_leave(
    store: ReliefStore,
    leave_id: str,
    *,
    reserved: Mapping[int, set[str]] | None = None,
    require_known_teacher: bool = False,
) -> AssignmentReport:
    """Approve a pending leave and pick a relief teacher for each of its periods.

    Periods are handled in request order and every pick raises that teacher's workload
    before the next period is considered. ``reserved`` maps period numbers to teachers
    already covering a relief on the leave's date; when given, those teachers and each
    pick made here are treated as busy for that period. A period with no eligible teacher
    is reported, not raised, and the leave is approved regardless.
    """
    request = store.require_leave(leave_id)
    _ensure_pending(request, LeaveStatus.approved)
    if require_known_teacher:
        store.require_teacher(request.teacher_id)

    taken: dict[int, set[str]] | None = None
    if reserved is not None:
        taken = {period: set(teacher_ids) for period, teacher_ids in reserved.items()}

    outcomes: list[ReliefOutcome] = []
    for period in request.periods:
        slot = store.slot_for(request.teacher_id, period) or placeholder_slot(period)
        busy = taken.get(period, set()) if taken is not None else set()
        chosen = find_replacement(
            period,
            slot.subject,
            store.teachers,
            store.timetable,
            busy_teacher_ids=busy,
        )

        if chosen is None:
            outcome = ReliefOutcome(
                leaveId=request.id,
                date=request.date,
                className=slot.class_name,
                period=period,
                subject=slot.subject,
                assigned=False,
                reason=NO_ELIGIBLE_TEACHER,
            )
            logger.warning(outcome.describe())
        else:
            substitute = store.increment_workload(chosen.id)
            if taken is not None:
                taken.setdefault(period, set()).add(substitute.id)
            outcome = ReliefOutcome(
                leaveId=request.id,
                date=request.date,
                className=slot.class_name,
                period=period,
                subject=slot.subject,
                assigned=True,
                teacherId=substitute.id,
                teacherName=substitute.name,
            )
            logger.info(outcome.describe())
        outcomes.append(outcome)

    request.status = LeaveStatus.approved
    request.reviewed_at = _utc_now_iso()
    report = AssignmentReport(leaveId=request.id, status=request.status, outcomes=outcomes)
    logger.info(
        "Leave %s approved: %s of %s period(s) covered",
        request.id,
        report.assigned_count,
        len(outcomes),
    )
    return report


def reject_leave(store: ReliefStore, leave_id: str) -> LeaveRequest:
    request = store.require_leave(leave_id)
    _ensure_pending(request, LeaveStatus.rejected)
    request.status = LeaveStatus.rejected
    request.reviewed_at = _utc_now_iso()
    logger.info("Leave %s rejected", request.id)
    return request
