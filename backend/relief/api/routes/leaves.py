from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from relief.api.deps import get_db, read_store
from relief.core.config import get_settings
from relief.schemas.leave import (
    AssignmentReport,
    LeaveRequest,
    LeaveRequestCreate,
    LeaveStatus,
    ReliefAssignmentOut,
)
from relief.services.audit import log_activity
from relief.services.inputs import parse_periods
from relief.services.leaves import approve_leave, reject_leave, submit_leave
from relief.services.reliefs import list_reliefs_for_leave, record_outcomes, reserved_relief_teachers
from relief.services.store import locked_store

router = APIRouter()


@router.get("/leaves", response_model=list[LeaveRequest])
def list_leave_requests(
    leave_status: LeaveStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
) -> list[LeaveRequest]:
    leaves = read_store(db).leaves
    if leave_status is not None:
        leaves = [item for item in leaves if item.status == leave_status]
    return leaves


@router.post("/leaves", response_model=LeaveRequest, status_code=status.HTTP_201_CREATED)
def create_leave_request(payload: LeaveRequestCreate, db: Session = Depends(get_db)) -> LeaveRequest:
    periods = parse_periods(payload.periods, strict=get_settings().strict_numeric_input)
    with locked_store(db) as store:
        request = submit_leave(store, payload.teacher_id, payload.date.strip(), periods, payload.reason)
        log_activity(
            db,
            action="leave.submit",
            message=f"Teacher {request.teacher_id} requested leave for {request.date}",
            entity_type="leave_request",
            entity_id=request.id,
            details={"periods": request.periods},
        )
    return request


@router.post("/leaves/{leave_id}/approve", response_model=AssignmentReport)
def approve_leave_request(leave_id: str, db: Session = Depends(get_db)) -> AssignmentReport:
    settings = get_settings()
    with locked_store(db) as store:
        reserved = None
        if settings.relief_day_scoped_occupancy:
            reserved = reserved_relief_teachers(db, store.require_leave(leave_id).date)

        report = approve_leave(
            store,
            leave_id,
            reserved=reserved,
            require_known_teacher=settings.require_known_teacher,
        )
        record_outcomes(db, report.outcomes)
        for outcome in report.outcomes:
            log_activity(
                db,
                action="relief.assign" if outcome.assigned else "relief.unassigned",
                message=outcome.describe(),
                entity_type="leave_request",
                entity_id=leave_id,
                details=outcome.model_dump(mode="json", by_alias=True),
            )
        log_activity(
            db,
            action="leave.approve",
            message=f"Leave request {leave_id} approved",
            entity_type="leave_request",
            entity_id=leave_id,
            details={
                "assigned_count": report.assigned_count,
                "unassigned_count": report.unassigned_count,
            },
        )
    return report


@router.post("/leaves/{leave_id}/reject", response_model=LeaveRequest)
def reject_leave_request(leave_id: str, db: Session = Depends(get_db)) -> LeaveRequest:
    with locked_store(db) as store:
        request = reject_leave(store, leave_id)
        log_activity(
            db,
            action="leave.reject",
            message=f"Leave request {leave_id} rejected",
            entity_type="leave_request",
            entity_id=leave_id,
        )
    return request


@router.get("/leaves/{leave_id}/reliefs", response_model=list[ReliefAssignmentOut])
def list_leave_reliefs(leave_id: str, db: Session = Depends(get_db)) -> list[ReliefAssignmentOut]:
    read_store(db).require_leave(leave_id)
    return list_reliefs_for_leave(db, leave_id)
