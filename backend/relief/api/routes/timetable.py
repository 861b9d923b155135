from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from relief.api.deps import get_db, read_store
from relief.core.config import get_settings
from relief.schemas.leave import MAX_PERIOD
from relief.schemas.teacher import Teacher
from relief.schemas.timetable import TimetableSlot, TimetableSlotCreate
from relief.services.assignment import rank_candidates
from relief.services.audit import log_activity
from relief.services.inputs import parse_period
from relief.services.roster import add_timetable_slot
from relief.services.store import locked_store

router = APIRouter()


@router.get("/timetable", response_model=list[TimetableSlot])
def list_timetable(db: Session = Depends(get_db)) -> list[TimetableSlot]:
    return read_store(db).timetable


@router.post("/timetable", response_model=TimetableSlot, status_code=status.HTTP_201_CREATED)
def create_timetable_slot(payload: TimetableSlotCreate, db: Session = Depends(get_db)) -> TimetableSlot:
    period = parse_period(payload.period, strict=get_settings().strict_numeric_input)
    with locked_store(db) as store:
        slot = add_timetable_slot(store, payload.class_name, period, payload.teacher_id, payload.subject)
        log_activity(
            db,
            action="timetable.create",
            message=f"Timetable slot added: {slot.class_name} period {slot.period}",
            entity_type="timetable_slot",
            entity_id=slot.id,
            details={"teacher_id": slot.teacher_id, "subject": slot.subject},
        )
    return slot


@router.get("/timetable/substitutes", response_model=list[Teacher])
def substitute_suggestions(
    period: int = Query(..., ge=1, le=MAX_PERIOD),
    subject: str = Query(default=""),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
) -> list[Teacher]:
    store = read_store(db)
    return rank_candidates(period, subject, store.teachers, store.timetable)[:limit]
