from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from relief.api.deps import get_db, read_store
from relief.schemas.teacher import Teacher, TeacherCreate, TeacherDeleteOut
from relief.services.audit import log_activity
from relief.services.roster import add_teacher, delete_teacher
from relief.services.store import locked_store

router = APIRouter()


@router.get("/teachers", response_model=list[Teacher])
def list_teachers(db: Session = Depends(get_db)) -> list[Teacher]:
    return read_store(db).teachers


@router.post("/teachers", response_model=Teacher, status_code=status.HTTP_201_CREATED)
def create_teacher(payload: TeacherCreate, db: Session = Depends(get_db)) -> Teacher:
    with locked_store(db) as store:
        teacher = add_teacher(store, payload.name, payload.subjects, payload.contact)
        log_activity(
            db,
            action="teacher.create",
            message=f"Teacher {teacher.name} added",
            entity_type="teacher",
            entity_id=teacher.id,
            details={"subjects": teacher.subjects},
        )
    return teacher


@router.delete("/teachers/{teacher_id}", response_model=TeacherDeleteOut)
def remove_teacher(teacher_id: str, db: Session = Depends(get_db)) -> TeacherDeleteOut:
    with locked_store(db) as store:
        cleared = delete_teacher(store, teacher_id)
        log_activity(
            db,
            action="teacher.delete",
            message=f"Teacher {teacher_id} deleted",
            entity_type="teacher",
            entity_id=teacher_id,
            details={"cleared_slot_count": cleared},
        )
    return TeacherDeleteOut(clearedSlotCount=cleared)
