from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable

from relief.schemas.teacher import Teacher, normalize_subjects
from relief.schemas.timetable import TimetableSlot
from relief.services.store import ReliefStore

logger = logging.getLogger(__name__)


def add_teacher(store: ReliefStore, name: str, subjects: Iterable[str] | str, contact: str = "") -> Teacher:
    teacher = Teacher(
        id=str(uuid.uuid4()),
        name=name.strip(),
        subjects=normalize_subjects(subjects if isinstance(subjects, str) else list(subjects)),
        contact=contact.strip(),
        workloadToday=0,
    )
    # Newest first, matching how the roster is listed and tie-broken.
    store.teachers.insert(0, teacher)
    logger.info("Teacher %s (%s) added", teacher.name, teacher.id)
    return teacher


def delete_teacher(store: ReliefStore, teacher_id: str) -> int:
    """Remove a teacher and clear every timetable slot that pointed at them.

    Returns the number of slots that were cleared.
    """
    teacher = store.require_teacher(teacher_id)
    store.teachers = [item for item in store.teachers if item.id != teacher_id]

    cleared = 0
    for slot in store.timetable:
        if slot.teacher_id == teacher_id:
            slot.teacher_id = None
            cleared += 1
    logger.info("Teacher %s (%s) deleted; %s slot(s) unassigned", teacher.name, teacher_id, cleared)
    return cleared


def add_timetable_slot(
    store: ReliefStore,
    class_name: str,
    period: int,
    teacher_id: str | None,
    subject: str,
) -> TimetableSlot:
    # teacher_id is a weak reference and is stored as given.
    slot = TimetableSlot(
        id=str(uuid.uuid4()),
        className=class_name.strip(),
        period=period,
        teacherId=teacher_id or None,
        subject=subject.strip(),
    )
    store.timetable.insert(0, slot)
    logger.info("Timetable slot %s added: %s period %s (%s)", slot.id, slot.class_name, slot.period, slot.subject)
    return slot
