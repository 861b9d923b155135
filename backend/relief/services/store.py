from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from relief.core.exceptions import NotFoundError
from relief.schemas.leave import LeaveRequest
from relief.schemas.teacher import Teacher
from relief.schemas.timetable import TimetableSlot
from relief.services.repository import LEAVES, TEACHERS, TIMETABLE, CollectionRepository

logger = logging.getLogger(__name__)

# Serializes every load -> mutate -> persist sequence, so one approval's occupancy
# scan, selections and workload increments are never interleaved with another write.
store_lock = threading.RLock()


def _dump(record) -> dict:
    return record.model_dump(mode="json", by_alias=True)


@dataclass
class ReliefStore:
    teachers: list[Teacher] = field(default_factory=list)
    timetable: list[TimetableSlot] = field(default_factory=list)
    leaves: list[LeaveRequest] = field(default_factory=list)

    @classmethod
    def load(cls, repository: CollectionRepository) -> "ReliefStore":
        return cls(
            teachers=[Teacher.model_validate(item) for item in repository.load_collection(TEACHERS)],
            timetable=[TimetableSlot.model_validate(item) for item in repository.load_collection(TIMETABLE)],
            leaves=[LeaveRequest.model_validate(item) for item in repository.load_collection(LEAVES)],
        )

    def persist(self, repository: CollectionRepository) -> None:
        repository.save_collection(TEACHERS, [_dump(item) for item in self.teachers])
        repository.save_collection(TIMETABLE, [_dump(item) for item in self.timetable])
        repository.save_collection(LEAVES, [_dump(item) for item in self.leaves])

    @property
    def teachers_by_id(self) -> dict[str, Teacher]:
        return {item.id: item for item in self.teachers}

    def get_teacher(self, teacher_id: str | None) -> Teacher | None:
        if teacher_id is None:
            return None
        return self.teachers_by_id.get(teacher_id)

    def require_teacher(self, teacher_id: str) -> Teacher:
        teacher = self.get_teacher(teacher_id)
        if teacher is None:
            raise NotFoundError("Teacher", teacher_id)
        return teacher

    def require_leave(self, leave_id: str) -> LeaveRequest:
        for item in self.leaves:
            if item.id == leave_id:
                return item
        raise NotFoundError("Leave request", leave_id)

    def slot_for(self, teacher_id: str, period: int) -> TimetableSlot | None:
        for slot in self.timetable:
            if slot.teacher_id == teacher_id and slot.period == period:
                return slot
        return None

    def increment_workload(self, teacher_id: str) -> Teacher:
        """The only place a teacher's relief workload changes."""
        teacher = self.require_teacher(teacher_id)
        teacher.workload_today += 1
        return teacher


@contextmanager
def locked_store(db: Session) -> Iterator[ReliefStore]:
    """Load the store under ``store_lock``, yield it for mutation, then persist and commit.

    Nothing is written when the body or the write itself raises; the session is rolled
    back instead.
    """
    repository = CollectionRepository(db)
    with store_lock:
        store = ReliefStore.load(repository)
        try:
            yield store
            store.persist(repository)
            repository.commit()
        except Exception:
            db.rollback()
            raise
