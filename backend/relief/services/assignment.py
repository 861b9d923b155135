"""Relief candidate selection.

Everything here is a pure query over the teacher and timetable collections; raising a
chosen teacher's workload is left to the caller.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from relief.schemas.teacher import Teacher
from relief.schemas.timetable import TimetableSlot


def occupied_teacher_ids(period: int, timetable_slots: Iterable[TimetableSlot]) -> set[str]:
    return {
        slot.teacher_id
        for slot in timetable_slots
        if slot.period == period and slot.teacher_id
    }


def rank_candidates(
    period: int,
    subject: str,
    teachers: Sequence[Teacher],
    timetable_slots: Iterable[TimetableSlot],
    *,
    busy_teacher_ids: Iterable[str] = (),
) -> list[Teacher]:
    """Return the working set for ``period`` ordered by preference.

    Teachers scheduled in ``period`` (or listed in ``busy_teacher_ids``) are never
    candidates. Subject match narrows the pool only when at least one free teacher
    teaches ``subject``; otherwise every free teacher stays in. The pool is ordered by
    ``workload_today`` with a stable sort, so equal loads keep input order.
    """
    occupied = occupied_teacher_ids(period, timetable_slots) | set(busy_teacher_ids)
    candidates = [teacher for teacher in teachers if teacher.id not in occupied]
    preferred = [teacher for teacher in candidates if teacher.teaches(subject)]
    working_set = preferred or candidates
    return sorted(working_set, key=lambda teacher: teacher.workload_today)


def find_replacement(
    period: int,
    subject: str,
    teachers: Sequence[Teacher],
    timetable_slots: Iterable[TimetableSlot],
    *,
    busy_teacher_ids: Iterable[str] = (),
) -> Teacher | None:
    ranked = rank_candidates(
        period,
        subject,
        teachers,
        timetable_slots,
        busy_teacher_ids=busy_teacher_ids,
    )
    return ranked[0] if ranked else None
