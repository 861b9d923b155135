import pytest

from relief.core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from relief.schemas.leave import NO_ELIGIBLE_TEACHER, LeaveStatus
from relief.services.leaves import approve_leave, reject_leave, submit_leave
from relief.services.store import ReliefStore

from factories import slot, teacher


def workloads(store):
    return {item.id: item.workload_today for item in store.teachers}


def test_submit_creates_pending_request_at_front(school):
    first = submit_leave(school, "A", "2026-10-20", [3], "Medical")
    second = submit_leave(school, "C", "2026-10-21", [1, 2], " Training ")

    assert first.status == LeaveStatus.pending
    assert first.reviewed_at is None
    assert first.created_at
    assert first.id != second.id
    assert second.reason == "Training"
    assert [item.id for item in school.leaves] == [second.id, first.id]


def test_submit_accepts_unknown_teacher(school):
    request = submit_leave(school, "ghost", "2026-10-20", [1], "")
    assert request.teacher_id == "ghost"


@pytest.mark.parametrize("periods", [[], [0], [3, -1], [100]])
def test_submit_rejects_missing_or_out_of_range_periods(school, periods):
    with pytest.raises(ValidationError) as excinfo:
        submit_leave(school, "A", "2026-10-20", periods, "")
    assert excinfo.value.status_code == 422
    assert school.leaves == []


def test_approval_assigns_subject_teacher_and_raises_workload(school):
    request = submit_leave(school, "A", "2026-10-20", [3], "Medical")

    report = approve_leave(school, request.id)

    assert report.status == LeaveStatus.approved
    assert request.status == LeaveStatus.approved
    assert request.reviewed_at is not None
    assert len(report.outcomes) == 1
    outcome = report.outcomes[0]
    assert outcome.assigned
    assert outcome.teacher_id == "B"
    assert outcome.teacher_name == "Bimali"
    assert outcome.class_name == "6-A"
    assert outcome.period == 3
    assert outcome.date == "2026-10-20"
    assert workloads(school) == {"A": 2, "B": 1, "C": 0}


def test_approval_falls_back_when_subject_teacher_is_busy(school):
    school.timetable.append(slot("s2", 3, "B", "English"))
    request = submit_leave(school, "A", "2026-10-20", [3], "")

    report = approve_leave(school, request.id)

    assert report.outcomes[0].teacher_id == "C"
    assert workloads(school)["C"] == 1


def test_subject_match_outranks_accumulated_workload(school):
    school.timetable.append(slot("s2", 4, "A", "Math", class_name="7-B"))
    request = submit_leave(school, "A", "2026-10-20", [3, 4], "")

    report = approve_leave(school, request.id)

    # B is the only free Math teacher in both periods, so the load it picks up in
    # period 3 does not hand period 4 to C.
    assert [item.teacher_id for item in report.outcomes] == ["B", "B"]
    assert workloads(school)["B"] == 2


def test_workload_balances_across_equally_qualified_teachers():
    store = ReliefStore(
        teachers=[teacher("A", ["Math"]), teacher("B", ["Math"]), teacher("C", ["Math"])],
        timetable=[slot("s1", 1, "A", "Math"), slot("s2", 2, "A", "Math"), slot("s3", 3, "A", "Math")],
    )
    request = submit_leave(store, "A", "2026-10-20", [1, 2, 3], "")

    report = approve_leave(store, request.id)

    assert [item.teacher_id for item in report.outcomes] == ["B", "C", "B"]
    assert workloads(store) == {"A": 0, "B": 2, "C": 1}


def test_missing_slot_uses_placeholder_class_and_subject(school):
    request = submit_leave(school, "A", "2026-10-20", [6], "")

    outcome = approve_leave(school, request.id).outcomes[0]

    assert outcome.class_name == "Unknown"
    assert outcome.subject == "General"
    assert outcome.assigned
    assert all(item.id != "placeholder" for item in school.timetable)


def test_no_eligible_teacher_is_reported_and_leave_still_approved():
    store = ReliefStore(
        teachers=[teacher("A", ["Math"]), teacher("B", ["Math"])],
        timetable=[slot("s1", 2, "A", "Math"), slot("s2", 2, "B", "Math")],
    )
    request = submit_leave(store, "A", "2026-10-20", [2], "")

    report = approve_leave(store, request.id)

    assert request.status == LeaveStatus.approved
    assert report.assigned_count == 0
    assert report.unassigned_count == 1
    outcome = report.outcomes[0]
    assert not outcome.assigned
    assert outcome.teacher_id is None
    assert outcome.reason == NO_ELIGIBLE_TEACHER
    assert workloads(store) == {"A": 0, "B": 0}


def test_total_workload_increase_matches_assigned_outcomes():
    store = ReliefStore(
        teachers=[teacher("A", ["Math"]), teacher("B", ["Math"]), teacher("C", ["Art"], workload=3)],
        timetable=[
            slot("s1", 1, "A", "Math"),
            slot("s2", 2, "A", "Math"),
            slot("s3", 2, "B", "Math"),
            slot("s4", 2, "C", "Art"),
            slot("s5", 5, "A", "Art"),
        ],
    )
    request = submit_leave(store, "A", "2026-10-20", [1, 2, 5, 7], "")
    before = sum(workloads(store).values())

    report = approve_leave(store, request.id)

    after = sum(workloads(store).values())
    assert after - before == report.assigned_count
    assert report.assigned_count == 3
    assert [item.period for item in report.outcomes] == [1, 2, 5, 7]


def test_vacated_slot_keeps_its_teacher(school):
    request = submit_leave(school, "A", "2026-10-20", [3], "")
    approve_leave(school, request.id)
    assert school.timetable[0].teacher_id == "A"


def test_unknown_leave_id_raises_not_found(school):
    with pytest.raises(NotFoundError):
        approve_leave(school, "missing")
    with pytest.raises(NotFoundError):
        reject_leave(school, "missing")


def test_second_approval_is_refused_without_rerunning(school):
    request = submit_leave(school, "A", "2026-10-20", [3], "")
    approve_leave(school, request.id)
    snapshot = workloads(school)

    with pytest.raises(InvalidTransitionError):
        approve_leave(school, request.id)
    with pytest.raises(InvalidTransitionError):
        reject_leave(school, request.id)

    assert request.status == LeaveStatus.approved
    assert workloads(school) == snapshot


def test_reject_is_terminal_and_has_no_side_effects(school):
    request = submit_leave(school, "A", "2026-10-20", [3], "")
    snapshot = workloads(school)

    rejected = reject_leave(school, request.id)

    assert rejected.status == LeaveStatus.rejected
    assert rejected.reviewed_at is not None
    assert workloads(school) == snapshot
    with pytest.raises(InvalidTransitionError) as excinfo:
        approve_leave(school, request.id)
    assert excinfo.value.status_code == 409
    assert request.status == LeaveStatus.rejected


def test_leave_for_deleted_teacher_is_approved_by_default(school):
    request = submit_leave(school, "ghost", "2026-10-20", [3], "")

    report = approve_leave(school, request.id)

    assert report.outcomes[0].class_name == "Unknown"
    assert report.outcomes[0].teacher_id == "B"


def test_require_known_teacher_refuses_unknown_teacher(school):
    request = submit_leave(school, "ghost", "2026-10-20", [3], "")

    with pytest.raises(NotFoundError):
        approve_leave(school, request.id, require_known_teacher=True)
    assert request.status == LeaveStatus.pending


def test_reserved_teachers_are_skipped_for_their_period(school):
    request = submit_leave(school, "A", "2026-10-20", [3], "")

    report = approve_leave(school, request.id, reserved={3: {"B"}, 4: {"C"}})

    assert report.outcomes[0].teacher_id == "C"


def test_reserved_tracking_prevents_double_booking_within_one_request(school):
    request = submit_leave(school, "A", "2026-10-20", [3, 3], "")

    report = approve_leave(school, request.id, reserved={})

    assert [item.teacher_id for item in report.outcomes] == ["B", "C"]


def test_without_reserved_map_repeated_period_may_reuse_teacher():
    store = ReliefStore(teachers=[teacher("A"), teacher("B")], timetable=[slot("s1", 1, "A")])
    request = submit_leave(store, "A", "2026-10-20", [1, 1], "")

    report = approve_leave(store, request.id)

    assert [item.teacher_id for item in report.outcomes] == ["B", "B"]
