from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, computed_field

NO_ELIGIBLE_TEACHER = "no eligible teacher"

MAX_PERIOD = 99

Period = Annotated[int, Field(ge=1, le=MAX_PERIOD)]


class LeaveStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class LeaveRequest(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    teacher_id: str = Field(alias="teacherId")
    date: str
    periods: list[Period] = Field(default_factory=list)
    reason: str = ""
    status: LeaveStatus = LeaveStatus.pending
    created_at: str = Field(alias="createdAt")
    reviewed_at: str | None = Field(default=None, alias="reviewedAt")

    model_config = {"populate_by_name": True}

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.pending


class LeaveRequestCreate(BaseModel):
    teacher_id: str = Field(min_length=1, max_length=36, alias="teacherId")
    date: str = Field(min_length=1, max_length=50)
    # A list of period numbers or the comma-separated text form, e.g. "1, 3, 4".
    periods: list[int | str] | str
    reason: str = Field(default="", max_length=1000)

    model_config = {"populate_by_name": True}


class ReliefOutcome(BaseModel):
    leave_id: str = Field(alias="leaveId")
    date: str
    class_name: str = Field(alias="className")
    period: int
    subject: str
    assigned: bool
    teacher_id: str | None = Field(default=None, alias="teacherId")
    teacher_name: str | None = Field(default=None, alias="teacherName")
    reason: str | None = None

    model_config = {"populate_by_name": True}

    def describe(self) -> str:
        if self.assigned:
            return f"{self.date} - {self.class_name} (Period {self.period}): {self.teacher_name} assigned"
        return f"{self.date} - {self.class_name} (Period {self.period}): {self.reason}"


class AssignmentReport(BaseModel):
    leave_id: str = Field(alias="leaveId")
    status: LeaveStatus
    outcomes: list[ReliefOutcome] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @computed_field(alias="assignedCount")
    @property
    def assigned_count(self) -> int:
        return sum(1 for item in self.outcomes if item.assigned)

    @computed_field(alias="unassignedCount")
    @property
    def unassigned_count(self) -> int:
        return len(self.outcomes) - self.assigned_count


class ReliefAssignmentOut(BaseModel):
    id: str
    leave_request_id: str
    leave_date: str
    position: int
    period: int
    class_name: str
    subject: str
    substitute_teacher_id: str | None = None
    substitute_teacher_name: str | None = None
    reason: str | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
