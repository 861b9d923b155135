from pydantic import BaseModel, Field


class DashboardOut(BaseModel):
    pending_leaves: int = Field(alias="pendingLeaves")
    total_teachers: int = Field(alias="totalTeachers")

    model_config = {"populate_by_name": True}


class ReliefSummaryEntry(BaseModel):
    teacher_id: str = Field(alias="teacherId")
    name: str
    workload_today: int = Field(alias="workloadToday")

    model_config = {"populate_by_name": True}


class ExportFileOut(BaseModel):
    path: str
    teacher_count: int = Field(alias="teacherCount")
    timetable_count: int = Field(alias="timetableCount")
    leave_count: int = Field(alias="leaveCount")

    model_config = {"populate_by_name": True}
