from __future__ import annotations

from pydantic import BaseModel, Field

from relief.schemas.leave import MAX_PERIOD

PLACEHOLDER_CLASS_NAME = "Unknown"
PLACEHOLDER_SUBJECT = "General"


class TimetableSlot(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    class_name: str = Field(alias="className")
    period: int = Field(ge=1, le=MAX_PERIOD)
    teacher_id: str | None = Field(default=None, alias="teacherId")
    subject: str = ""

    model_config = {"populate_by_name": True}


class TimetableSlotCreate(BaseModel):
    class_name: str = Field(min_length=1, max_length=200, alias="className")
    # Free-text period input is parsed by the service under the numeric input policy.
    period: int | str
    teacher_id: str | None = Field(default=None, max_length=36, alias="teacherId")
    subject: str = Field(default="", max_length=200)

    model_config = {"populate_by_name": True}


def placeholder_slot(period: int) -> TimetableSlot:
    """Stand-in used for reporting when the absent teacher has no slot in ``period``."""
    return TimetableSlot(
        id="placeholder",
        className=PLACEHOLDER_CLASS_NAME,
        period=period,
        teacherId=None,
        subject=PLACEHOLDER_SUBJECT,
    )
