from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


def normalize_subjects(value: str | list[str] | None) -> list[str]:
    """Accept a list or a comma-separated string; drop blanks and repeats, keep first-seen order."""
    if value is None:
        return []
    raw_items = value.split(",") if isinstance(value, str) else value
    cleaned: list[str] = []
    for item in raw_items:
        subject = str(item).strip()
        if subject and subject not in cleaned:
            cleaned.append(subject)
    return cleaned


class Teacher(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    name: str
    subjects: list[str] = Field(default_factory=list)
    contact: str = ""
    workload_today: int = Field(default=0, ge=0, alias="workloadToday")

    model_config = {"populate_by_name": True}

    @field_validator("subjects", mode="before")
    @classmethod
    def clean_subjects(cls, value: str | list[str] | None) -> list[str]:
        return normalize_subjects(value)

    def teaches(self, subject: str) -> bool:
        return subject in self.subjects


class TeacherCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    subjects: list[str] = Field(default_factory=list, max_length=50)
    contact: str = Field(default="", max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Teacher name cannot be blank")
        return stripped

    @field_validator("subjects", mode="before")
    @classmethod
    def clean_subjects(cls, value: str | list[str] | None) -> list[str]:
        return normalize_subjects(value)


class TeacherDeleteOut(BaseModel):
    success: bool = True
    cleared_slot_count: int = Field(alias="clearedSlotCount")

    model_config = {"populate_by_name": True}
