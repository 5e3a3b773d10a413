# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field, model_validator

from src.models.common import CareerSummary


class SpecialitySummary(BaseModel):
    """Speciality reference."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class SubjectSummary(BaseModel):
    """Subject reference."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    capacity: int


class TeacherSubjectAssignment(BaseModel):
    """Subject taught by a teacher."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    subject_id: int
    subject: SubjectSummary | None = None


class TeacherProfileDetail(BaseModel):
    """Teacher profile with speciality, career and subjects."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    speciality_id: int | None = None
    career_id: int | None = None
    speciality: SpecialitySummary | None = None
    career: CareerSummary | None = None
    subjects: list[TeacherSubjectAssignment] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def subject_count(self) -> int:
        """Number of subjects assigned."""
        return len(self.subjects)


class TeacherResponse(BaseModel):
    """Teacher user with profile."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    status: str
    role_id: int
    teacher_profile: TeacherProfileDetail | None = None


class TeacherUpdateRequest(BaseModel):
    """Partial teacher update.

    name and email update the user reference; speciality_id and
    career_id update the teacher profile.
    """

    name: str | None = Field(default=None, min_length=1, max_length=150)
    email: EmailStr | None = None
    speciality_id: int | None = Field(default=None, gt=0)
    career_id: int | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_not_empty(self) -> "TeacherUpdateRequest":
        if not self.model_dump(exclude_none=True):
            raise ValueError("At least one field must be provided")
        return self
