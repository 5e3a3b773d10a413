# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment API schemas.

EnrollmentResponse is the result of a transactional enrollment.
EnrollmentDetailResponse carries the student profile (with user and
career) and the subject (with career and teacher assignments) for the
CRUD endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.models.common import CareerSummary, UserSummary


class EnrollRequest(BaseModel):
    """Request to enroll a student in a subject."""

    student_id: int = Field(gt=0, description="User id of the student")
    subject_id: int = Field(gt=0, description="Subject id")


class EnrollmentCreateRequest(BaseModel):
    """Administrative enrollment creation."""

    student_profile_id: int = Field(gt=0)
    subject_id: int = Field(gt=0)
    status: str = Field(default="enrolled", min_length=1, max_length=20)


class EnrollmentUpdateRequest(BaseModel):
    """Partial enrollment update."""

    student_profile_id: int | None = Field(default=None, gt=0)
    subject_id: int | None = Field(default=None, gt=0)
    status: str | None = Field(default=None, min_length=1, max_length=20)

    @model_validator(mode="after")
    def check_not_empty(self) -> "EnrollmentUpdateRequest":
        if not self.model_dump(exclude_none=True):
            raise ValueError("At least one field must be provided")
        return self


class EnrollmentResponse(BaseModel):
    """Created enrollment."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    student_profile_id: int
    subject_id: int
    status: str


class StudentProfileDetail(BaseModel):
    """Student profile with user and career."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    career_id: int | None = None
    user: UserSummary | None = None
    career: CareerSummary | None = None


class TeacherProfileSummary(BaseModel):
    """Teacher profile reference."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    speciality_id: int | None = None
    career_id: int | None = None


class SubjectAssignmentDetail(BaseModel):
    """Teacher assignment of a subject."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    teacher_profile_id: int
    subject_id: int
    teacher_profile: TeacherProfileSummary | None = None


class SubjectDetail(BaseModel):
    """Subject with career and teacher assignments."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    career_id: int | None = None
    capacity: int
    career: CareerSummary | None = None
    subject_assignments: list[SubjectAssignmentDetail] = Field(default_factory=list)


class EnrollmentDetailResponse(EnrollmentResponse):
    """Enrollment with related student profile and subject."""

    created_at: datetime | None = None
    updated_at: datetime | None = None
    student_profile: StudentProfileDetail | None = None
    subject: SubjectDetail | None = None
