# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subject, teacher assignment and enrollment models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from src.infrastructure.database.models.users import (
        Career,
        StudentProfile,
        TeacherProfile,
    )

ENROLLMENT_STATUS_ENROLLED = "enrolled"


class SubjectReference(Base):
    """Subject offered by a career.

    capacity holds the remaining open seats and is only decremented by
    a successful transactional enrollment.
    """

    __tablename__ = "subjects"
    __table_args__ = (
        CheckConstraint("capacity >= 0", name="capacity_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    career_id: Mapped[int | None] = mapped_column(
        ForeignKey("careers.id", ondelete="SET NULL"),
        nullable=True,
    )
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    career: Mapped[Career | None] = relationship(back_populates="subjects")
    subject_assignments: Mapped[list[SubjectAssignment]] = relationship(
        back_populates="subject",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<SubjectReference(id={self.id}, name='{self.name}', capacity={self.capacity})>"


class SubjectAssignment(Base):
    """Teacher assigned to teach a subject."""

    __tablename__ = "subject_assignments"
    __table_args__ = (
        UniqueConstraint("teacher_profile_id", "subject_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    teacher_profile_id: Mapped[int] = mapped_column(
        ForeignKey("teacher_profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    subject_id: Mapped[int] = mapped_column(
        ForeignKey("subjects.id", ondelete="CASCADE"),
        nullable=False,
    )

    teacher_profile: Mapped[TeacherProfile] = relationship(back_populates="subjects")
    subject: Mapped[SubjectReference] = relationship(back_populates="subject_assignments")


class StudentSubject(TimestampMixin, Base):
    """Enrollment of a student profile in a subject.

    At most one row exists per (student_profile_id, subject_id).
    """

    __tablename__ = "student_subjects"
    __table_args__ = (
        UniqueConstraint("student_profile_id", "subject_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    student_profile_id: Mapped[int] = mapped_column(
        ForeignKey("student_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    subject_id: Mapped[int] = mapped_column(
        ForeignKey("subjects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ENROLLMENT_STATUS_ENROLLED,
        server_default=ENROLLMENT_STATUS_ENROLLED,
    )

    student_profile: Mapped[StudentProfile] = relationship(back_populates="enrollments")
    subject: Mapped[SubjectReference] = relationship()

    def __repr__(self) -> str:
        return (
            f"<StudentSubject(id={self.id}, student_profile_id={self.student_profile_id}, "
            f"subject_id={self.subject_id}, status='{self.status}')>"
        )
