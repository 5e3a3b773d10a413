# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User reference and profile models.

User accounts live in the users service; this database keeps a
reference row per user (name, email, status, role) plus the student or
teacher profile that academic records hang off.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from src.infrastructure.database.models.academic import (
        StudentSubject,
        SubjectAssignment,
        SubjectReference,
    )


class Role(IntEnum):
    """Role identifiers shared with the users service."""

    ADMIN = 1
    TEACHER = 2
    STUDENT = 3


USER_STATUS_ACTIVE = "active"
USER_STATUS_INACTIVE = "inactive"


class Career(Base):
    """Degree programme grouping subjects and profiles."""

    __tablename__ = "careers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)

    subjects: Mapped[list[SubjectReference]] = relationship(back_populates="career")

    def __repr__(self) -> str:
        return f"<Career(id={self.id}, name='{self.name}')>"


class Speciality(Base):
    """Teaching speciality."""

    __tablename__ = "specialities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)


class UserReference(TimestampMixin, Base):
    """Local reference to a user account."""

    __tablename__ = "user_references"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=USER_STATUS_ACTIVE,
        server_default=USER_STATUS_ACTIVE,
        index=True,
    )
    role_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    student_profile: Mapped[StudentProfile | None] = relationship(
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    teacher_profile: Mapped[TeacherProfile | None] = relationship(
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_active(self) -> bool:
        """Whether the user status is active."""
        return self.status == USER_STATUS_ACTIVE

    @property
    def is_student(self) -> bool:
        """Whether the user carries the student role."""
        return self.role_id == Role.STUDENT

    @property
    def is_teacher(self) -> bool:
        """Whether the user carries the teacher role."""
        return self.role_id == Role.TEACHER

    def __repr__(self) -> str:
        return f"<UserReference(id={self.id}, email='{self.email}', role_id={self.role_id})>"


class StudentProfile(Base):
    """Student profile, the foreign key anchor for enrollments."""

    __tablename__ = "student_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("user_references.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    career_id: Mapped[int | None] = mapped_column(
        ForeignKey("careers.id", ondelete="SET NULL"),
        nullable=True,
    )

    user: Mapped[UserReference] = relationship(back_populates="student_profile")
    career: Mapped[Career | None] = relationship()
    enrollments: Mapped[list[StudentSubject]] = relationship(
        back_populates="student_profile",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class TeacherProfile(Base):
    """Teacher profile with speciality and subject assignments."""

    __tablename__ = "teacher_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("user_references.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    speciality_id: Mapped[int | None] = mapped_column(
        ForeignKey("specialities.id", ondelete="SET NULL"),
        nullable=True,
    )
    career_id: Mapped[int | None] = mapped_column(
        ForeignKey("careers.id", ondelete="SET NULL"),
        nullable=True,
    )

    user: Mapped[UserReference] = relationship(back_populates="teacher_profile")
    speciality: Mapped[Speciality | None] = relationship()
    career: Mapped[Career | None] = relationship()
    subjects: Mapped[list[SubjectAssignment]] = relationship(
        back_populates="teacher_profile",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
