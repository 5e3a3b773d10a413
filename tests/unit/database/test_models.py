# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for database models.

Tests model definitions, constraints, relationships, and helper properties.
"""

import pytest
from sqlalchemy import CheckConstraint, UniqueConstraint

from src.infrastructure.database.models import (
    ENROLLMENT_STATUS_ENROLLED,
    USER_STATUS_ACTIVE,
    USER_STATUS_INACTIVE,
    Base,
    Career,
    Role,
    Speciality,
    StudentProfile,
    StudentSubject,
    SubjectAssignment,
    SubjectReference,
    TeacherProfile,
    TimestampMixin,
    UserReference,
)


def unique_columns(model) -> list[tuple[str, ...]]:
    return [
        tuple(column.name for column in constraint.columns)
        for constraint in model.__table__.constraints
        if isinstance(constraint, UniqueConstraint)
    ]


class TestBase:
    """Test base model functionality."""

    def test_base_inherits_declarative_base(self):
        """Verify Base is a declarative base."""
        assert hasattr(Base, "metadata")
        assert hasattr(Base, "registry")

    def test_timestamp_mixin_has_created_at(self):
        """Verify TimestampMixin has timestamp fields."""
        assert hasattr(TimestampMixin, "created_at")
        assert hasattr(TimestampMixin, "updated_at")

    def test_all_tables_registered(self):
        """Verify every table is part of the metadata."""
        assert set(Base.metadata.tables) == {
            "careers",
            "specialities",
            "user_references",
            "student_profiles",
            "teacher_profiles",
            "subjects",
            "subject_assignments",
            "student_subjects",
        }


class TestRole:
    """Test role identifiers."""

    def test_role_values(self):
        """Verify role ids match the users service."""
        assert Role.ADMIN == 1
        assert Role.TEACHER == 2
        assert Role.STUDENT == 3


class TestUserModels:
    """Test user and profile models."""

    def test_user_reference_table(self):
        """Verify UserReference table and email uniqueness."""
        assert UserReference.__tablename__ == "user_references"
        assert UserReference.__table__.c.email.unique is True

    @pytest.mark.parametrize(
        "status,role_id,is_active,is_student,is_teacher",
        [
            (USER_STATUS_ACTIVE, Role.STUDENT, True, True, False),
            (USER_STATUS_INACTIVE, Role.STUDENT, False, True, False),
            (USER_STATUS_ACTIVE, Role.TEACHER, True, False, True),
            (USER_STATUS_ACTIVE, Role.ADMIN, True, False, False),
        ],
    )
    def test_user_reference_properties(self, status, role_id, is_active, is_student, is_teacher):
        """Test UserReference status and role properties."""
        user = UserReference(id=1, name="User", email="u@example.com", status=status, role_id=role_id)

        assert user.is_active is is_active
        assert user.is_student is is_student
        assert user.is_teacher is is_teacher

    def test_profiles_are_unique_per_user(self):
        """Verify one student and one teacher profile per user."""
        assert StudentProfile.__table__.c.user_id.unique is True
        assert TeacherProfile.__table__.c.user_id.unique is True

    def test_profile_relationships(self):
        """Verify profile relationships are wired both ways."""
        profile = StudentProfile(id=70, user_id=7)
        user = UserReference(id=7, name="Ana", email="ana@example.com", status="active", role_id=3)
        profile.user = user

        assert user.student_profile is profile

    def test_lookup_tables(self):
        """Verify career and speciality tables."""
        assert Career.__tablename__ == "careers"
        assert Speciality.__tablename__ == "specialities"


class TestAcademicModels:
    """Test subject and enrollment models."""

    def test_subject_capacity_check_constraint(self):
        """Verify capacity can never go negative."""
        checks = [
            str(c.sqltext)
            for c in SubjectReference.__table__.constraints
            if isinstance(c, CheckConstraint)
        ]

        assert "capacity >= 0" in checks

    def test_student_subject_pair_is_unique(self):
        """Verify one enrollment per student profile and subject."""
        assert ("student_profile_id", "subject_id") in unique_columns(StudentSubject)

    def test_subject_assignment_pair_is_unique(self):
        """Verify one assignment per teacher profile and subject."""
        assert ("teacher_profile_id", "subject_id") in unique_columns(SubjectAssignment)

    def test_enrollment_foreign_keys_cascade(self):
        """Verify enrollments are removed with their profile or subject."""
        for column in ("student_profile_id", "subject_id"):
            (fk,) = StudentSubject.__table__.c[column].foreign_keys
            assert fk.ondelete == "CASCADE"

    def test_enrollment_status_default(self):
        """Verify the default enrollment status."""
        assert ENROLLMENT_STATUS_ENROLLED == "enrolled"
        assert StudentSubject.__table__.c.status.server_default.arg == "enrolled"

    def test_enrollment_references_profile(self):
        """Verify enrollments point at student profiles, not users."""
        (fk,) = StudentSubject.__table__.c.student_profile_id.foreign_keys

        assert fk.column.table.name == "student_profiles"
