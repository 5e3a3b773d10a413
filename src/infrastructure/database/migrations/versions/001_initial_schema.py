# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial academic records schema.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2025-03-10
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    """Create academic records tables."""
    # =========================================================================
    # CATALOG TABLES
    # =========================================================================

    op.create_table(
        "careers",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_careers"),
        sa.UniqueConstraint("name", name="uq_careers_name"),
    )

    op.create_table(
        "specialities",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_specialities"),
        sa.UniqueConstraint("name", name="uq_specialities_name"),
    )

    # =========================================================================
    # USER REFERENCES AND PROFILES
    # =========================================================================

    op.create_table(
        "user_references",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("role_id", sa.Integer, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_user_references"),
        sa.UniqueConstraint("email", name="uq_user_references_email"),
    )
    op.create_index("ix_user_references_status", "user_references", ["status"])
    op.create_index("ix_user_references_role_id", "user_references", ["role_id"])

    op.create_table(
        "student_profiles",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey(
                "user_references.id",
                ondelete="CASCADE",
                name="fk_student_profiles_user_id_user_references",
            ),
            nullable=False,
        ),
        sa.Column(
            "career_id",
            sa.Integer,
            sa.ForeignKey(
                "careers.id",
                ondelete="SET NULL",
                name="fk_student_profiles_career_id_careers",
            ),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_student_profiles"),
        sa.UniqueConstraint("user_id", name="uq_student_profiles_user_id"),
    )

    op.create_table(
        "teacher_profiles",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey(
                "user_references.id",
                ondelete="CASCADE",
                name="fk_teacher_profiles_user_id_user_references",
            ),
            nullable=False,
        ),
        sa.Column(
            "speciality_id",
            sa.Integer,
            sa.ForeignKey(
                "specialities.id",
                ondelete="SET NULL",
                name="fk_teacher_profiles_speciality_id_specialities",
            ),
            nullable=True,
        ),
        sa.Column(
            "career_id",
            sa.Integer,
            sa.ForeignKey(
                "careers.id",
                ondelete="SET NULL",
                name="fk_teacher_profiles_career_id_careers",
            ),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_teacher_profiles"),
        sa.UniqueConstraint("user_id", name="uq_teacher_profiles_user_id"),
    )

    # =========================================================================
    # SUBJECTS, ASSIGNMENTS AND ENROLLMENTS
    # =========================================================================

    op.create_table(
        "subjects",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column(
            "career_id",
            sa.Integer,
            sa.ForeignKey(
                "careers.id",
                ondelete="SET NULL",
                name="fk_subjects_career_id_careers",
            ),
            nullable=True,
        ),
        sa.Column("capacity", sa.Integer, nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id", name="pk_subjects"),
        sa.CheckConstraint("capacity >= 0", name="ck_subjects_capacity_non_negative"),
    )

    op.create_table(
        "subject_assignments",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column(
            "teacher_profile_id",
            sa.Integer,
            sa.ForeignKey(
                "teacher_profiles.id",
                ondelete="CASCADE",
                name="fk_subject_assignments_teacher_profile_id_teacher_profiles",
            ),
            nullable=False,
        ),
        sa.Column(
            "subject_id",
            sa.Integer,
            sa.ForeignKey(
                "subjects.id",
                ondelete="CASCADE",
                name="fk_subject_assignments_subject_id_subjects",
            ),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_subject_assignments"),
        sa.UniqueConstraint(
            "teacher_profile_id",
            "subject_id",
            name="uq_subject_assignments_teacher_profile_id",
        ),
    )

    op.create_table(
        "student_subjects",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column(
            "student_profile_id",
            sa.Integer,
            sa.ForeignKey(
                "student_profiles.id",
                ondelete="CASCADE",
                name="fk_student_subjects_student_profile_id_student_profiles",
            ),
            nullable=False,
        ),
        sa.Column(
            "subject_id",
            sa.Integer,
            sa.ForeignKey(
                "subjects.id",
                ondelete="CASCADE",
                name="fk_student_subjects_subject_id_subjects",
            ),
            nullable=False,
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="enrolled"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_student_subjects"),
        sa.UniqueConstraint(
            "student_profile_id",
            "subject_id",
            name="uq_student_subjects_student_profile_id",
        ),
    )
    op.create_index(
        "ix_student_subjects_student_profile_id",
        "student_subjects",
        ["student_profile_id"],
    )
    op.create_index("ix_student_subjects_subject_id", "student_subjects", ["subject_id"])


def downgrade() -> None:
    """Drop academic records tables."""
    op.drop_index("ix_student_subjects_subject_id", table_name="student_subjects")
    op.drop_index("ix_student_subjects_student_profile_id", table_name="student_subjects")
    op.drop_table("student_subjects")
    op.drop_table("subject_assignments")
    op.drop_table("subjects")
    op.drop_table("teacher_profiles")
    op.drop_table("student_profiles")
    op.drop_index("ix_user_references_role_id", table_name="user_references")
    op.drop_index("ix_user_references_status", table_name="user_references")
    op.drop_table("user_references")
    op.drop_table("specialities")
    op.drop_table("careers")
