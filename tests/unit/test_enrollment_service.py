# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Enrollment service."""

import pytest
from sqlalchemy.exc import IntegrityError

from src.domains.enrollment import (
    AlreadyEnrolledError,
    EnrollmentInternalError,
    EnrollmentNotFoundError,
    EnrollmentService,
)
from src.infrastructure.database.models import StudentProfile, StudentSubject, UserReference
from src.models.common import PaginationParams
from src.models.enrollment import (
    EnrollmentCreateRequest,
    EnrollmentDetailResponse,
    EnrollmentUpdateRequest,
)


def integrity_error(sqlstate: str) -> IntegrityError:
    """Build an IntegrityError carrying a driver SQLSTATE."""
    orig = Exception("constraint violated")
    orig.sqlstate = sqlstate
    return IntegrityError("INSERT INTO student_subjects ...", {}, orig)


@pytest.fixture
def enrollment_service(mock_db):
    """Create enrollment service with mock database."""
    return EnrollmentService(db=mock_db)


@pytest.fixture
def make_enrollment(make_subject):
    """Factory for enrollments with loaded relations."""

    def _make(enrollment_id: int = 1, student_profile_id: int = 70, subject_id: int = 3) -> StudentSubject:
        enrollment = StudentSubject(
            id=enrollment_id,
            student_profile_id=student_profile_id,
            subject_id=subject_id,
            status="enrolled",
        )
        profile = StudentProfile(id=student_profile_id, user_id=7)
        profile.user = UserReference(
            id=7,
            name="Ana Torres",
            email="ana@example.com",
            status="active",
            role_id=3,
        )
        enrollment.student_profile = profile
        enrollment.subject = make_subject(subject_id=subject_id)
        return enrollment

    return _make


class TestEnrollmentServiceCreate:
    """Tests for enrollment creation."""

    @pytest.mark.asyncio
    async def test_create_enrollment_success(self, enrollment_service, mock_db, make_result, make_enrollment):
        """Test successful creation returns the detailed enrollment."""
        created = make_enrollment()
        mock_db.execute.side_effect = [make_result(None), make_result(created)]

        result = await enrollment_service.create_enrollment(
            EnrollmentCreateRequest(student_profile_id=70, subject_id=3)
        )

        assert isinstance(result, EnrollmentDetailResponse)
        assert result.student_profile.user.name == "Ana Torres"
        assert result.subject.career.name == "Engineering"
        mock_db.add.assert_called_once()
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_enrollment_duplicate(self, enrollment_service, mock_db, make_result, make_enrollment):
        """Test creation fails when the pair exists."""
        mock_db.execute.return_value = make_result(make_enrollment())

        with pytest.raises(AlreadyEnrolledError) as exc_info:
            await enrollment_service.create_enrollment(
                EnrollmentCreateRequest(student_profile_id=70, subject_id=3)
            )

        assert exc_info.value.message == "This student is already enrolled in this subject"
        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_enrollment_race_on_commit(self, enrollment_service, mock_db, make_result):
        """Test a unique violation on commit maps to a conflict."""
        mock_db.execute.return_value = make_result(None)
        mock_db.commit.side_effect = integrity_error("23505")

        with pytest.raises(AlreadyEnrolledError):
            await enrollment_service.create_enrollment(
                EnrollmentCreateRequest(student_profile_id=70, subject_id=3)
            )

        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_enrollment_unexpected_error(self, enrollment_service, mock_db):
        """Test unexpected errors are wrapped."""
        error = RuntimeError("connection refused")
        mock_db.execute.side_effect = error

        with pytest.raises(EnrollmentInternalError) as exc_info:
            await enrollment_service.create_enrollment(
                EnrollmentCreateRequest(student_profile_id=70, subject_id=3)
            )

        assert exc_info.value.message == "Error creating student subject relationship"
        assert exc_info.value.original_error is error


class TestEnrollmentServiceRead:
    """Tests for listing and fetching enrollments."""

    @pytest.mark.asyncio
    async def test_list_enrollments_envelope(self, enrollment_service, mock_db, make_result, make_enrollment):
        """Test the pagination envelope."""
        mock_db.execute.side_effect = [
            make_result(12),
            make_result([make_enrollment(1), make_enrollment(2, subject_id=4)]),
        ]

        result = await enrollment_service.list_enrollments(PaginationParams(page=2, limit=2))

        assert result.total == 12
        assert result.page == 2
        assert result.limit == 2
        assert [e.id for e in result.data] == [1, 2]

        data_query = str(mock_db.execute.call_args_list[1].args[0])
        assert "LIMIT" in data_query
        assert "OFFSET" in data_query

    @pytest.mark.asyncio
    async def test_get_enrollment_success(self, enrollment_service, mock_db, make_result, make_enrollment):
        """Test fetching an enrollment."""
        mock_db.execute.return_value = make_result(make_enrollment(5))

        result = await enrollment_service.get_enrollment(5)

        assert result.id == 5
        assert result.status == "enrolled"

    @pytest.mark.asyncio
    async def test_get_enrollment_not_found(self, enrollment_service, mock_db, make_result):
        """Test fetching a missing enrollment."""
        mock_db.execute.return_value = make_result(None)

        with pytest.raises(EnrollmentNotFoundError) as exc_info:
            await enrollment_service.get_enrollment(5)

        assert exc_info.value.message == "Student Subject relationship with ID 5 not found"

    @pytest.mark.asyncio
    async def test_list_enrollments_by_period(self, enrollment_service, mock_db, make_result, make_enrollment):
        """Test listing the enrollments of one student and subject."""
        mock_db.execute.return_value = make_result([make_enrollment()])

        result = await enrollment_service.list_enrollments_by_period(7, subject_id=3)

        assert len(result) == 1
        query = str(mock_db.execute.call_args.args[0])
        assert "student_profiles.user_id" in query
        assert "student_subjects.subject_id" in query

    @pytest.mark.asyncio
    async def test_list_enrollments_by_period_without_subject(self, enrollment_service, mock_db, make_result):
        """Test listing without a subject filter."""
        mock_db.execute.return_value = make_result([])

        result = await enrollment_service.list_enrollments_by_period(7)

        assert result == []
        query = str(mock_db.execute.call_args.args[0])
        assert "student_subjects.subject_id =" not in query


class TestEnrollmentServiceUpdate:
    """Tests for enrollment updates."""

    @pytest.mark.asyncio
    async def test_update_status_only(self, enrollment_service, mock_db, make_result, make_enrollment):
        """Test updating the status skips the pair check."""
        enrollment = make_enrollment()
        mock_db.execute.side_effect = [make_result(enrollment), make_result(enrollment)]

        result = await enrollment_service.update_enrollment(
            1, EnrollmentUpdateRequest(status="withdrawn")
        )

        assert result.status == "withdrawn"
        assert mock_db.execute.await_count == 2
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_pair_conflict(self, enrollment_service, mock_db, make_result, make_enrollment):
        """Test moving to a pair held by another enrollment."""
        mock_db.execute.side_effect = [
            make_result(make_enrollment(1, subject_id=3)),
            make_result(make_enrollment(2, subject_id=4)),
        ]

        with pytest.raises(AlreadyEnrolledError):
            await enrollment_service.update_enrollment(1, EnrollmentUpdateRequest(subject_id=4))

        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_pair_free(self, enrollment_service, mock_db, make_result, make_enrollment):
        """Test moving to a free pair."""
        enrollment = make_enrollment(1, subject_id=3)
        mock_db.execute.side_effect = [
            make_result(enrollment),
            make_result(None),
            make_result(enrollment),
        ]

        await enrollment_service.update_enrollment(1, EnrollmentUpdateRequest(subject_id=4))

        assert enrollment.subject_id == 4
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_not_found(self, enrollment_service, mock_db, make_result):
        """Test updating a missing enrollment."""
        mock_db.execute.return_value = make_result(None)

        with pytest.raises(EnrollmentNotFoundError):
            await enrollment_service.update_enrollment(9, EnrollmentUpdateRequest(status="withdrawn"))


class TestEnrollmentServiceRemove:
    """Tests for enrollment removal."""

    @pytest.mark.asyncio
    async def test_remove_enrollment_success(self, enrollment_service, mock_db, make_result, make_enrollment):
        """Test removing an enrollment."""
        enrollment = make_enrollment(4)
        mock_db.execute.return_value = make_result(enrollment)

        result = await enrollment_service.remove_enrollment(4)

        assert result.message == "Student Subject relationship with ID 4 has been successfully removed"
        mock_db.delete.assert_awaited_once_with(enrollment)
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_remove_enrollment_not_found(self, enrollment_service, mock_db, make_result):
        """Test removing a missing enrollment."""
        mock_db.execute.return_value = make_result(None)

        with pytest.raises(EnrollmentNotFoundError):
            await enrollment_service.remove_enrollment(4)

        mock_db.delete.assert_not_called()
