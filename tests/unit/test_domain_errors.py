# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the shared domain error taxonomy."""

import logging

import pytest

from src.domains.enrollment import AlreadyEnrolledError, EnrollmentInternalError
from src.domains.errors import (
    ConflictError,
    InternalFailureError,
    NotFoundError,
    ServiceError,
    translate_errors,
)
from src.domains.teacher import TeacherEmailExistsError, TeacherInternalError, TeacherNotFoundError

logger = logging.getLogger(__name__)


class TestErrorHierarchy:
    """Both domains share one set of categories."""

    @pytest.mark.parametrize(
        "error_class,category",
        [
            (AlreadyEnrolledError, ConflictError),
            (TeacherEmailExistsError, ConflictError),
            (TeacherNotFoundError, NotFoundError),
            (EnrollmentInternalError, InternalFailureError),
            (TeacherInternalError, InternalFailureError),
        ],
    )
    def test_domain_errors_subclass_categories(self, error_class, category):
        """Test that concrete errors belong to their category."""
        assert issubclass(error_class, category)
        assert issubclass(error_class, ServiceError)

    def test_message_and_original_error(self):
        """Test that the message and cause are kept."""
        cause = ValueError("boom")
        error = TeacherNotFoundError("Teacher with ID 9 not found", cause)

        assert error.message == "Teacher with ID 9 not found"
        assert error.original_error is cause
        assert str(error) == "Teacher with ID 9 not found"


class TestTranslateErrors:
    """Tests for translate_errors."""

    def test_categorized_error_passes_through(self):
        """Test that domain errors are re-raised unchanged."""
        error = TeacherNotFoundError("Teacher with ID 9 not found")

        with pytest.raises(TeacherNotFoundError) as exc_info:
            with translate_errors("Error fetching teacher", TeacherInternalError, logger):
                raise error

        assert exc_info.value is error

    def test_unexpected_error_is_wrapped(self, caplog):
        """Test that other errors become the given internal failure."""
        cause = RuntimeError("connection lost")

        with caplog.at_level(logging.ERROR, logger=__name__):
            with pytest.raises(TeacherInternalError) as exc_info:
                with translate_errors("Error fetching teacher", TeacherInternalError, logger):
                    raise cause

        assert exc_info.value.message == "Error fetching teacher"
        assert exc_info.value.original_error is cause
        assert exc_info.value.__cause__ is cause
        assert "Error fetching teacher" in caplog.text

    def test_no_error_is_silent(self):
        """Test that a clean block runs through."""
        with translate_errors("Error fetching teacher", TeacherInternalError, logger):
            value = 1

        assert value == 1
