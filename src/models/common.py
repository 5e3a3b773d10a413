# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared API schemas: pagination envelope and simple messages."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PaginationParams(BaseModel):
    """Page-based pagination parameters."""

    page: int = Field(default=1, ge=1, description="Page number (1-based)")
    limit: int = Field(default=10, ge=1, le=100, description="Items per page")

    @property
    def offset(self) -> int:
        """Number of rows to skip."""
        return (self.page - 1) * self.limit


class PaginatedResponse(BaseModel, Generic[T]):
    """Pagination envelope returned by list endpoints."""

    data: list[T]
    total: int = Field(ge=0)
    page: int
    limit: int


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class CareerSummary(BaseModel):
    """Career reference."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class UserSummary(BaseModel):
    """User reference summary."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    status: str
    role_id: int
