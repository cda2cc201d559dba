"""Pydantic schemas for the Web API.

Request fields are optional at the schema level: a missing or empty field
is answered with the endpoint's own 400 message, not a validation error.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


# =============================================================================
# AUTH SCHEMAS
# =============================================================================


class SignupRequest(BaseModel):
    """Request body for creating an account."""

    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    """Request body for logging in (username is the account name)."""

    username: str | None = None
    password: str | None = None


class UserSummary(BaseModel):
    """Public view of a user."""

    id: int
    name: str
    email: str


class MessageResponse(BaseModel):
    """Response carrying only a message."""

    message: str


class LoginResponse(BaseModel):
    """Response for a successful login."""

    message: str
    user: UserSummary


# =============================================================================
# PROFILE SCHEMAS
# =============================================================================


class CategoryScore(BaseModel):
    """One test result row."""

    category: str
    score: int | float


class SavedCareerItem(BaseModel):
    """One saved career row."""

    career_name: str


class ProfileResponse(BaseModel):
    """Merged profile: user row, test results and saved careers."""

    user: UserSummary
    tests: list[CategoryScore]
    careers: list[SavedCareerItem]


# =============================================================================
# CAREER SCHEMAS
# =============================================================================


class SaveCourseRequest(BaseModel):
    """Request body for bookmarking a career."""

    userId: int | str | None = None
    careerName: str | None = None


class SaveCourseResponse(BaseModel):
    """Outcome of a save; success is false when already saved."""

    success: bool
    message: str


class CareerNamesResponse(BaseModel):
    """Distinct career names across all users."""

    careers: list[str]


# =============================================================================
# CHAT SCHEMAS
# =============================================================================


class ChatRequest(BaseModel):
    """Request body for the career advisor proxy."""

    message: str | None = None


class ChatResponse(BaseModel):
    """Assistant reply text."""

    reply: str


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    database: str = "ok"
