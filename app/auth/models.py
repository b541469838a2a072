# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Request bodies live in core/models/auth.py; this module re-exports them
# for the auth routes and adds the plain message response.
# =============================================================================

from pydantic import BaseModel

from core.models.auth import (
    AdminUserSummary,
    LoginRequest,
    PasswordChangeRequest,
    SetupRequest,
)


class MessageResponse(BaseModel):
    message: str


__all__ = [
    "AdminUserSummary",
    "LoginRequest",
    "MessageResponse",
    "PasswordChangeRequest",
    "SetupRequest",
]
