# =============================================================================
# core/models/auth.py - Authentication Schemas
# =============================================================================
# - AdminUserSummary: the only view of an admin that leaves the server
#   (id and username; never the password hash)
# - LoginRequest / SetupRequest / PasswordChangeRequest: request bodies
# =============================================================================

from pydantic import Field, field_validator

from .base import ApiModel

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class AdminUserSummary(ApiModel):
    """Public view of an admin account."""

    id: str
    username: str

    model_config = {"frozen": True}


class LoginRequest(ApiModel):
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=1024)


class SetupRequest(ApiModel):
    """First-run admin creation."""

    username: str = Field(..., min_length=3, max_length=255, pattern=r"^\S+$")
    password: str = Field(..., min_length=8)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class PasswordChangeRequest(ApiModel):
    current_password: str = Field(..., min_length=1, max_length=1024)
    new_password: str = Field(..., min_length=8)

    @field_validator("new_password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value
