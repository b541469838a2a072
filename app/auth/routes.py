# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Login, logout and session introspection for the admin dashboard.
#
# The session token travels only in an HTTP-only cookie. Its `secure` and
# `samesite` flags come from configuration so the same build works behind
# HTTPS in production and on plain http://localhost in development.
# =============================================================================

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.auth.dependencies import get_session_token, require_auth
from app.auth.models import (
    AdminUserSummary,
    LoginRequest,
    MessageResponse,
    PasswordChangeRequest,
    SetupRequest,
)
from app.config import Settings
from app.dependencies import DbDep, SettingsDep
from app.exceptions import SetupUnavailableError
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Auth"])


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_ttl_seconds,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )


def _open_session(
    db: Session,
    username: str,
    password: str,
    response: Response,
    settings: Settings,
) -> AdminUserSummary:
    token, admin = AuthService.login(
        db,
        username,
        password,
        ttl=timedelta(days=settings.SESSION_TTL_DAYS),
        rounds=settings.BCRYPT_ROUNDS,
    )
    _set_session_cookie(response, token, settings)
    return admin


@router.post("/login", response_model=AdminUserSummary)
def login(body: LoginRequest, response: Response, db: DbDep, settings: SettingsDep) -> AdminUserSummary:
    """
    Check credentials and start a session.

    Returns:
        AdminUserSummary: The signed-in admin; the session cookie is set

    Raises:
        401: Unknown username or wrong password (same response for both)
    """
    return _open_session(db, body.username, body.password, response, settings)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    db: DbDep,
    settings: SettingsDep,
    token: str | None = Depends(get_session_token),
) -> MessageResponse:
    """
    End the current session.

    Always succeeds, with or without a valid cookie.
    """
    AuthService.logout(db, token)
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=AdminUserSummary)
def me(admin: AdminUserSummary = Depends(require_auth)) -> AdminUserSummary:
    """
    The admin behind the session cookie.

    Raises:
        401: No valid session
    """
    return admin


@router.post("/setup", response_model=AdminUserSummary, status_code=201)
def setup(body: SetupRequest, response: Response, db: DbDep, settings: SettingsDep) -> AdminUserSummary:
    """
    First-run setup: create the admin account and sign in.

    Raises:
        409: An admin already exists, or setup is disabled
    """
    if not settings.ADMIN_SETUP_ENABLED:
        raise SetupUnavailableError()

    AuthService.setup_admin(db, body.username, body.password, rounds=settings.BCRYPT_ROUNDS)
    return _open_session(db, body.username, body.password, response, settings)


@router.put("/password", response_model=MessageResponse)
def change_password(
    body: PasswordChangeRequest,
    db: DbDep,
    settings: SettingsDep,
    admin: AdminUserSummary = Depends(require_auth),
    token: str | None = Depends(get_session_token),
) -> MessageResponse:
    """
    Rotate the admin password. Other sessions of this admin are signed out.

    Raises:
        401: No valid session, or currentPassword is wrong
    """
    AuthService.change_password(
        db,
        admin.id,
        body.current_password,
        body.new_password,
        keep_token=token,
        rounds=settings.BCRYPT_ROUNDS,
    )
    return MessageResponse(message="Password updated")
