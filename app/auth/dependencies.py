# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Session resolution is an explicit dependency: handlers that need an admin
# declare it and receive an AdminUserSummary, or the request fails with 401
# before the handler body runs.
#
# Usage:
#   from app.auth import require_auth, AdminUserSummary
#
#   @router.get("/protected")
#   def protected(admin: AdminUserSummary = Depends(require_auth)):
#       return {"user_id": admin.id}
# =============================================================================

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.context import AppContext
from app.dependencies import get_context, get_db
from app.exceptions import AuthenticationError
from core.models.auth import AdminUserSummary
from core.services.auth_service import AuthService


def get_session_token(request: Request, context: AppContext = Depends(get_context)) -> str | None:
    """The raw session token from the cookie, if any."""
    return request.cookies.get(context.settings.SESSION_COOKIE_NAME) or None


def get_current_admin_optional(
    token: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
) -> AdminUserSummary | None:
    """
    Resolve the session cookie to an admin, or None.

    Use for endpoints that behave differently for signed-in admins but
    don't require one.
    """
    return AuthService.resolve_session(db, token)


def require_auth(
    admin: AdminUserSummary | None = Depends(get_current_admin_optional),
) -> AdminUserSummary:
    """
    Require a valid session.

    Raises:
        AuthenticationError: 401 when the cookie is missing, unknown or expired
    """
    if admin is None:
        raise AuthenticationError()
    return admin
