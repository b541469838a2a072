# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Cookie-based admin sessions backed by the admin_sessions table.
#
# Usage:
#   from app.auth import require_auth, AdminUserSummary
#
#   @router.get("/protected")
#   def protected(admin: AdminUserSummary = Depends(require_auth)):
#       return {"user_id": admin.id}
# =============================================================================

from app.auth.dependencies import get_current_admin_optional, get_session_token, require_auth
from app.auth.models import AdminUserSummary, MessageResponse

__all__ = [
    "get_current_admin_optional",
    "get_session_token",
    "require_auth",
    "AdminUserSummary",
    "MessageResponse",
]
