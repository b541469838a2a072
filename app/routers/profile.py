# =============================================================================
# app/routers/profile.py - Profile Endpoints
# =============================================================================
# GET /profile        public
# PUT /admin/profile  partial update (session required)
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import require_auth
from app.dependencies import DbDep
from core.models.profile import ProfileResponse, ProfileUpdate
from core.services.profile_service import ProfileService

router = APIRouter()
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(require_auth)])


@router.get("/profile", response_model=ProfileResponse)
def get_profile(db: DbDep):
    """The site owner's profile."""
    return ProfileService.get_profile(db)


@admin_router.put("/profile", response_model=ProfileResponse)
def update_profile(body: ProfileUpdate, db: DbDep):
    """
    Update the profile.

    Only fields present in the body change; e.g. sending just `toolsOrder`
    reorders the tool groups and leaves everything else alone.
    """
    return ProfileService.update_profile(db, body)
