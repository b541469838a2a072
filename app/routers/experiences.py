# =============================================================================
# app/routers/experiences.py - Work Experience Endpoints
# =============================================================================
# Public:
#   GET /experiences                      display order
# Admin (session required):
#   GET|POST /admin/experiences
#   PATCH    /admin/experiences/reorder   {"ids": [...]} full permutation
#   GET|PUT|DELETE /admin/experiences/{id}
# =============================================================================

from fastapi import APIRouter, Depends, Path

from app.auth import MessageResponse, require_auth
from app.dependencies import DbDep
from core.models.experience import ExperienceCreate, ExperienceResponse, ExperienceUpdate
from core.models.ordering import CollectionKind, ReorderRequest
from core.services.experience_service import ExperienceService
from core.services.ordering_service import OrderingService

router = APIRouter()
admin_router = APIRouter(prefix="/admin/experiences", dependencies=[Depends(require_auth)])


@router.get("/experiences", response_model=list[ExperienceResponse])
def list_experiences(db: DbDep):
    """All experience entries, first displayed first."""
    return ExperienceService.list_experiences(db)


@admin_router.get("", response_model=list[ExperienceResponse])
def admin_list_experiences(db: DbDep):
    return ExperienceService.list_experiences(db)


@admin_router.post("", response_model=ExperienceResponse, status_code=201)
def create_experience(body: ExperienceCreate, db: DbDep):
    """Create an entry; without sortOrder it goes to the end of the list."""
    return ExperienceService.create_experience(db, body)


# Declared before /{experience_id} so "reorder" isn't parsed as an id
@admin_router.patch("/reorder", response_model=list[ExperienceResponse])
def reorder_experiences(body: ReorderRequest, db: DbDep):
    """
    Replace the display order.

    Raises:
        400: ids is not exactly the set of existing ids
    """
    return OrderingService.reorder(db, CollectionKind.EXPERIENCES, body.ids)


@admin_router.get("/{experience_id}", response_model=ExperienceResponse)
def get_experience(db: DbDep, experience_id: int = Path(..., ge=1)):
    return ExperienceService.get_experience(db, experience_id)


@admin_router.put("/{experience_id}", response_model=ExperienceResponse)
def update_experience(body: ExperienceUpdate, db: DbDep, experience_id: int = Path(..., ge=1)):
    """Partial update; fields missing from the body keep their value."""
    return ExperienceService.update_experience(db, experience_id, body)


@admin_router.delete("/{experience_id}", response_model=MessageResponse)
def delete_experience(db: DbDep, experience_id: int = Path(..., ge=1)):
    ExperienceService.delete_experience(db, experience_id)
    return MessageResponse(message="Experience deleted")
