# =============================================================================
# app/routers/education.py - Education Endpoints
# =============================================================================
# Public:
#   GET /education                        display order
# Admin (session required):
#   GET|POST /admin/education
#   PATCH    /admin/education/reorder     {"ids": [...]} full permutation
#   GET|PUT|DELETE /admin/education/{id}
# =============================================================================

from fastapi import APIRouter, Depends, Path

from app.auth import MessageResponse, require_auth
from app.dependencies import DbDep
from core.models.education import EducationCreate, EducationResponse, EducationUpdate
from core.models.ordering import CollectionKind, ReorderRequest
from core.services.education_service import EducationService
from core.services.ordering_service import OrderingService

router = APIRouter()
admin_router = APIRouter(prefix="/admin/education", dependencies=[Depends(require_auth)])


@router.get("/education", response_model=list[EducationResponse])
def list_education(db: DbDep):
    """All education entries, first displayed first."""
    return EducationService.list_education(db)


@admin_router.get("", response_model=list[EducationResponse])
def admin_list_education(db: DbDep):
    return EducationService.list_education(db)


@admin_router.post("", response_model=EducationResponse, status_code=201)
def create_education(body: EducationCreate, db: DbDep):
    """Create an entry; without sortOrder it goes to the end of the list."""
    return EducationService.create_education(db, body)


@admin_router.patch("/reorder", response_model=list[EducationResponse])
def reorder_education(body: ReorderRequest, db: DbDep):
    """
    Replace the display order.

    Raises:
        400: ids is not exactly the set of existing ids
    """
    return OrderingService.reorder(db, CollectionKind.EDUCATION, body.ids)


@admin_router.get("/{education_id}", response_model=EducationResponse)
def get_education(db: DbDep, education_id: int = Path(..., ge=1)):
    return EducationService.get_education(db, education_id)


@admin_router.put("/{education_id}", response_model=EducationResponse)
def update_education(body: EducationUpdate, db: DbDep, education_id: int = Path(..., ge=1)):
    """Partial update; fields missing from the body keep their value."""
    return EducationService.update_education(db, education_id, body)


@admin_router.delete("/{education_id}", response_model=MessageResponse)
def delete_education(db: DbDep, education_id: int = Path(..., ge=1)):
    EducationService.delete_education(db, education_id)
    return MessageResponse(message="Education deleted")
