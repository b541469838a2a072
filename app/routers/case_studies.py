# =============================================================================
# app/routers/case_studies.py - Case Study Endpoints
# =============================================================================
# Public:
#   GET /case-studies[?featured=true]   published only, no body
#   GET /case-studies/{slug}            published only, with rendered body
# Admin (session required):
#   GET|POST /admin/case-studies
#   GET|PUT|DELETE /admin/case-studies/{id}
# =============================================================================

from fastapi import APIRouter, Depends, Path, Query

from app.auth import MessageResponse, require_auth
from app.dependencies import DbDep
from core.models.case_study import (
    CaseStudyCreate,
    CaseStudyDetail,
    CaseStudyResponse,
    CaseStudySummary,
    CaseStudyUpdate,
)
from core.services.case_study_service import CaseStudyService

router = APIRouter()
admin_router = APIRouter(prefix="/admin/case-studies", dependencies=[Depends(require_auth)])


@router.get("/case-studies", response_model=list[CaseStudySummary])
def list_case_studies(
    db: DbDep,
    featured: bool | None = Query(default=None, description="Only featured (true) or non-featured (false)"),
):
    """Published case studies, newest first."""
    return CaseStudyService.list_published(db, featured=featured)


@router.get("/case-studies/{slug}", response_model=CaseStudyDetail)
def get_case_study_by_slug(db: DbDep, slug: str = Path(..., min_length=1, max_length=255)):
    """
    A published case study with its body rendered to HTML.

    Raises:
        404: Unknown slug, or the case study isn't published
    """
    case_study = CaseStudyService.get_published_by_slug(db, slug)
    detail = CaseStudyDetail.model_validate(case_study)
    detail.content_html = CaseStudyService.render_content(case_study)
    return detail


@admin_router.get("", response_model=list[CaseStudyResponse])
def admin_list_case_studies(db: DbDep):
    """Every case study, drafts included."""
    return CaseStudyService.list_all(db)


@admin_router.post("", response_model=CaseStudyResponse, status_code=201)
def create_case_study(body: CaseStudyCreate, db: DbDep):
    """
    Create a case study.

    Raises:
        409: Slug already in use
    """
    return CaseStudyService.create_case_study(db, body)


@admin_router.get("/{case_study_id}", response_model=CaseStudyResponse)
def get_case_study(db: DbDep, case_study_id: int = Path(..., ge=1)):
    return CaseStudyService.get_case_study(db, case_study_id)


@admin_router.put("/{case_study_id}", response_model=CaseStudyResponse)
def update_case_study(body: CaseStudyUpdate, db: DbDep, case_study_id: int = Path(..., ge=1)):
    """Partial update; fields missing from the body keep their value."""
    return CaseStudyService.update_case_study(db, case_study_id, body)


@admin_router.delete("/{case_study_id}", response_model=MessageResponse)
def delete_case_study(db: DbDep, case_study_id: int = Path(..., ge=1)):
    CaseStudyService.delete_case_study(db, case_study_id)
    return MessageResponse(message="Case study deleted")
