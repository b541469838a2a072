# =============================================================================
# core/services/case_study_service.py - Case Study CRUD
# =============================================================================
# Case studies are addressed by id in the admin API and by slug on the
# public site. Unpublished entries are invisible to public reads: they
# answer exactly like a slug that doesn't exist.
#
# `content` is always stored as a serialized block document; whatever the
# editor sends is normalized on the way in (see lib/blocks.py).
# =============================================================================

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ValidationFailedError
from core.models.case_study import CaseStudyCreate, CaseStudyUpdate
from core.tables import CaseStudy
from lib.blocks import normalize_content
from lib.renderer import render_document_html
from lib.utils import slugify

logger = logging.getLogger(__name__)

# Columns that may be cleared with an explicit null
_NULLABLE = {"featured_image"}


class CaseStudyService:
    """Service for case studies."""

    # -------------------------------------------------------------------------
    # Public reads
    # -------------------------------------------------------------------------

    @staticmethod
    def list_published(db: Session, featured: bool | None = None) -> list[CaseStudy]:
        """Published case studies, newest first. `featured` narrows the list."""
        stmt = select(CaseStudy).where(CaseStudy.is_published.is_(True))
        if featured is not None:
            stmt = stmt.where(CaseStudy.is_featured.is_(featured))
        stmt = stmt.order_by(CaseStudy.created_at.desc(), CaseStudy.id.desc())
        return list(db.scalars(stmt))

    @staticmethod
    def get_published_by_slug(db: Session, slug: str) -> CaseStudy:
        """
        Raises:
            NotFoundError: Missing or unpublished (indistinguishable)
        """
        case_study = db.scalar(select(CaseStudy).where(CaseStudy.slug == slug))
        if case_study is None or not case_study.is_published:
            raise NotFoundError("Case study", slug)
        return case_study

    @staticmethod
    def render_content(case_study: CaseStudy) -> str:
        return render_document_html(case_study.content)

    # -------------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------------

    @staticmethod
    def list_all(db: Session) -> list[CaseStudy]:
        stmt = select(CaseStudy).order_by(CaseStudy.created_at.desc(), CaseStudy.id.desc())
        return list(db.scalars(stmt))

    @staticmethod
    def get_case_study(db: Session, case_study_id: int) -> CaseStudy:
        """
        Raises:
            NotFoundError: If the id doesn't exist
        """
        case_study = db.get(CaseStudy, case_study_id)
        if case_study is None:
            raise NotFoundError("Case study", case_study_id)
        return case_study

    @staticmethod
    def _resolve_slug(title: str, slug: str | None) -> str:
        resolved = slug or slugify(title)
        if not resolved:
            raise ValidationFailedError(
                "Could not derive a slug from the title",
                errors=[{"field": "slug", "message": "Provide a slug with letters or digits"}],
            )
        return resolved

    @staticmethod
    def _ensure_slug_free(db: Session, slug: str, exclude_id: int | None = None) -> None:
        stmt = select(CaseStudy.id).where(CaseStudy.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(CaseStudy.id != exclude_id)
        if db.scalar(stmt) is not None:
            raise ConflictError("A case study with this slug already exists", field="slug", value=slug)

    @staticmethod
    def _commit(db: Session, slug: str) -> None:
        # The pre-check can race with another writer; the unique index decides
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("A case study with this slug already exists", field="slug", value=slug)

    @staticmethod
    def create_case_study(db: Session, data: CaseStudyCreate) -> CaseStudy:
        """
        Raises:
            ValidationFailedError: No slug given and none derivable from the title
            ConflictError: Slug already in use
        """
        slug = CaseStudyService._resolve_slug(data.title, data.slug)
        CaseStudyService._ensure_slug_free(db, slug)

        case_study = CaseStudy(
            title=data.title,
            slug=slug,
            description=data.description,
            content=normalize_content(data.content),
            featured_image=data.featured_image,
            tags=list(data.tags),
            is_published=data.is_published,
            is_featured=data.is_featured,
        )
        db.add(case_study)
        CaseStudyService._commit(db, slug)

        logger.info(f"Created case study: {case_study.id} ({slug})")
        return case_study

    @staticmethod
    def update_case_study(db: Session, case_study_id: int, changes: CaseStudyUpdate) -> CaseStudy:
        """
        Partial update; fields missing from the request keep their value.

        Raises:
            NotFoundError: If the id doesn't exist
            ConflictError: New slug already in use
        """
        case_study = CaseStudyService.get_case_study(db, case_study_id)
        values = changes.model_dump(exclude_unset=True)

        if values.get("slug"):
            CaseStudyService._ensure_slug_free(db, values["slug"], exclude_id=case_study.id)
        else:
            # An explicit blank or null slug keeps the current one
            values.pop("slug", None)

        if values.get("content") is not None:
            values["content"] = normalize_content(values["content"])

        for field, value in values.items():
            if value is None and field not in _NULLABLE:
                continue
            setattr(case_study, field, value)

        CaseStudyService._commit(db, case_study.slug)

        logger.info(f"Updated case study: {case_study.id}")
        return case_study

    @staticmethod
    def delete_case_study(db: Session, case_study_id: int) -> None:
        case_study = CaseStudyService.get_case_study(db, case_study_id)
        db.delete(case_study)
        db.commit()
        logger.info(f"Deleted case study: {case_study_id}")
