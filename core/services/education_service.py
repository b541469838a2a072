# =============================================================================
# core/services/education_service.py - Education CRUD
# =============================================================================

import logging

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from core.models.education import EducationCreate, EducationUpdate
from core.models.ordering import CollectionKind
from core.services.ordering_service import OrderingService
from core.tables import Education

logger = logging.getLogger(__name__)

# Columns that may be cleared with an explicit null
_NULLABLE = {"link", "date"}


class EducationService:
    """Service for education entries."""

    @staticmethod
    def list_education(db: Session) -> list[Education]:
        return OrderingService.list_items(db, CollectionKind.EDUCATION)

    @staticmethod
    def get_education(db: Session, education_id: int) -> Education:
        """
        Raises:
            NotFoundError: If the id doesn't exist
        """
        education = db.get(Education, education_id)
        if education is None:
            raise NotFoundError("Education", education_id)
        return education

    @staticmethod
    def create_education(db: Session, data: EducationCreate) -> Education:
        sort_order = data.sort_order
        if sort_order is None:
            sort_order = OrderingService.next_sort_order(db, CollectionKind.EDUCATION)

        education = Education(**data.model_dump(exclude={"sort_order"}), sort_order=sort_order)
        db.add(education)
        db.commit()
        logger.info(f"Created education: {education.id}")
        return education

    @staticmethod
    def update_education(db: Session, education_id: int, changes: EducationUpdate) -> Education:
        education = EducationService.get_education(db, education_id)

        for field, value in changes.model_dump(exclude_unset=True).items():
            if value is None and field not in _NULLABLE:
                continue
            setattr(education, field, value)

        db.commit()
        logger.info(f"Updated education: {education.id}")
        return education

    @staticmethod
    def delete_education(db: Session, education_id: int) -> None:
        education = EducationService.get_education(db, education_id)
        db.delete(education)
        db.commit()
        logger.info(f"Deleted education: {education_id}")
