# =============================================================================
# core/services/experience_service.py - Experience CRUD
# =============================================================================

import logging

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from core.models.experience import ExperienceCreate, ExperienceUpdate
from core.models.ordering import CollectionKind
from core.services.ordering_service import OrderingService
from core.tables import Experience

logger = logging.getLogger(__name__)


class ExperienceService:
    """Service for work experience entries."""

    @staticmethod
    def list_experiences(db: Session) -> list[Experience]:
        return OrderingService.list_items(db, CollectionKind.EXPERIENCES)

    @staticmethod
    def get_experience(db: Session, experience_id: int) -> Experience:
        """
        Raises:
            NotFoundError: If the id doesn't exist
        """
        experience = db.get(Experience, experience_id)
        if experience is None:
            raise NotFoundError("Experience", experience_id)
        return experience

    @staticmethod
    def create_experience(db: Session, data: ExperienceCreate) -> Experience:
        values = data.model_dump(exclude={"sort_order", "tools"})
        sort_order = data.sort_order
        if sort_order is None:
            sort_order = OrderingService.next_sort_order(db, CollectionKind.EXPERIENCES)

        experience = Experience(
            **values,
            tools=[tool.model_dump() for tool in data.tools],
            sort_order=sort_order,
        )
        db.add(experience)
        db.commit()
        logger.info(f"Created experience: {experience.id}")
        return experience

    @staticmethod
    def update_experience(db: Session, experience_id: int, changes: ExperienceUpdate) -> Experience:
        experience = ExperienceService.get_experience(db, experience_id)

        for field, value in changes.model_dump(exclude_unset=True).items():
            # end_date is the only nullable column
            if value is None and field != "end_date":
                continue
            setattr(experience, field, value)

        if experience.is_current_job:
            experience.end_date = None

        db.commit()
        logger.info(f"Updated experience: {experience.id}")
        return experience

    @staticmethod
    def delete_experience(db: Session, experience_id: int) -> None:
        experience = ExperienceService.get_experience(db, experience_id)
        db.delete(experience)
        db.commit()
        logger.info(f"Deleted experience: {experience_id}")
