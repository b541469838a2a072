# =============================================================================
# core/services/profile_service.py - Profile Singleton
# =============================================================================
# Exactly one profile row exists (id = PROFILE_ID). It is created on first
# boot and only ever updated afterwards.
# =============================================================================

import logging

from sqlalchemy.orm import Session

from core.models.profile import ProfileUpdate
from core.tables import PROFILE_ID, Profile

logger = logging.getLogger(__name__)

DEFAULT_NAME = "Your Name"
DEFAULT_INTRO = "A short introduction about yourself."


class ProfileService:
    """Service for the singleton profile."""

    @staticmethod
    def ensure_profile(db: Session) -> Profile:
        """Return the profile, creating the default row if missing."""
        profile = db.get(Profile, PROFILE_ID)
        if profile is None:
            profile = Profile(
                id=PROFILE_ID,
                name=DEFAULT_NAME,
                brief_intro=DEFAULT_INTRO,
                tools_order=[],
                industries_order=[],
                education_categories=[],
            )
            db.add(profile)
            db.commit()
            logger.info("Created default profile")
        return profile

    @staticmethod
    def get_profile(db: Session) -> Profile:
        return ProfileService.ensure_profile(db)

    @staticmethod
    def update_profile(db: Session, changes: ProfileUpdate) -> Profile:
        """
        Apply a partial update.

        Only fields present in the request are written; an explicit null
        for a list field is ignored rather than wiping it.
        """
        profile = ProfileService.ensure_profile(db)

        for field, value in changes.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            setattr(profile, field, value)

        db.commit()
        logger.info("Updated profile")
        return profile
