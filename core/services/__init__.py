# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService
from .case_study_service import CaseStudyService
from .education_service import EducationService
from .experience_service import ExperienceService
from .link_preview_service import LinkPreviewService
from .ordering_service import OrderingService
from .profile_service import ProfileService
from .storage_service import StorageService

__all__ = [
    "AuthService",
    "CaseStudyService",
    "EducationService",
    "ExperienceService",
    "LinkPreviewService",
    "OrderingService",
    "ProfileService",
    "StorageService",
]
