# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - auth.py: admin login/setup schemas and the public admin summary
# - profile.py: singleton profile schemas
# - experience.py / education.py: ordered collection entries
# - ordering.py: reorder request and collection kinds
# - case_study.py: case study schemas
# - document.py: block document (case study body) schemas
#
# These models define the "contract" between API and clients.
# JSON field names are camelCase (see base.py).
# =============================================================================

from .auth import (
    AdminUserSummary,
    LoginRequest,
    PasswordChangeRequest,
    SetupRequest,
)

from .profile import (
    ProfileResponse,
    ProfileUpdate,
)

from .experience import (
    ExperienceCreate,
    ExperienceResponse,
    ExperienceUpdate,
    ToolUsage,
)

from .education import (
    EducationCreate,
    EducationResponse,
    EducationUpdate,
)

from .ordering import (
    CollectionKind,
    ReorderRequest,
)

from .case_study import (
    CaseStudyCreate,
    CaseStudyDetail,
    CaseStudyResponse,
    CaseStudySummary,
    CaseStudyUpdate,
)

from .document import (
    Block,
    BlockDocument,
    BlockType,
)

__all__ = [
    # Auth
    "AdminUserSummary",
    "LoginRequest",
    "PasswordChangeRequest",
    "SetupRequest",
    # Profile
    "ProfileResponse",
    "ProfileUpdate",
    # Experience
    "ExperienceCreate",
    "ExperienceResponse",
    "ExperienceUpdate",
    "ToolUsage",
    # Education
    "EducationCreate",
    "EducationResponse",
    "EducationUpdate",
    # Ordering
    "CollectionKind",
    "ReorderRequest",
    # Case studies
    "CaseStudyCreate",
    "CaseStudyDetail",
    "CaseStudyResponse",
    "CaseStudySummary",
    "CaseStudyUpdate",
    # Documents
    "Block",
    "BlockDocument",
    "BlockType",
]
