# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - profile.py: Profile singleton (public read, admin update)
# - experiences.py: Work experience (public list, admin CRUD + reorder)
# - education.py: Education (public list, admin CRUD + reorder)
# - case_studies.py: Case studies (public by slug, admin CRUD)
# - media.py: Image upload and link preview for the editor
#
# Feature modules expose `router` (public) and, where relevant,
# `admin_router` (session required). Each is mounted in main.py under /api.
# =============================================================================

from . import health
from . import profile
from . import experiences
from . import education
from . import case_studies
from . import media

__all__ = [
    "health",
    "profile",
    "experiences",
    "education",
    "case_studies",
    "media",
]
