# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - tables.py: SQLAlchemy ORM tables
# - models/: Pydantic schemas for request/response validation
# - services/: Operations on the entities (auth, ordering, CRUD, media)
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable and reusable.
# =============================================================================
