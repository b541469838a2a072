# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import Settings
from app.context import AppContext


def get_context(request: Request) -> AppContext:
    """The AppContext built in the lifespan handler."""
    return request.app.state.context


def get_app_settings(context: AppContext = Depends(get_context)) -> Settings:
    return context.settings


def get_db(context: AppContext = Depends(get_context)) -> Iterator[Session]:
    """
    One database session per request.

    Services commit their own writes; anything left uncommitted when a
    handler raises is rolled back here.
    """
    db = context.session_factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# Type aliases for dependency injection
ContextDep = Annotated[AppContext, Depends(get_context)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
DbDep = Annotated[Session, Depends(get_db)]
