# =============================================================================
# app/context.py - Application Context
# =============================================================================
# Everything a request needs that outlives the request: settings, the
# database engine and session factory, the outbound HTTP client and the
# storage client. Built once in the FastAPI lifespan, stored on
# app.state.context, torn down on shutdown.
#
# Usage:
#   context = AppContext.create(settings)
#   ...
#   await context.close()
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from app.config import Settings
from core.services.auth_service import warm_dummy_hash
from core.services.link_preview_service import LinkPreviewService
from core.services.storage_service import StorageService
from lib.database import create_db_engine, create_session_factory, init_db
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    http_client: httpx.AsyncClient
    storage: StorageService
    link_preview: LinkPreviewService

    @classmethod
    def create(cls, settings: Settings) -> "AppContext":
        """Build the context and make sure the schema exists."""
        engine = create_db_engine(
            settings.DATABASE_URL,
            connect_timeout=settings.DATABASE_CONNECT_TIMEOUT,
            echo=settings.DATABASE_ECHO,
        )
        init_db(engine)
        warm_dummy_hash(settings.BCRYPT_ROUNDS)

        http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.OUTBOUND_TIMEOUT_SECONDS),
            follow_redirects=False,
        )

        storage = StorageService(
            client=SupabaseClient(
                settings.SUPABASE_URL,
                settings.SUPABASE_SERVICE_KEY,
                bucket=settings.STORAGE_BUCKET,
            ),
            allowed_extensions=settings.allowed_image_extensions_list,
            max_bytes=settings.max_upload_size_bytes,
        )

        if not settings.storage_configured:
            logger.warning("Image storage is not configured; /upload-image will fail")

        return cls(
            settings=settings,
            engine=engine,
            session_factory=create_session_factory(engine),
            http_client=http_client,
            storage=storage,
            link_preview=LinkPreviewService(http_client, max_bytes=settings.FETCH_URL_MAX_BYTES),
        )

    async def close(self) -> None:
        await self.http_client.aclose()
        self.engine.dispose()
