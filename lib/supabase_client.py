# =============================================================================
# lib/supabase_client.py - Supabase Storage Wrapper
# =============================================================================
# Thin wrapper around the Supabase client for the one thing this service
# stores outside its own database: uploaded images. Objects go into a public
# bucket and are addressed by their public URL.
#
# One wrapper instance lives on the application context; the underlying
# client is created lazily on first use so the app boots without storage
# credentials (uploads then fail with a clear error).
#
# Usage:
#   client = SupabaseClient(url, key, bucket="portfolio-images")
#   public_url = client.upload("images/abc.png", data, "image/png")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import Client, create_client

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a short code and an actionable suggestion so the service layer
    can log something useful before mapping it to an HTTP error.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Storage operations against a single Supabase bucket.

    Example:
        client = SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        url = client.upload("images/photo.jpg", data, "image/jpeg")
    """

    def __init__(self, url: str | None, service_key: str | None, bucket: str = "portfolio-images"):
        self._url = url
        self._service_key = service_key
        self.bucket = bucket
        self._client: Client | None = None

    @property
    def configured(self) -> bool:
        return bool(self._url and self._service_key)

    def get_client(self) -> Client:
        """
        Get or create the Supabase client.

        Uses the service_role key, which bypasses Row Level Security. This is
        appropriate for server-side uploads.

        Raises:
            SupabaseClientError: If storage isn't configured or client creation fails
        """
        if self._client is None:
            if not self.configured:
                raise SupabaseClientError(
                    message="Image storage is not configured",
                    code="STORAGE_NOT_CONFIGURED",
                    suggestion="Set SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
                )
            try:
                self._client = create_client(self._url, self._service_key)
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
                )
        return self._client

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """
        Upload bytes to the bucket and return the object's public URL.

        Args:
            path: Object path inside the bucket
            content: File bytes
            content_type: MIME type stored with the object

        Raises:
            SupabaseClientError: If the upload fails
        """
        client = self.get_client()
        bucket = client.storage.from_(self.bucket)

        try:
            bucket.upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "false"},
            )
            public_url = bucket.get_public_url(path)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upload {path}: {e}",
                code="UPLOAD_FAILED",
                suggestion=f"Check that the '{self.bucket}' bucket exists and is public",
                details={"path": path, "size": len(content)},
            )

        logger.debug(f"Uploaded {len(content)} bytes to {self.bucket}/{path}")
        # Some client versions append a bare "?" to the public URL
        return public_url.rstrip("?")
