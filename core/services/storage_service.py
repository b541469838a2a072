# =============================================================================
# core/services/storage_service.py - Image Uploads
# =============================================================================
# Validates an uploaded image and hands it to Supabase Storage. The stored
# object gets a random name; the original filename only contributes its
# extension.
# =============================================================================

import logging
import mimetypes
import os
import uuid

from app.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    UpstreamError,
    ValidationFailedError,
)
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

# Folder inside the bucket
IMAGE_PREFIX = "images"


class StorageService:
    """
    Service for image uploads.

    Extension and size are checked before storage is contacted, so a
    rejected file never leaves the server.
    """

    def __init__(self, client: SupabaseClient, allowed_extensions: list[str], max_bytes: int):
        self.client = client
        self.allowed_extensions = allowed_extensions
        self.max_bytes = max_bytes

    def validate_image(self, filename: str, size: int) -> str:
        """
        Check an upload against the configured limits.

        Returns:
            The lowercased extension (e.g. ".png")

        Raises:
            InvalidFileTypeError: Extension not allowed
            FileTooLargeError: Over the size limit
            ValidationFailedError: Empty file
        """
        extension = os.path.splitext(filename or "")[1].lower()
        if extension not in self.allowed_extensions:
            raise InvalidFileTypeError(filename or "(unnamed)", self.allowed_extensions)

        if size == 0:
            raise ValidationFailedError("Uploaded file is empty", errors=[{"field": "file", "message": "File is empty"}])

        if size > self.max_bytes:
            raise FileTooLargeError(size / (1024 * 1024), self.max_bytes // (1024 * 1024))

        return extension

    def upload_image(self, filename: str, content: bytes, content_type: str | None = None) -> str:
        """
        Store an image and return its public URL.

        Args:
            filename: Name the browser sent
            content: File bytes
            content_type: MIME type the browser sent, if any

        Raises:
            InvalidFileTypeError: Extension not allowed
            FileTooLargeError: Over the size limit
            UpstreamError: Storage rejected the upload or isn't configured
        """
        extension = self.validate_image(filename, len(content))

        if not content_type or not content_type.startswith("image/"):
            content_type = mimetypes.types_map.get(extension, "application/octet-stream")

        path = f"{IMAGE_PREFIX}/{uuid.uuid4().hex}{extension}"

        try:
            url = self.client.upload(path, content, content_type)
        except SupabaseClientError as e:
            logger.error(f"Storage upload failed: {e}")
            raise UpstreamError("Image storage", e.message)

        logger.info(f"Uploaded image: {path} ({len(content)} bytes)")
        return url
