# =============================================================================
# app/routers/media.py - Editor Media Endpoints
# =============================================================================
# Both endpoints serve the admin editor and answer in the shapes its image
# and link tools expect:
#   POST /upload-image  -> {"success": 1, "file": {"url": ...}}
#   GET  /fetch-url     -> {"success": 1, "link": ..., "meta": {...}}
# =============================================================================

import logging
from typing import Any

from fastapi import APIRouter, Depends, File, Query, UploadFile

from app.auth import require_auth
from app.dependencies import ContextDep

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_auth)])


@router.post("/upload-image")
def upload_image(context: ContextDep, image: UploadFile = File(...)) -> dict[str, Any]:
    """
    Upload an image to storage.

    Raises:
        400: Extension not allowed or empty file
        413: File over MAX_UPLOAD_SIZE_MB
        502: Storage rejected the upload
    """
    storage = context.storage
    filename = image.filename or ""
    if image.size is not None:
        storage.validate_image(filename, image.size)

    # Read one byte past the limit so oversized files fail without reading it all
    content = image.file.read(storage.max_bytes + 1)
    url = storage.upload_image(filename, content, image.content_type)
    return {"success": 1, "file": {"url": url}}


@router.get("/fetch-url")
async def fetch_url(
    context: ContextDep,
    url: str = Query(..., min_length=1, max_length=2048, description="Page to preview"),
) -> dict[str, Any]:
    """
    Link metadata for the editor's link tool.

    The target (and every redirect) must be a public http(s) host; private,
    loopback and link-local targets are refused before any request is made.

    Raises:
        400: Unsafe or malformed URL
        502: The target failed to answer
    """
    return await context.link_preview.preview(url)
