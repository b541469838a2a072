# =============================================================================
# tests/test_media.py - Image Upload Tests
# =============================================================================
# Tests for StorageService and POST /api/upload-image.
# Supabase is never contacted: the storage client is a mock.
#
# Run with: pytest tests/test_media.py -v
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from app.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    UpstreamError,
    ValidationFailedError,
)
from core.services.storage_service import StorageService
from lib.supabase_client import SupabaseClient, SupabaseClientError

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
PUBLIC_URL = "https://xyz.supabase.co/storage/v1/object/public/portfolio-images/images/abc.png"


@pytest.fixture
def storage_client():
    client = MagicMock(spec=SupabaseClient)
    client.upload.return_value = PUBLIC_URL
    return client


@pytest.fixture
def storage(storage_client):
    return StorageService(storage_client, allowed_extensions=[".png", ".jpg"], max_bytes=1024)


# =============================================================================
# Service Tests
# =============================================================================

class TestValidateImage:
    """Tests for StorageService.validate_image."""

    def test_returns_lowercase_extension(self, storage):
        assert storage.validate_image("Photo.PNG", 10) == ".png"

    @pytest.mark.parametrize("filename", ["malware.exe", "noextension", "", "image.png.exe"])
    def test_rejects_extension(self, storage, filename):
        with pytest.raises(InvalidFileTypeError) as exc_info:
            storage.validate_image(filename, 10)

        assert exc_info.value.status_code == 400

    def test_rejects_oversize(self, storage):
        with pytest.raises(FileTooLargeError) as exc_info:
            storage.validate_image("big.png", 1025)

        assert exc_info.value.status_code == 413

    def test_rejects_empty(self, storage):
        with pytest.raises(ValidationFailedError):
            storage.validate_image("empty.png", 0)


class TestUploadImage:
    """Tests for StorageService.upload_image."""

    def test_stores_under_random_name(self, storage, storage_client):
        url = storage.upload_image("My Photo.png", PNG_BYTES, "image/png")

        assert url == PUBLIC_URL
        path, content, content_type = storage_client.upload.call_args.args
        assert path.startswith("images/")
        assert path.endswith(".png")
        assert "My Photo" not in path
        assert content == PNG_BYTES
        assert content_type == "image/png"

    def test_guesses_content_type(self, storage, storage_client):
        storage.upload_image("cat.jpg", PNG_BYTES, "application/octet-stream")

        assert storage_client.upload.call_args.args[2] == "image/jpeg"

    def test_rejected_file_never_uploaded(self, storage, storage_client):
        with pytest.raises(InvalidFileTypeError):
            storage.upload_image("notes.txt", b"hello", "text/plain")

        storage_client.upload.assert_not_called()

    def test_storage_failure_is_upstream_error(self, storage, storage_client):
        storage_client.upload.side_effect = SupabaseClientError("bucket missing", code="UPLOAD_FAILED")

        with pytest.raises(UpstreamError) as exc_info:
            storage.upload_image("cat.png", PNG_BYTES, "image/png")

        assert exc_info.value.status_code == 502


class TestSupabaseClient:
    """Tests for the storage wrapper itself."""

    def test_unconfigured_client_raises(self):
        client = SupabaseClient(None, None)

        assert client.configured is False
        with pytest.raises(SupabaseClientError) as exc_info:
            client.get_client()

        assert exc_info.value.code == "STORAGE_NOT_CONFIGURED"

    def test_upload_returns_public_url(self):
        bucket = MagicMock()
        bucket.get_public_url.return_value = PUBLIC_URL + "?"
        fake = MagicMock()
        fake.storage.from_.return_value = bucket

        with patch("lib.supabase_client.create_client", return_value=fake):
            client = SupabaseClient("https://xyz.supabase.co", "service-key", bucket="portfolio-images")
            url = client.upload("images/abc.png", PNG_BYTES, "image/png")

        assert url == PUBLIC_URL
        fake.storage.from_.assert_called_once_with("portfolio-images")
        assert bucket.upload.call_args.kwargs["path"] == "images/abc.png"


# =============================================================================
# API Tests
# =============================================================================

class TestUploadImageApi:
    """Tests for POST /api/upload-image."""

    def test_upload(self, admin_client, context):
        with patch.object(context.storage.client, "upload", return_value=PUBLIC_URL) as upload:
            response = admin_client.post(
                "/api/upload-image",
                files={"image": ("cat.png", PNG_BYTES, "image/png")},
            )

        assert response.status_code == 200
        assert response.json() == {"success": 1, "file": {"url": PUBLIC_URL}}
        upload.assert_called_once()

    def test_wrong_type(self, admin_client):
        response = admin_client.post(
            "/api/upload-image",
            files={"image": ("script.exe", b"MZ", "application/octet-stream")},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_FILE_TYPE"

    def test_storage_not_configured(self, admin_client):
        response = admin_client.post(
            "/api/upload-image",
            files={"image": ("cat.png", PNG_BYTES, "image/png")},
        )

        assert response.status_code == 502
        assert response.json()["code"] == "UPSTREAM_ERROR"

    def test_requires_session(self, client):
        response = client.post(
            "/api/upload-image",
            files={"image": ("cat.png", PNG_BYTES, "image/png")},
        )

        assert response.status_code == 401
