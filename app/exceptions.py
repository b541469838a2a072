# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error the API answers with deliberately is a PortfolioException;
# anything else becomes a generic 500 (see app/main.py).
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class PortfolioException(Exception):
    """
    Base exception for the Portfolio API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "PORTFOLIO_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationFailedError(PortfolioException):
    """Raised when input is well-formed JSON but semantically invalid."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"errors": errors} if errors else None,
        )


class InvalidOrderSetError(PortfolioException):
    """Raised when a reorder request is not a permutation of the collection."""

    def __init__(self, collection: str, missing: list[int], unknown: list[int], duplicates: list[int]):
        super().__init__(
            message=f"Reorder for {collection} must list every existing id exactly once",
            code="INVALID_ORDER_SET",
            status_code=400,
            suggestion="Reload the list and send the complete ordering of its ids",
            details={
                "collection": collection,
                "missing_ids": missing,
                "unknown_ids": unknown,
                "duplicate_ids": duplicates,
            },
        )


class UnsafeUrlError(PortfolioException):
    """Raised when an outbound fetch target is not allowed."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            message=f"Refusing to fetch URL: {reason}",
            code="UNSAFE_URL",
            status_code=400,
            details={"url": url},
        )


# =============================================================================
# Authentication Exceptions
# =============================================================================

class AuthenticationError(PortfolioException):
    """
    Raised for bad credentials and for missing/expired sessions.

    The message never says which part of a login was wrong.
    """

    def __init__(self, message: str = "Authentication required", code: str = "NOT_AUTHENTICATED"):
        super().__init__(
            message=message,
            code=code,
            status_code=401,
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when a username/password pair does not match."""

    def __init__(self):
        super().__init__(message="Invalid username or password", code="INVALID_CREDENTIALS")


# =============================================================================
# Resource Exceptions
# =============================================================================

class NotFoundError(PortfolioException):
    """Raised when an entity id or slug doesn't exist."""

    def __init__(self, entity: str, identifier: int | str):
        super().__init__(
            message=f"{entity} not found: {identifier}",
            code="NOT_FOUND",
            status_code=404,
            details={"entity": entity, "id": str(identifier)},
        )


class ConflictError(PortfolioException):
    """Raised when a write would violate a uniqueness rule."""

    def __init__(self, message: str, field: str, value: str):
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=409,
            details={"field": field, "value": value},
        )


class SetupUnavailableError(PortfolioException):
    """Raised when first-run admin setup is no longer allowed."""

    def __init__(self):
        super().__init__(
            message="Admin setup is not available",
            code="SETUP_UNAVAILABLE",
            status_code=409,
            suggestion="Log in with the existing admin account, or rotate its password with scripts/init_admin.py",
        )


# =============================================================================
# Upload / Upstream Exceptions
# =============================================================================

class InvalidFileTypeError(PortfolioException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed_types": allowed}
        )


class FileTooLargeError(PortfolioException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class UpstreamError(PortfolioException):
    """Raised when image storage or a link preview target fails."""

    def __init__(self, service: str, error: str):
        super().__init__(
            message=f"{service} request failed: {error}",
            code="UPSTREAM_ERROR",
            status_code=502,
            suggestion="Try again later",
            details={"service": service},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def portfolio_exception_handler(
    request: Request,
    exc: PortfolioException
) -> JSONResponse:
    """Convert PortfolioException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body/query validation errors.

    Returns 400 with one entry per offending field.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
            "type": err.get("type", "value_error"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "details": {"errors": errors},
        }
    )
