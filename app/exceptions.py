# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors carry a machine-readable code and, where possible, a suggestion
# telling the caller how to fix the request.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import settings

logger = logging.getLogger(__name__)


class RestaurantAPIException(Exception):
    """
    Base exception for the Restaurant Inventory API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "RESTAURANT_API_ERROR",
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

    def to_dict(self, include_details: bool = True) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details and include_details:
            result["details"] = self.details
        return result


# =============================================================================
# Business Profile Exceptions
# =============================================================================

class BusinessProfileNotFoundError(RestaurantAPIException):
    """Raised when a user has no business profile, or an id doesn't exist."""

    def __init__(self, reference: str):
        super().__init__(
            message=f"Business profile not found: {reference}",
            code="BUSINESS_PROFILE_NOT_FOUND",
            status_code=404,
            suggestion="Create a business profile first using POST /business-profile",
            details={"reference": reference},
        )


class BusinessProfileAccessDeniedError(RestaurantAPIException):
    """Raised when a user is not a member of the requested business profile."""

    def __init__(self, business_profile_id: str):
        super().__init__(
            message="You do not have access to this business profile",
            code="BUSINESS_PROFILE_ACCESS_DENIED",
            status_code=403,
            suggestion="Ask the profile owner to add you as a member",
            details={"business_profile_id": business_profile_id},
        )


class InsufficientRoleError(RestaurantAPIException):
    """Raised when a member's role doesn't allow an action (e.g. staff managing the team)."""

    def __init__(self, business_profile_id: str, role: str, action: str):
        super().__init__(
            message=f"A {role} cannot {action}",
            code="INSUFFICIENT_ROLE",
            status_code=403,
            suggestion="Ask an owner of the business profile to do this",
            details={"business_profile_id": business_profile_id, "role": role},
        )


class MemberLimitReachedError(RestaurantAPIException):
    """Raised when adding a member would exceed the plan's max_users."""

    def __init__(self, business_profile_id: str, max_users: int):
        super().__init__(
            message=f"Business profile already has the maximum of {max_users} users",
            code="MEMBER_LIMIT_REACHED",
            status_code=409,
            suggestion="Remove a member or upgrade the subscription plan",
            details={"business_profile_id": business_profile_id, "max_users": max_users},
        )


class LastOwnerError(RestaurantAPIException):
    """Raised when removing or demoting the only active owner of a profile."""

    def __init__(self, business_profile_id: str, user_id: str):
        super().__init__(
            message="A business profile must keep at least one owner",
            code="LAST_OWNER",
            status_code=409,
            suggestion="Make another member an owner first",
            details={"business_profile_id": business_profile_id, "user_id": user_id},
        )


# =============================================================================
# Record Exceptions
# =============================================================================

class RecordNotFoundError(RestaurantAPIException):
    """Raised when an inventory item, supplier, dish, etc. doesn't exist."""

    def __init__(self, resource: str, record_id: str):
        super().__init__(
            message=f"{resource.replace('_', ' ').capitalize()} not found: {record_id}",
            code=f"{resource.upper()}_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {resource} id is correct and belongs to your business profile",
            details={"id": record_id},
        )


class DuplicateRecordError(RestaurantAPIException):
    """Raised when a record with the same name already exists (e.g. a note tag)."""

    def __init__(self, resource: str, name: str):
        super().__init__(
            message=f"{resource.replace('_', ' ').capitalize()} already exists: {name}",
            code=f"{resource.upper()}_EXISTS",
            status_code=409,
            suggestion=f"Use the existing {resource.replace('_', ' ')} or pick another name",
            details={"name": name},
        )


class DishHasSalesError(RestaurantAPIException):
    """Raised when deleting a dish that recorded sales still reference."""

    def __init__(self, dish_id: str):
        super().__init__(
            message=f"Dish has recorded sales and cannot be deleted: {dish_id}",
            code="DISH_HAS_SALES",
            status_code=409,
            suggestion="Archive the dish instead using POST /dishes/{id}/archive",
            details={"dish_id": dish_id},
        )


class PlanNotFoundError(RestaurantAPIException):
    """Raised when a subscription plan id doesn't exist."""

    def __init__(self, plan_id: str):
        super().__init__(
            message=f"Subscription plan not found: {plan_id}",
            code="PLAN_NOT_FOUND",
            status_code=404,
            suggestion="List available plans using GET /billing/plans",
            details={"plan_id": plan_id},
        )


# =============================================================================
# Image Proxy Exceptions
# =============================================================================

class InvalidImageUrlError(RestaurantAPIException):
    """Raised when the proxy is asked for a non-http(s) or disallowed URL."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            message=f"Invalid image URL: {reason}",
            code="INVALID_IMAGE_URL",
            status_code=400,
            suggestion="Pass an absolute http(s) URL from an allowed host",
            details={"url": url},
        )


class ImageFetchError(RestaurantAPIException):
    """Raised when the upstream image cannot be fetched."""

    def __init__(self, url: str, error: str, status_code: int = 500):
        super().__init__(
            message=f"Failed to fetch image: {error}",
            code="IMAGE_FETCH_FAILED",
            status_code=status_code,
            details={"url": url, "error": error},
        )


# =============================================================================
# Export Exceptions
# =============================================================================

class UnsupportedExportFormatError(RestaurantAPIException):
    """Raised when an export is requested in an unknown format."""

    def __init__(self, export_format: str, allowed: list[str]):
        super().__init__(
            message=f"Unsupported export format: {export_format}",
            code="UNSUPPORTED_EXPORT_FORMAT",
            status_code=400,
            suggestion=f"Use one of: {', '.join(allowed)}",
            details={"format": export_format, "allowed_formats": allowed},
        )


# =============================================================================
# Downstream Exceptions
# =============================================================================

class DatabaseOperationError(RestaurantAPIException):
    """Raised when a call to the backing store fails."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=f"Failed to {operation}",
            code="DATABASE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"operation": operation, "error": error},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def restaurant_api_exception_handler(
    request: Request,
    exc: RestaurantAPIException
) -> JSONResponse:
    """
    Convert RestaurantAPIException to JSON response.

    Server-side failures only relay their details in debug mode.
    """
    include_details = exc.status_code < 500 or settings.DEBUG
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.details}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(include_details=include_details)
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Missing or malformed fields are a client error (400).
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    missing = [e["field"] for e in errors if e["type"] == "missing"]
    detail = f"Missing required fields: {', '.join(missing)}" if missing else "Validation error"

    return JSONResponse(
        status_code=400,
        content={
            "detail": detail,
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
