"""Centralized message codes and default messages for API responses."""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel


class MessageCode(str, Enum):
    """Centralized message codes for API responses."""

    # Success codes
    SUCCESS = "success"
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"

    # Authentication & Authorization
    AUTH_REQUIRED = "auth_required"
    INVALID_TOKEN = "invalid_token"
    NOT_AUTHORIZED = "not_authorized"
    ADMIN_REQUIRED = "admin_required"
    ACCOUNT_SUSPENDED = "account_suspended"
    MOCK_AUTH_DISABLED = "mock_auth_disabled"
    GOOGLE_AUTH_UNAVAILABLE = "google_auth_unavailable"
    LOGGED_IN = "logged_in"
    TOKEN_REFRESHED = "token_refreshed"

    # User management
    USER_UPDATED = "user_updated"
    USER_NOT_FOUND = "user_not_found"
    USER_STATUS_UPDATED = "user_status_updated"
    CANNOT_CHANGE_OWN_STATUS = "cannot_change_own_status"

    # Breeder workflow
    APPLICATION_SUBMITTED = "application_submitted"
    APPLICATION_APPROVED = "application_approved"
    APPLICATION_REJECTED = "application_rejected"
    APPLICATION_INFO_REQUESTED = "application_info_requested"
    APPLICATION_NOT_FOUND = "application_not_found"
    DUPLICATE_APPLICATION = "duplicate_application"
    BREEDER_PROFILE_NOT_FOUND = "breeder_profile_not_found"
    BREEDER_PROFILE_REQUIRED = "breeder_profile_required"
    LISTING_CREATED = "listing_created"
    LISTING_UPDATED = "listing_updated"
    LISTING_DELETED = "listing_deleted"
    LISTING_NOT_FOUND = "listing_not_found"
    LISTING_SUBMITTED = "listing_submitted"
    LISTING_ADOPTED = "listing_adopted"
    CONTACT_REVEALED = "contact_revealed"
    PET_NOT_FOUND = "pet_not_found"

    # Catalog
    PET_TYPE_NOT_FOUND = "pet_type_not_found"
    BREED_NOT_FOUND = "breed_not_found"
    CITY_NOT_FOUND = "city_not_found"

    # Favorites
    FAVORITE_ADDED = "favorite_added"
    FAVORITE_REMOVED = "favorite_removed"

    # Payments
    PAYMENT_INITIATED = "payment_initiated"
    PAYMENT_VERIFIED = "payment_verified"
    PAYMENT_NOT_FOUND = "payment_not_found"
    PAYMENT_VERIFICATION_FAILED = "payment_verification_failed"
    FREE_ACTIVATION = "free_activation"
    FREE_SLOT_USED = "free_slot_used"
    GATEWAY_ERROR = "gateway_error"

    # Images
    IMAGE_UPLOADED = "image_uploaded"
    IMAGE_DELETED = "image_deleted"
    FILE_TOO_LARGE = "file_too_large"
    INVALID_FILE_TYPE = "invalid_file_type"
    UPLOAD_FAILED = "upload_failed"

    # Validation errors
    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"
    INVALID_STATE = "invalid_state"

    # Generic errors
    INTERNAL_ERROR = "internal_error"
    BAD_REQUEST = "bad_request"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"


# Default messages for each message code
DEFAULT_MESSAGES = {
    # Success messages
    MessageCode.SUCCESS: "Operation completed successfully",
    MessageCode.CREATED: "Resource created successfully",
    MessageCode.UPDATED: "Resource updated successfully",
    MessageCode.DELETED: "Resource deleted successfully",
    # Authentication & Authorization
    MessageCode.AUTH_REQUIRED: "Authentication required",
    MessageCode.INVALID_TOKEN: "Invalid authentication token",
    MessageCode.NOT_AUTHORIZED: "You are not allowed to perform this action",
    MessageCode.ADMIN_REQUIRED: "Admin access required",
    MessageCode.ACCOUNT_SUSPENDED: "Your account has been suspended.",
    MessageCode.MOCK_AUTH_DISABLED: "Mock login is disabled",
    MessageCode.GOOGLE_AUTH_UNAVAILABLE: "Google sign-in is not available",
    MessageCode.LOGGED_IN: "Logged in successfully",
    MessageCode.TOKEN_REFRESHED: "Token refreshed",
    # User management
    MessageCode.USER_UPDATED: "User updated successfully",
    MessageCode.USER_NOT_FOUND: "User not found",
    MessageCode.USER_STATUS_UPDATED: "User status updated",
    MessageCode.CANNOT_CHANGE_OWN_STATUS: "Cannot change your own status",
    # Breeder workflow
    MessageCode.APPLICATION_SUBMITTED: "Application submitted for review",
    MessageCode.APPLICATION_APPROVED: "Application approved",
    MessageCode.APPLICATION_REJECTED: "Application rejected",
    MessageCode.APPLICATION_INFO_REQUESTED: "More information requested",
    MessageCode.APPLICATION_NOT_FOUND: "Breeder application not found",
    MessageCode.DUPLICATE_APPLICATION: "You already have an open breeder application",
    MessageCode.BREEDER_PROFILE_NOT_FOUND: "Breeder profile not found",
    MessageCode.BREEDER_PROFILE_REQUIRED: "An approved breeder profile is required",
    MessageCode.LISTING_CREATED: "Listing created successfully",
    MessageCode.LISTING_UPDATED: "Listing updated successfully",
    MessageCode.LISTING_DELETED: "Listing deleted successfully",
    MessageCode.LISTING_NOT_FOUND: "Listing not found",
    MessageCode.LISTING_SUBMITTED: "Listing submitted for review",
    MessageCode.LISTING_ADOPTED: "Listing marked as adopted",
    MessageCode.CONTACT_REVEALED: "Owner contact details",
    MessageCode.PET_NOT_FOUND: "Pet not found",
    # Catalog
    MessageCode.PET_TYPE_NOT_FOUND: "Pet type not found",
    MessageCode.BREED_NOT_FOUND: "Breed not found",
    MessageCode.CITY_NOT_FOUND: "City not found",
    # Favorites
    MessageCode.FAVORITE_ADDED: "Added to favorites",
    MessageCode.FAVORITE_REMOVED: "Removed from favorites",
    # Payments
    MessageCode.PAYMENT_INITIATED: "Payment order created",
    MessageCode.PAYMENT_VERIFIED: "Payment verified and listing activated",
    MessageCode.PAYMENT_NOT_FOUND: "Payment not found",
    MessageCode.PAYMENT_VERIFICATION_FAILED: "Payment verification failed",
    MessageCode.FREE_ACTIVATION: "Listing activated on the free tier",
    MessageCode.FREE_SLOT_USED: "Your free listing slot is already in use",
    MessageCode.GATEWAY_ERROR: "Payment gateway error, please retry",
    # Images
    MessageCode.IMAGE_UPLOADED: "Image uploaded",
    MessageCode.IMAGE_DELETED: "Image deleted",
    MessageCode.FILE_TOO_LARGE: "File size too large",
    MessageCode.INVALID_FILE_TYPE: "Invalid file type",
    MessageCode.UPLOAD_FAILED: "Image upload failed, please retry",
    # Validation errors
    MessageCode.VALIDATION_ERROR: "Validation failed",
    MessageCode.INVALID_INPUT: "Invalid input provided",
    MessageCode.INVALID_STATE: "Operation not allowed in the current state",
    # Generic errors
    MessageCode.INTERNAL_ERROR: "Internal server error",
    MessageCode.BAD_REQUEST: "Bad request",
    MessageCode.CONFLICT: "Data integrity constraint violated",
    MessageCode.NOT_FOUND: "Resource not found",
}

T = TypeVar("T")


class PaginationInfo(BaseModel):
    """Common pagination information."""

    total: int
    page: int
    limit: int
    has_more: bool


class Paginated(BaseModel, Generic[T]):
    """Generic paginated response wrapper."""

    items: list[T]
    pagination: PaginationInfo

    @classmethod
    def build(
        cls, items: list[T], total: int, page: int, limit: int
    ) -> "Paginated[T]":
        return cls(
            items=items,
            pagination=PaginationInfo(
                total=total, page=page, limit=limit, has_more=page * limit < total
            ),
        )


class APIResponse(BaseModel, Generic[T]):
    """Base API response model with consistent structure and proper typing."""

    message_code: MessageCode
    message: str
    data: T | None = None

    @classmethod
    def success(
        cls,
        message_code: MessageCode = MessageCode.SUCCESS,
        message: str | None = None,
        data: T | None = None,
    ) -> "APIResponse[T]":
        """Create a success response."""
        return cls(
            message_code=message_code,
            message=message or DEFAULT_MESSAGES.get(message_code, "Success"),
            data=data,
        )


def get_default_message(message_code: MessageCode) -> str:
    """Get default message for a message code."""
    return DEFAULT_MESSAGES.get(message_code, "Operation completed")
