"""
Custom Exception Classes for the Notifications API

This module defines custom exceptions for consistent error responses
across the consent and subscription endpoints.
"""

import enum
from typing import Any

from fastapi import status


class ErrorCode(str, enum.Enum):
    """Machine-readable error codes returned to API clients."""

    AUTH_FAILED = "AUTH_FAILED"
    AUTH_TOKEN_EXPIRED = "AUTH_TOKEN_EXPIRED"
    AUTH_TOKEN_INVALID = "AUTH_TOKEN_INVALID"
    AUTH_PERMISSION_DENIED = "AUTH_PERMISSION_DENIED"
    CONSENT_INVALID_CREDENTIAL = "CONSENT_INVALID_CREDENTIAL"
    CONSENT_REQUIRED = "CONSENT_REQUIRED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_PERSON_NOT_FOUND = "RESOURCE_PERSON_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    SERVICE_EMAIL_FAILED = "SERVICE_EMAIL_FAILED"
    SERVICE_MARKETING_FAILED = "SERVICE_MARKETING_FAILED"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class NotificationsError(Exception):
    """Base exception class for all notification-related exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code
        super().__init__(self.message)


# ============================================================================
# Authentication Exceptions
# ============================================================================


class AuthenticationError(NotificationsError):
    """Raised when authentication fails"""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: ErrorCode = ErrorCode.AUTH_FAILED,
    ):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED, error_code=error_code)


class TokenExpiredError(AuthenticationError):
    """Raised when the access token has expired"""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message=message, error_code=ErrorCode.AUTH_TOKEN_EXPIRED)


class InvalidTokenError(AuthenticationError):
    """Raised when the access token is invalid"""

    def __init__(self, message: str = "Invalid or malformed token"):
        super().__init__(message=message, error_code=ErrorCode.AUTH_TOKEN_INVALID)


# ============================================================================
# Consent Exceptions
# ============================================================================


class InvalidCredentialError(NotificationsError):
    """Raised when an email/hash pair matches no person or pending consent"""

    def __init__(self, message: str = "Invalid hash/email"):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.CONSENT_INVALID_CREDENTIAL,
        )


class ConsentRequiredError(NotificationsError):
    """Raised when an authenticated subscription arrives without explicit consent"""

    def __init__(self, message: str = "Notification consent should be provided"):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.CONSENT_REQUIRED,
        )


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(NotificationsError):
    """Base class for resource not found errors"""

    def __init__(
        self,
        resource_type: str,
        resource_id: Any | None = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
    ):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
            error_code=error_code,
        )


class PersonNotFoundError(ResourceNotFoundError):
    """Raised when the authenticated identity has no person record"""

    def __init__(self, person_id: Any | None = None):
        super().__init__(
            resource_type="Person",
            resource_id=person_id,
            error_code=ErrorCode.RESOURCE_PERSON_NOT_FOUND,
        )


# ============================================================================
# Collaborator Exceptions
# ============================================================================


class ServiceError(NotificationsError):
    """Raised when a service layer operation fails"""

    def __init__(
        self,
        message: str,
        service: str | None = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    ):
        details = {"service": service} if service else {}
        super().__init__(message=message, status_code=status_code, details=details, error_code=error_code)


class EmailDeliveryError(ServiceError):
    """Raised when a templated email could not be delivered"""

    def __init__(self, message: str = "Failed to send email"):
        super().__init__(message=message, service="email", error_code=ErrorCode.SERVICE_EMAIL_FAILED)


class MarketingProviderError(ServiceError):
    """Raised when the marketing list provider rejects or fails a request"""

    def __init__(self, message: str = "Marketing provider request failed", provider: str = "sendgrid"):
        super().__init__(
            message=message,
            service=provider,
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_code=ErrorCode.SERVICE_MARKETING_FAILED,
        )
