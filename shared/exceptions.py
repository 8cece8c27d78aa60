"""
Custom exceptions for the diagram share service.
"""

from typing import Any


class DiagramShareError(Exception):
    """Base exception for all diagram share errors."""

    def __init__(self, message: str, error_code: str | None = None, details: dict | None = None):
        """
        Initialize exception.

        Args:
            message: Error message
            error_code: Optional error code
            details: Optional error details
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


# Share Errors


class ShareError(DiagramShareError):
    """Storage provider errors."""

    pass


class ShareNotFoundError(ShareError):
    """Share (or a revision of it) not found at the storage provider."""

    def __init__(self, share_id: str, ref: str | None = None):
        """
        Initialize exception.

        Args:
            share_id: Share identifier
            ref: Optional revision the lookup was made at
        """
        details = {"share_id": share_id}
        if ref:
            details["ref"] = ref
            message = f"Share not found: {share_id}@{ref}"
        else:
            message = f"Share not found: {share_id}"
        super().__init__(message, error_code="SHARE_NOT_FOUND", details=details)


# Validation Errors


class ValidationError(DiagramShareError):
    """Validation errors."""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        """
        Initialize exception.

        Args:
            message: Error message
            field: Field name
            value: Field value
        """
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, error_code="VALIDATION_ERROR", details=details)


# Upstream Errors


class ServiceUnavailableError(DiagramShareError):
    """Upstream service unavailable after retries."""

    def __init__(self, message: str = "Upstream service is unavailable"):
        """Initialize exception."""
        super().__init__(message, error_code="SERVICE_UNAVAILABLE")


# Configuration Errors


class ConfigurationError(DiagramShareError):
    """Configuration errors."""

    def __init__(self, message: str, key: str | None = None):
        """
        Initialize exception.

        Args:
            message: Error message
            key: Configuration key
        """
        details = {"key": key} if key else {}
        super().__init__(message, error_code="CONFIGURATION_ERROR", details=details)
