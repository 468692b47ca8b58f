#!/usr/bin/env python3
"""
Error Handling Utilities

This module provides the exception classes raised by the client's collaborators
and a helper for turning them into structured log fields.
"""

import structlog
from typing import Dict, Any, Optional

# Initialize logger
logger = structlog.get_logger(__name__)

class AnalyticsError(Exception):
    """Base class for analytics client errors."""

    def __init__(self, message: str, details: Any = None):
        """
        Initialize analytics error.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        error_dict = {
            "error": self.message,
            "error_type": type(self).__name__
        }

        if self.details:
            error_dict["details"] = self.details

        return error_dict

class StorageError(AnalyticsError):
    """Error reading from or writing to the super properties store."""
    def __init__(self, message: str = "Storage operation failed", details: Any = None):
        super().__init__(message, details=details)

class TransportError(AnalyticsError):
    """Error delivering a request to the collection endpoint."""

    def __init__(self, message: str = "Request failed", status_code: Optional[int] = None, details: Any = None):
        """
        Initialize transport error.

        Args:
            message: Error message
            status_code: HTTP status code, if a response was received
            details: Additional error details
        """
        super().__init__(message, details=details)
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        error_dict = super().to_dict()

        if self.status_code is not None:
            error_dict["status_code"] = self.status_code

        return error_dict

class PayloadError(AnalyticsError):
    """Error serializing a payload for transmission."""
    def __init__(self, message: str = "Payload could not be encoded", details: Any = None):
        super().__init__(message, details=details)

def error_fields(error: BaseException) -> Dict[str, Any]:
    """
    Build structured log fields for an exception.

    Args:
        error: The exception to describe

    Returns:
        Dictionary suitable for passing as keyword arguments to a structlog logger
    """
    if isinstance(error, AnalyticsError):
        return error.to_dict()

    return {
        "error": str(error),
        "error_type": type(error).__name__
    }
