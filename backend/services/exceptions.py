"""Exceptions raised by the chat pipeline.

Each exception carries the HTTP status and error code the API layer uses
when rendering it, so handlers never leak stack traces to callers.
"""
from typing import Optional


class ChatGatewayError(Exception):
    """Base exception for all gateway errors."""
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to the error body returned by the API."""
        return {"error": self.message}


class ValidationError(ChatGatewayError):
    """Raised when a chat request is missing required fields."""
    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details=f"field={field}" if field else None)
        self.field = field


class ConfigurationError(ChatGatewayError):
    """Raised when a required external-service setting is missing."""
    status_code = 500
    error_code = "configuration_error"


class PersistenceError(ChatGatewayError):
    """Raised when the history store cannot be read or written."""
    status_code = 500
    error_code = "persistence_error"
