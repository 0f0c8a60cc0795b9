"""
Custom Exceptions - Application-specific error classes.

This module defines a hierarchy of exceptions for clean error handling:
- Each exception has a status code and error code
- Used by the API layer for consistent error responses
- No stack traces leaked in production
"""
from typing import Optional


class ChatbotException(Exception):
    """
    Base exception for all chatbot errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(ChatbotException):
    """Raised when input validation fails."""
    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details=f"field={field}" if field else None)
        self.field = field


class LLMError(ChatbotException):
    """Raised when every LLM provider failed."""
    status_code = 503
    error_code = "llm_error"

    def __init__(self, message: str = "LLM service unavailable"):
        super().__init__(message)


class StoreUnavailableError(ChatbotException):
    """
    Raised when the survey store cannot read or write.

    Covers disk full, permission denied and remote store outages.
    The operation can be retried.
    """
    status_code = 503
    error_code = "store_unavailable"

    def __init__(self, message: str = "Survey storage is unavailable"):
        super().__init__(message)


class StoreCorruptedError(ChatbotException):
    """Raised when the persisted survey file cannot be decoded."""
    status_code = 500
    error_code = "store_corrupted"

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Survey store file is corrupted: {path}",
            details=reason
        )
        self.path = path
