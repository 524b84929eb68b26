# docuvoice/errors.py
"""
Application error taxonomy.

Services raise these; the handlers registered in ``main.py`` turn them into the
``{"error": ..., "details": ...}`` JSON envelope with the matching status code.
"""
from typing import Any, Dict, Optional


class DocuVoiceError(Exception):
    status_code = 500
    default_message = "Internal server error"
    redact_details = False

    def __init__(self, message: Optional[str] = None, details: Any = None, **payload):
        self.message = message or self.default_message
        self.details = details
        self.payload = payload
        super().__init__(self.message)

    def to_dict(self, expose_details: bool = True) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None and expose_details:
            body["details"] = self.details
        body.update(self.payload)
        return body


class ValidationError(DocuVoiceError):
    status_code = 400
    default_message = "Invalid request"


class UnauthorizedError(DocuVoiceError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(DocuVoiceError):
    """Entity is absent or belongs to another user."""
    status_code = 404
    default_message = "Not found"


class ExtractionError(DocuVoiceError):
    status_code = 422
    default_message = "Failed to extract text"

    def __init__(self, message: Optional[str] = None, details: Any = None, **payload):
        payload.setdefault("fallback", True)
        super().__init__(message, details, **payload)


class StorageError(DocuVoiceError):
    """Database unreachable or query failed. Details are redacted outside development."""
    status_code = 500
    default_message = "Database operation failed"
    redact_details = True


class AIProviderError(DocuVoiceError):
    status_code = 500
    default_message = "Failed to process your request with the AI provider. Please try again."


class AIKeyMissingError(AIProviderError):
    default_message = "Google AI API key not configured. Please check your environment variables."


class AIPermissionDeniedError(AIProviderError):
    default_message = "Google AI API access denied. Check API key permissions."


class AIQuotaExceededError(AIProviderError):
    default_message = "Google AI API quota exceeded. Please try again later."


class ParseError(DocuVoiceError):
    status_code = 500
    default_message = "Failed to parse questions from AI response"


__all__ = [
    "DocuVoiceError",
    "ValidationError",
    "UnauthorizedError",
    "NotFoundError",
    "ExtractionError",
    "StorageError",
    "AIProviderError",
    "AIKeyMissingError",
    "AIPermissionDeniedError",
    "AIQuotaExceededError",
    "ParseError",
]
