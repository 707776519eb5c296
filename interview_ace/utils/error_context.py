"""
Error context management utility for better debugging and error handling.
"""

from typing import Dict, Any
from interview_ace.exceptions import InterviewAceException, ServiceUnavailableError, ValidationError

class ErrorContext:
    """Utility for adding context to errors."""

    @staticmethod
    def add_context(error: Exception, context: Dict[str, Any]) -> Exception:
        """Add context information to an error."""
        if isinstance(error, InterviewAceException):
            error.context = {**error.context, **context}
        return error

    @staticmethod
    def create_service_error(service: str, operation: str, original_error: Exception) -> ServiceUnavailableError:
        """Create a service error with context."""
        return ServiceUnavailableError(
            f"{service} {operation} failed: {str(original_error)}",
            context={
                "service": service,
                "operation": operation,
                "original_error": str(original_error)
            }
        )

    @staticmethod
    def create_validation_error(field: str, value: Any, reason: str) -> ValidationError:
        """Create a validation error with context."""
        return ValidationError(
            f"Validation failed for {field}: {reason}",
            context={
                "field": field,
                "value": str(value)[:200],
                "reason": reason
            }
        )
