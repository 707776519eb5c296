"""
Custom exception hierarchy for Interview Ace application.
"""

from typing import Dict, Any

class InterviewAceException(Exception):
    """Base exception for Interview Ace application."""
    def __init__(self, message: str, context: Dict[str, Any] = None):
        super().__init__(message)
        self.context = context or {}

class AIServiceError(InterviewAceException):
    """Base exception for AI service errors."""
    pass

class ServiceUnavailableError(AIServiceError):
    """Raised when a service is unavailable."""
    pass

class InvalidResponseError(AIServiceError):
    """Raised when AI response cannot be parsed."""
    pass

class TranscriptionError(AIServiceError):
    """Raised when speech-to-text fails or the audio cannot be understood."""
    pass

class ValidationError(InterviewAceException):
    """Raised when user-supplied input is rejected."""
    pass

class ConfigurationError(InterviewAceException):
    """Raised when there are configuration issues."""
    pass

class SessionNotFoundError(InterviewAceException):
    """Raised when an interview session does not exist."""
    pass

class InvalidStageTransitionError(InterviewAceException):
    """Raised when an operation is not allowed in the session's current stage."""
    pass
