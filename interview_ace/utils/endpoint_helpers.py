"""
Endpoint helper utilities for mapping service errors to HTTP responses.
"""

from functools import wraps
from fastapi import HTTPException
from interview_ace.exceptions import (
    InterviewAceException, AIServiceError, ServiceUnavailableError, InvalidResponseError, TranscriptionError,
    ValidationError, ConfigurationError, SessionNotFoundError, InvalidStageTransitionError
)
from interview_ace.utils.logger import get_logger

logger = get_logger(__name__)

# Checked in order, so subclasses come before their parents
ERROR_STATUS_CODES = (
    (ValidationError, 400),
    (SessionNotFoundError, 404),
    (InvalidStageTransitionError, 409),
    (ServiceUnavailableError, 503),
    (ConfigurationError, 503),
    (InvalidResponseError, 502),
    (TranscriptionError, 502),
    (AIServiceError, 502),
)


def status_code_for(error: Exception) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


def to_http_exception(error: Exception, operation_name: str) -> HTTPException:
    status_code = status_code_for(error)
    if status_code >= 500:
        logger.error(f"Error in {operation_name}: {error}")
    else:
        logger.warning(f"Rejected {operation_name}: {error}")

    if isinstance(error, InterviewAceException):
        detail = str(error)
    else:
        detail = f"Error in {operation_name}: {str(error)}"
    return HTTPException(status_code=status_code, detail=detail)


def handle_service_errors(operation_name: str = None):
    """Decorator factory translating service exceptions into HTTP errors."""
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise to_http_exception(e, operation_name or func.__name__) from e
        return wrapper
    return decorator
