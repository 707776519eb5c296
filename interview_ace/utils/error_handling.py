"""
Error handling utilities and decorators for consistent error management across services.
"""

import asyncio
import functools
from typing import Callable, Tuple, Type

from interview_ace.exceptions import ServiceUnavailableError
from interview_ace.utils.logger import get_logger

logger = get_logger(__name__)


def with_async_retry(
    max_retries: int = 2,
    delay: float = 1.0,
    backoff_factor: float = 2.0,
    retry_on: Tuple[Type[Exception], ...] = (ServiceUnavailableError,)
):
    """Retry a coroutine with exponential backoff on transient failures."""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except retry_on as e:
                    if attempt >= max_retries:
                        logger.error(f"All {max_retries + 1} attempts failed for {func.__name__}")
                        raise
                    delay_time = delay * (backoff_factor ** attempt)
                    logger.warning(
                        f"Attempt {attempt + 1} failed for {func.__name__}: {e}. Retrying in {delay_time:.2f}s..."
                    )
                    await asyncio.sleep(delay_time)
        return wrapper
    return decorator
