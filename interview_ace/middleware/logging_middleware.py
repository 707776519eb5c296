"""
Request/response logging middleware.
"""

import time
from fastapi import Request
from interview_ace.utils.logger import get_logger

logger = get_logger(__name__)

async def log_requests(request: Request, call_next):
    """Log each request with its status code and duration."""
    start_time = time.time()

    logger.info(f"Request: {request.method} {request.url.path}")
    logger.debug(f"Headers: {dict(request.headers)}")

    # Request bodies are never logged
    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(f"Response: {response.status_code} - {process_time:.3f}s")
    response.headers["X-Process-Time"] = f"{process_time:.3f}"

    return response
