from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from interview_ace.config import get_settings
from interview_ace.utils.logger import get_logger
import uuid

logger = get_logger(__name__)

# Responses under these prefixes must not be cached
SENSITIVE_PATHS = ("/api/v1/sessions",)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers and a request ID to all responses."""

    def __init__(self, app):
        super().__init__(app)
        self.settings = get_settings()

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)

        if self.settings.SECURITY_HEADERS_ENABLED:
            self._add_security_headers(request, response)

        response.headers["X-Request-ID"] = request_id
        return response

    def _add_security_headers(self, request: Request, response: Response):
        for header, value in self.settings.security_headers.items():
            response.headers[header] = value

        if request.url.path.startswith("/api/"):
            response.headers["API-Version"] = "v1"

        if self._is_sensitive_endpoint(request.url.path):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, private"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"

        logger.debug(f"Security headers added to response for {request.url.path}")

    def _is_sensitive_endpoint(self, path: str) -> bool:
        return any(path.startswith(sensitive) for sensitive in SENSITIVE_PATHS)
