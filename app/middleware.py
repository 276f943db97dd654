# =============================================================================
# app/middleware.py - Error Middleware
# =============================================================================
# Catch-all for failures no exception handler turned into a response.
# Guarantees every request gets a JSON answer instead of a dropped
# connection or a bare text 500.
# =============================================================================

import logging
import traceback

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.config import settings

logger = logging.getLogger(__name__)


def resolve_status_code(exc: Exception) -> int:
    """
    Pick the response status for an unhandled exception.

    Reuses an error status the exception already carries, otherwise 500.
    """
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int) and 400 <= status_code < 600:
        return status_code
    return 500


class ErrorMiddleware(BaseHTTPMiddleware):
    """
    Convert unhandled exceptions into JSON error responses.

    Body:
        {"message": "...", "code": "INTERNAL_ERROR", "stack": "..."}

    "stack" is omitted in production.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")

            content = {
                "message": str(exc) or exc.__class__.__name__,
                "code": "INTERNAL_ERROR",
            }
            if not settings.is_production:
                content["stack"] = "".join(traceback.format_exception(exc))

            return JSONResponse(status_code=resolve_status_code(exc), content=content)
