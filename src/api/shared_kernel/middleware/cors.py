"""Permissive CORS handling for browser callers.

The provisioning functions are called directly from the LMS single-page
application, so every response carries the same permissive CORS headers
and pre-flight requests are answered without reaching any route.
"""

from __future__ import annotations

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

logger = structlog.get_logger()


class PermissiveCORSMiddleware(BaseHTTPMiddleware):
    """Answer OPTIONS with `ok` and stamp CORS headers on every response.

    Exceptions that escape the application are rendered here as a 500
    `{"error": "Server error"}` body, so even those responses reach the
    browser with CORS headers.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            return PlainTextResponse("ok", headers=CORS_HEADERS)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "unhandled_request_error",
                path=request.url.path,
                method=request.method,
                error=str(e),
                exc_info=e,
            )
            return JSONResponse(
                {"error": "Server error"}, status_code=500, headers=CORS_HEADERS
            )

        response.headers.update(CORS_HEADERS)
        return response
