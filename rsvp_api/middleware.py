import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from rsvp_api.config import get_settings

CORS_ALLOW_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token,X-Requested-With"


def cors_headers() -> dict[str, str]:
    """Static permissive CORS header set sent on every response."""
    return {
        "Access-Control-Allow-Origin": get_settings().cors.allow_origin,
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        "Access-Control-Allow-Credentials": "true",
    }


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Answers preflight requests and stamps the same CORS headers on every response.

    Unlike Starlette's CORSMiddleware the headers do not depend on an Origin
    request header, so error responses carry them as well.
    """

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=cors_headers())
        response: Response = await call_next(request)
        response.headers.update(cors_headers())
        return response


class HTTPLogMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, logger_name: str = "rsvp_api.http"):
        super().__init__(app)
        self._logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next):
        start = time.time()
        path = request.url.path
        method = request.method
        client = request.client.host if request.client else "-"
        self._logger.debug("http.request start method=%s path=%s client=%s", method, path, client)
        try:
            response: Response = await call_next(request)
            dur_ms = int((time.time() - start) * 1000)
            self._logger.debug("http.request end method=%s path=%s status=%s dur_ms=%s",
                               method, path, response.status_code, dur_ms)
            return response
        except Exception as e:
            dur_ms = int((time.time() - start) * 1000)
            self._logger.warning("http.request error method=%s path=%s dur_ms=%s err=%r",
                                 method, path, dur_ms, e)
            raise
