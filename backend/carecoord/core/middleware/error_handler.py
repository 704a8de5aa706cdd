import time
import uuid
import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = structlog.get_logger("request_logger")

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred while handling the medication request"


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID") or ""


class GlobalExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """
    Last line of defence for anything the exception handlers did not render.

    Runs inside RequestLogMiddleware, so the request id is already bound.
    Unhandled errors become a 500 in the same envelope as every other
    error, with the request id in details.
    """
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "uncaught_exception",
                error=str(exc),
                error_type=type(exc).__name__,
                method=request.method,
                path=request.url.path,
                duration_s=time.time() - start_time,
                exc_info=True
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error": {
                        "code": 500,
                        "slug": "internal_error",
                        "message": INTERNAL_ERROR_MESSAGE,
                        "details": {"request_id": _request_id(request)}
                    }
                }
            )

        if response.status_code >= 400:
            logger.warning(
                "request_failed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_s=time.time() - start_time
            )
        return response


class RequestLogMiddleware(BaseHTTPMiddleware):
    """
    Assigns the request id (caller's X-Request-ID or a fresh uuid), binds it
    for structlog and echoes it on the response.
    """
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        return response
