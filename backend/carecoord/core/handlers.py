from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from carecoord.core.exceptions import AppException

logger = structlog.get_logger(__name__)

async def app_exception_handler(request: Request, exc: AppException):
    """
    Render application exceptions in the standard error envelope
    """
    logger.warning("app_exception", slug=exc.slug, code=exc.code, path=request.url.path)
    return JSONResponse(
        status_code=exc.code,
        content={
            "error": {
                "code": exc.code,
                "slug": exc.slug,
                "message": exc.msg,
                "details": exc.details
            }
        }
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Pydantic request validation failures (422)
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": {
                "code": 422,
                "slug": "validation_error",
                "message": "Input validation failed",
                "details": {"errors": jsonable_encoder(exc.errors())}
            }
        }
    )

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Built-in HTTP exceptions (404, 405 etc)
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.status_code,
                "slug": "http_error",
                "message": exc.detail,
                "details": {}
            }
        }
    )
