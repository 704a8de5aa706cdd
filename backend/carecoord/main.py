import time

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from carecoord.core.config import settings
from carecoord.api.api import api_router
from carecoord.core.logging.setup import setup_logging
from carecoord.core.middleware.error_handler import RequestLogMiddleware, GlobalExceptionHandlerMiddleware
from carecoord.core.exceptions import AppException
from carecoord.core.handlers import (
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
)
from carecoord.core.infra import lifespan

# 1. Global logging
setup_logging()
logger = structlog.get_logger()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan
)

# 2. Middlewares (last added runs first)
# Order: CORS -> RequestLog -> ExceptionHandler -> routes
app.add_middleware(GlobalExceptionHandlerMiddleware)
app.add_middleware(RequestLogMiddleware)

# 3. Specific exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)

# CORS (allow all for the dev client)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/health")
async def health_check():
    """
    Liveness probe for Docker/K8s.
    """
    logger.info("health_check_called", status="ok")
    return {
        "status": "ok",
        "project": settings.PROJECT_NAME,
        "timestamp": time.time()
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
