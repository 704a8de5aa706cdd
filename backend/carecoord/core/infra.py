import structlog
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request

from carecoord.clients.rxnav import RxNavClient
from carecoord.core.config import settings

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: one RxNav client (and connection pool) per process,
    closed on shutdown.
    """
    app.state.rxnav_client = RxNavClient()
    logger.info(
        "rxnav_client_started",
        base_url=settings.RXNAV_BASE_URL,
        timeout_s=settings.RXNAV_TIMEOUT_SECONDS,
    )
    try:
        yield
    finally:
        await app.state.rxnav_client.aclose()
        logger.info("rxnav_client_closed")


def get_rxnav_client(request: Request) -> RxNavClient:
    """FastAPI dependency for the process-wide RxNav client"""
    return request.app.state.rxnav_client
