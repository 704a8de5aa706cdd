from fastapi import APIRouter
from carecoord.api.endpoints import medications

"""
API router aggregator.
Every sub-router is mounted here and the result under settings.API_PREFIX.
"""
api_router = APIRouter()
api_router.include_router(medications.router, prefix="/medications", tags=["medications"])
