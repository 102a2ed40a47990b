"""
API v1 router aggregation
Combines all v1 route handlers into a single router
Reference: https://fastapi.tiangolo.com/tutorial/bigger-applications/
"""
from fastapi import APIRouter

from taskboard.api.v1.routes import health, task


def build_api_router(prefix: str) -> APIRouter:
    """
    Create the v1 router mounted under prefix (API_V1_PREFIX)
    """
    api_router = APIRouter(prefix=prefix)

    # Each route module is added as a sub-router
    api_router.include_router(task.router)
    api_router.include_router(health.router)
    return api_router
