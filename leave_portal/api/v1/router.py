"""
API v1 Router - Main Entry Point
Aggregates all v1 endpoints of the leave portal.
"""
from fastapi import APIRouter

from leave_portal.api.v1.endpoints import admin, auth, health, leaves

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"}
    }
)

router.include_router(auth.router)
router.include_router(leaves.router)
router.include_router(admin.router)
router.include_router(health.router)
