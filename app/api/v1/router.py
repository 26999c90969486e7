"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the HR workflow service
"""
from fastapi import APIRouter

from app.api.v1 import attendance, auth, files, grievances, leaves, tasks, transfers, users
from app.core.logging import get_logger
from app.schemas.common import ErrorResponse

logger = get_logger(__name__)

# Create main API v1 router with proper configuration
router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request"},
        401: {"model": ErrorResponse, "description": "Unauthorized"},
        403: {"model": ErrorResponse, "description": "Forbidden"},
        404: {"model": ErrorResponse, "description": "Not Found"},
        409: {"model": ErrorResponse, "description": "Conflict"},
        502: {"model": ErrorResponse, "description": "Storage Unavailable"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    }
)

router.include_router(auth.router, tags=["Authentication"])
router.include_router(users.router, tags=["User Management"])
router.include_router(tasks.router, tags=["Tasks"])
router.include_router(attendance.router, tags=["Attendance Management"])
router.include_router(leaves.router, tags=["Leave Management"])
router.include_router(transfers.router, tags=["Transfers"])
router.include_router(grievances.router, tags=["Grievances"])
router.include_router(files.router, tags=["File Management"])

logger.debug(f"API v1 router ready with {len(router.routes)} routes")
