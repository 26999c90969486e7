"""Grievance schemas."""
from app.schemas.grievance.grievance import (
    GrievanceCreate,
    GrievanceListData,
    GrievanceRespondRequest,
    GrievanceResponse,
)

__all__ = [
    "GrievanceCreate",
    "GrievanceRespondRequest",
    "GrievanceResponse",
    "GrievanceListData",
]
