"""Grievance services."""
from app.services.grievance.grievance_service import GrievanceService

__all__ = ["GrievanceService"]
