"""Grievance repositories."""
from app.repositories.grievance.grievance_repository import GrievanceFilter, GrievanceRepository

__all__ = ["GrievanceFilter", "GrievanceRepository"]
