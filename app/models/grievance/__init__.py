"""Grievance models."""
from app.models.grievance.grievance import Grievance, priority_rank

__all__ = ["Grievance", "priority_rank"]
