"""Leave schemas."""
from app.schemas.leave.leave_application import (
    LeaveApplyRequest,
    LeaveDecisionRequest,
    LeaveListData,
    LeaveResponse,
)

__all__ = [
    "LeaveApplyRequest",
    "LeaveDecisionRequest",
    "LeaveResponse",
    "LeaveListData",
]
