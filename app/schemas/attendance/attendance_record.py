"""
Attendance record schemas.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional, Union

from pydantic import Field

from app.models.base.enums import AttendanceStatus
from app.schemas.common.base import BaseDBSchema, BaseSchema
from app.schemas.user.user import UserSummary

__all__ = ["AttendanceMarkRequest", "AttendanceResponse", "AttendanceListData"]


class AttendanceMarkRequest(BaseSchema):
    """
    Mark attendance for a day.

    ``date`` accepts a date or a datetime; any time-of-day part is dropped.
    Defaults to today when omitted.
    """

    status: AttendanceStatus
    date: Optional[Union[dt.datetime, dt.date]] = None
    remarks: Optional[str] = Field(default=None, max_length=500)


class AttendanceResponse(BaseDBSchema):
    date: dt.date
    status: AttendanceStatus
    remarks: Optional[str] = None
    timestamp: dt.datetime
    user: UserSummary


class AttendanceListData(BaseSchema):
    attendance: List[AttendanceResponse]
    count: int
