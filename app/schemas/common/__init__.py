"""Shared schema building blocks."""
from app.schemas.common.base import BaseDBSchema, BaseSchema
from app.schemas.common.response import ErrorDetail, ErrorResponse, MessageResponse, SuccessResponse

__all__ = [
    "BaseSchema",
    "BaseDBSchema",
    "SuccessResponse",
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
]
