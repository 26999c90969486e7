"""
Base services module.

Provides the foundational service layer components:
- ServiceResult / ServiceError result handling
- BaseService with transaction management and error mapping
"""

from app.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)

from app.services.base.base_service import BaseService


__all__ = [
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    "ErrorSeverity",
    "BaseService",
]
