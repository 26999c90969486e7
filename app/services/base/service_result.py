"""
Service result patterns for standardized response handling.
"""

from typing import TypeVar, Generic, Optional, Any, Dict
from dataclasses import dataclass
from enum import Enum
from datetime import datetime, timezone

from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BaseAppException,
    ConflictError,
    ExternalServiceError,
    ResourceNotFoundError,
    ValidationError,
)


class ErrorCode(str, Enum):
    """Standard error codes for service operations."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    """Represents a service operation error with context."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Optional[Dict[str, Any]] = None
    field: Optional[str] = None
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        """Set timestamp if not provided."""
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc)

    def to_exception(self) -> BaseAppException:
        """Translate the error into the HTTP-facing exception of the same kind."""
        if self.code == ErrorCode.VALIDATION_ERROR:
            errors = [{"field": self.field, "message": self.message}] if self.field else None
            return ValidationError(self.message, errors)
        if self.code == ErrorCode.NOT_FOUND:
            return ResourceNotFoundError(message=self.message)
        if self.code == ErrorCode.FORBIDDEN:
            return AuthorizationError(self.message)
        if self.code == ErrorCode.CONFLICT:
            return ConflictError(self.message)
        if self.code == ErrorCode.UNAUTHORIZED:
            return AuthenticationError(self.message)
        if self.code == ErrorCode.EXTERNAL_SERVICE_ERROR:
            return ExternalServiceError(self.message)
        return BaseAppException("Internal server error")


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Standardized service operation result with success/failure pattern.

    Attributes:
        is_success: Operation success indicator
        data: Result data (if successful)
        error: Error information (if failed)
        message: Human-readable status message
        metadata: Additional context information
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success(
        cls,
        data: Optional[TData] = None,
        message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a successful result."""
        return cls(
            is_success=True,
            data=data,
            message=message,
            metadata=metadata or {},
        )

    @classmethod
    def failure(
        cls,
        error: ServiceError,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a failed result."""
        return cls(
            is_success=False,
            error=error,
            message=error.message,
            metadata=metadata or {},
        )

    @classmethod
    def validation_failure(
        cls,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a validation failure result."""
        return cls.failure(
            ServiceError(
                code=ErrorCode.VALIDATION_ERROR,
                message=message,
                severity=ErrorSeverity.WARNING,
                field=field,
                details=details,
            )
        )

    @classmethod
    def not_found(
        cls,
        resource_type: str,
        resource_id: Optional[str] = None,
    ) -> "ServiceResult[TData]":
        """Create a not found failure result."""
        return cls.failure(
            ServiceError(
                code=ErrorCode.NOT_FOUND,
                message=f"{resource_type} not found",
                severity=ErrorSeverity.WARNING,
                details={"resource_type": resource_type, "resource_id": resource_id},
            )
        )

    @classmethod
    def forbidden(cls, message: str) -> "ServiceResult[TData]":
        """Create an authorization denial result."""
        return cls.failure(
            ServiceError(
                code=ErrorCode.FORBIDDEN,
                message=message,
                severity=ErrorSeverity.WARNING,
            )
        )

    @classmethod
    def unauthorized(cls, message: str = "Invalid credentials") -> "ServiceResult[TData]":
        """Create an authentication failure result."""
        return cls.failure(
            ServiceError(
                code=ErrorCode.UNAUTHORIZED,
                message=message,
                severity=ErrorSeverity.WARNING,
            )
        )

    @classmethod
    def conflict(
        cls,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a conflict failure result."""
        return cls.failure(
            ServiceError(
                code=ErrorCode.CONFLICT,
                message=message,
                severity=ErrorSeverity.WARNING,
                details=details,
            )
        )

    @classmethod
    def external_failure(cls, message: str) -> "ServiceResult[TData]":
        """Create a failure result for a collaborating service error."""
        return cls.failure(
            ServiceError(
                code=ErrorCode.EXTERNAL_SERVICE_ERROR,
                message=message,
                severity=ErrorSeverity.ERROR,
            )
        )

    def unwrap(self) -> TData:
        """
        Unwrap the result data or raise the matching application exception.

        Raises:
            BaseAppException: If the result is not successful
        """
        if not self.is_success:
            raise self.error.to_exception()
        return self.data

    def __bool__(self) -> bool:
        """Allow boolean evaluation of the result."""
        return self.is_success

    def __repr__(self) -> str:
        """String representation of the result."""
        status = "Success" if self.is_success else "Failure"
        if self.message:
            return f"ServiceResult({status}: {self.message})"
        return f"ServiceResult({status})"


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
