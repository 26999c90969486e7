"""
Custom Exceptions for the HR workflow service

This module defines the exception classes raised at the HTTP boundary.
Services report failures through ``ServiceResult``; the API layer turns a
failed result into one of these exceptions and the global handlers render
it as the standard response envelope.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"
    CONFLICT = "CONFLICT"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        errors: Optional[List[Dict[str, Any]]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.errors = errors or []
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the response envelope"""
        body: Dict[str, Any] = {"success": False, "message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation error",
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message, ErrorCode.VALIDATION_ERROR, errors, 400)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        message: Optional[str] = None
    ):
        super().__init__(message or f"{resource_type} not found", ErrorCode.RESOURCE_NOT_FOUND, None, 404)


class AuthenticationError(BaseAppException):
    """Exception raised for missing, invalid or expired credentials"""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, ErrorCode.AUTHENTICATION_FAILED, None, 401)


class AuthorizationError(BaseAppException):
    """Exception raised when the actor is not allowed to perform an action"""

    def __init__(self, message: str = "Not authorized to perform this action"):
        super().__init__(message, ErrorCode.AUTHORIZATION_FAILED, None, 403)


class ConflictError(BaseAppException):
    """Exception raised when an operation conflicts with the current state"""

    def __init__(self, message: str = "Request conflicts with current state"):
        super().__init__(message, ErrorCode.CONFLICT, None, 409)


class ExternalServiceError(BaseAppException):
    """Exception raised when a collaborating service fails"""

    def __init__(self, message: str = "External service failed"):
        super().__init__(message, ErrorCode.EXTERNAL_SERVICE_ERROR, None, 502)


class RepositoryError(Exception):
    """Raised by repositories when a database operation fails"""


class EntityAlreadyExistsError(RepositoryError):
    """Raised when a unique constraint rejects a write"""


class StorageError(Exception):
    """Raised by object store adapters when a storage call fails"""
