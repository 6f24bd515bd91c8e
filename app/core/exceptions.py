"""
Custom exception classes
Provides consistent error responses across the storefront
"""

from fastapi import HTTPException, status
from typing import Any, Dict, Optional

class QuickCartException(HTTPException):
    """Base exception class for QuickCart application"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

    def __str__(self) -> str:
        return str(self.detail)

class BadRequestException(QuickCartException):
    """400 Bad Request"""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )

class AuthenticationRequiredException(QuickCartException):
    """401 Unauthorized - the record store rejected the session or policy"""

    def __init__(
        self,
        detail: str = "Authentication required",
        error_code: str = "AUTHENTICATION_REQUIRED"
    ):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code,
            headers={"WWW-Authenticate": "Bearer"}
        )

class NotFoundException(QuickCartException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )

class ValidationException(QuickCartException):
    """422 Unprocessable Entity"""

    def __init__(self, detail: str, error_code: str = "VALIDATION_ERROR"):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code=error_code
        )

class RemoteFailureException(QuickCartException):
    """502 Bad Gateway - the record store reported a failure"""

    def __init__(
        self,
        detail: str = "Remote store request failed",
        error_code: str = "REMOTE_FAILURE"
    ):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            error_code=error_code
        )

class ServiceUnavailableException(QuickCartException):
    """503 Service Unavailable"""

    def __init__(
        self,
        detail: str = "Service temporarily unavailable",
        error_code: str = "SERVICE_UNAVAILABLE"
    ):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code=error_code
        )

class NotInitializedException(ServiceUnavailableException):
    """A required collaborator has not been set up"""

    def __init__(self, component: str = "Remote store"):
        super().__init__(
            detail=f"{component} not initialized",
            error_code="NOT_INITIALIZED"
        )

# Business logic exceptions
class InvalidProductException(ValidationException):
    """Product cannot be added to the cart"""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            error_code="INVALID_PRODUCT"
        )

class PartialFailureException(RemoteFailureException):
    """Batch operation returned a mix of successful and failed records"""

    def __init__(
        self,
        detail: str,
        succeeded: int = 0,
        failed: int = 0,
        error_code: str = "PARTIAL_FAILURE"
    ):
        super().__init__(detail=detail, error_code=error_code)
        self.succeeded = succeeded
        self.failed = failed

class OrderCreationFailedException(PartialFailureException):
    """Order record could not be persisted"""

    def __init__(self, detail: str = "Failed to create order", failed: int = 0):
        super().__init__(
            detail=detail,
            failed=failed,
            error_code="ORDER_CREATION_FAILED"
        )
