"""
Custom Exceptions for the Reservation Engine

Every error that leaves the service layer is one of the classes below.
Repositories wrap SQLAlchemy failures into RepositoryError, so raw
infrastructure errors never reach an API caller.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Business logic errors
    BOOKING_CONFLICT = "BOOKING_CONFLICT"
    INSUFFICIENT_CAPACITY = "INSUFFICIENT_CAPACITY"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
    PAYMENT_FAILED = "PAYMENT_FAILED"

    # External service errors
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
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Domain Exceptions
# ========================================

class NotFoundError(BaseAppException):
    """A referenced booking, room, type, customer, service or payment does not exist"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": str(resource_id) if resource_id is not None else None
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)
        self.resource_type = resource_type
        self.resource_id = resource_id


class CapacityConflictError(BaseAppException):
    """Requested rooms of a type exceed what is left for the date range"""

    def __init__(self, room_type_name: str, remaining: int, requested: int):
        message = (
            f"Chỉ còn {remaining} phòng thuộc loại {room_type_name}, "
            f"nhưng bạn đang đặt {requested} phòng."
        )
        details = {
            "room_type": room_type_name,
            "remaining": remaining,
            "requested": requested,
        }
        super().__init__(message, ErrorCode.INSUFFICIENT_CAPACITY, details, 409)
        self.room_type_name = room_type_name
        self.remaining = remaining
        self.requested = requested


class RoomConflictError(BaseAppException):
    """A specific physical room is already held for an overlapping window"""

    def __init__(self, room_number: str, room_id: Optional[str] = None):
        message = f"Phòng {room_number} đã được đặt hoặc đang có khách trong khoảng thời gian này."
        details = {"room_number": room_number, "room_id": room_id}
        super().__init__(message, ErrorCode.BOOKING_CONFLICT, details, 409)
        self.room_number = room_number


class InvalidTransitionError(BaseAppException):
    """An operation is not allowed from the booking's current status"""

    def __init__(self, current_status: str, operation: str, message: Optional[str] = None):
        if not message:
            message = f"Cannot {operation} a booking in status '{current_status}'"
        details = {"current_status": current_status, "operation": operation}
        super().__init__(message, ErrorCode.INVALID_STATE_TRANSITION, details, 409)
        self.current_status = current_status
        self.operation = operation


class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)
        self.field_errors = field_errors or {}


class DownstreamFailure(BaseAppException):
    """An external collaborator (email, inventory, tasks, realtime) failed"""

    def __init__(self, collaborator: str, message: str):
        super().__init__(
            f"{collaborator} failed: {message}",
            ErrorCode.EXTERNAL_SERVICE_ERROR,
            {"collaborator": collaborator},
            502,
        )
        self.collaborator = collaborator


# ========================================
# Repository Exceptions
# ========================================

class RepositoryError(BaseAppException):
    """Wrapped datastore failure"""

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message, ErrorCode.DATABASE_ERROR, {}, 500)


class EntityAlreadyExistsError(BaseAppException):
    """Unique constraint violated on insert"""

    def __init__(self, message: str = "Entity already exists"):
        super().__init__(message, ErrorCode.DUPLICATE_ENTRY, {}, 409)


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "NotFoundError",
    "CapacityConflictError",
    "RoomConflictError",
    "InvalidTransitionError",
    "ValidationError",
    "DownstreamFailure",
    "RepositoryError",
    "EntityAlreadyExistsError",
]
