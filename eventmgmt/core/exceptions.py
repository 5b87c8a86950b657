"""
Custom application exceptions
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any, List


class EventManagementException(Exception):
    """Base exception for the event management layer"""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(EventManagementException):
    """Resource not found errors"""

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found"
        if identifier is not None:
            message = f"{resource} with id {identifier} not found"
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404,
            details={"resource": resource, "id": identifier}
        )


@dataclass(frozen=True)
class FieldError:
    """A single violated constraint, tagged with the offending field"""

    field: str
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationError(EventManagementException):
    """Validation errors, one entry per violated constraint"""

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        super().__init__(
            message="; ".join(f"{e.field}: {e.message}" for e in self.errors) or "Validation failed",
            code="VALIDATION_ERROR",
            status_code=422,
            details={"errors": [e.as_dict() for e in self.errors]}
        )

    def messages_for(self, field: str) -> List[str]:
        return [e.message for e in self.errors if e.field == field]


class ConflictError(EventManagementException):
    """Resource conflict errors"""

    def __init__(self, message: str, code: str = "CONFLICT", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code=code,
            status_code=409,
            details=details
        )


class DuplicateError(ConflictError):
    """Unique key violation reported by the database"""

    def __init__(self, resource: str, field: str, value: Any = None):
        super().__init__(
            message=f"{resource} with this {field} already exists",
            code="DUPLICATE",
            details={"resource": resource, "field": field, "value": value}
        )
        self.field = field


class RegistrationError(EventManagementException):
    """Registration related errors"""

    def __init__(self, message: str, code: str = "REGISTRATION_ERROR",
                 status_code: int = 400, details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
            details=details
        )


class CapacityExceededError(RegistrationError):
    """Event has no spots left"""

    def __init__(self, event_id: int):
        super().__init__(
            message="Event has reached its maximum number of attendees",
            code="CAPACITY_EXCEEDED",
            status_code=409,
            details={"event_id": event_id}
        )


class RegistrationClosedError(RegistrationError):
    """Event is not accepting registrations"""

    def __init__(self, event_id: int, reason: str = "Registration is closed for this event"):
        super().__init__(
            message=reason,
            code="REGISTRATION_CLOSED",
            details={"event_id": event_id}
        )
