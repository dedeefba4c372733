"""
Domain errors raised by services and rendered by the API exception handlers
"""

from typing import Dict, List, Optional

from fastapi import status


class TaskDeskError(Exception):
    """Base error carrying an HTTP status and a client-facing message"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationFailed(TaskDeskError):
    """Input rejected, with per-field messages"""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Validation failed"

    def __init__(self, errors: Dict[str, List[str]], message: Optional[str] = None):
        super().__init__(message)
        self.errors = errors

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class Unauthenticated(TaskDeskError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthenticated."


class Forbidden(TaskDeskError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to access this resource."


class NotFound(TaskDeskError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class BadRequest(TaskDeskError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class InvalidTransition(TaskDeskError):
    """Subscription plan change in the wrong direction"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid plan change"
