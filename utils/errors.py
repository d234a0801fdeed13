"""
Domain errors.  Each carries the HTTP status it is surfaced with; the
handlers in ``api.middleware`` render them as ``{"error": message}``.
"""

from __future__ import annotations

from fastapi import status


class TaskTrackerError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Conflict(TaskTrackerError):
    # Duplicate usernames are reported as 400, not 409.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Username already taken"


class Unauthorized(TaskTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class Forbidden(TaskTrackerError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "No token provided"


class NotFound(TaskTrackerError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Task not found"
