"""
Application error taxonomy.

Services raise these exceptions instead of returning sentinel values.
Each class carries the HTTP status it maps to, so the exception
handlers registered in ``main`` can turn any of them into a
``{"message": ...}`` JSON response without inspecting message text.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that are safe to show to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class AuthError(AppError):
    """Bad credentials or a missing/invalid/expired token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Please login"


class AuthorizationError(AppError):
    """Acting on a resource owned by another user."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists"


class ServerError(AppError):
    pass
