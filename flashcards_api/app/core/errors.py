"""
Service layer exceptions.

Services raise these instead of leaking ``sqlite3`` errors.  Each
carries the HTTP status it maps to and a message that is safe to show
to clients; endpoints and the application level handlers translate
them into ``{"error": message}`` responses.
"""

from fastapi import status


class FlashcardsError(Exception):
    """Base exception for all service errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationFailure(FlashcardsError):
    """A required field is missing or blank, or a patch carries no fields."""

    status_code = status.HTTP_400_BAD_REQUEST


class ReferentialViolation(FlashcardsError):
    """A referenced user or deck does not exist."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(FlashcardsError):
    """The addressed entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity_type: str) -> None:
        super().__init__(f"{entity_type} not found")
        self.entity_type = entity_type


class ConflictError(FlashcardsError):
    """A unique key (the username) is already taken."""

    status_code = status.HTTP_409_CONFLICT


class StorageError(FlashcardsError):
    """Any other data access failure.  The engine's text is never exposed."""

    def __init__(self) -> None:
        super().__init__("db error")
