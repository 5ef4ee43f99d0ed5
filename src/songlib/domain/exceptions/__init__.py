"""Domain exceptions."""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Kind of failure a domain exception represents.

    The transport layer maps each kind to exactly one HTTP status
    (see ``songlib.api.exception_handlers.ERROR_STATUS_CODES``).
    """

    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    VALIDATION = "validation"
    ALREADY_EXISTS = "already_exists"
    INTERNAL = "internal"


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, subclasses pin their kind as a class attribute. Don't raise this base class
    # directly - pick the specific subclass so the handler can map it to a status code.
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class PageNotFoundException(DomainException):
    """Raised when a requested page lies beyond the last page."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, page: int, total_pages: int) -> None:
        super().__init__(f"page {page} does not exist, total pages: {total_pages}")
        self.page = page
        self.total_pages = total_pages


class LyricsNotFoundException(DomainException):
    """Raised when a song has no lyrics to paginate."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, song_id: Any = None) -> None:
        super().__init__("lyrics not found")
        self.song_id = song_id


class BadRequestException(DomainException):
    """Raised when query or path parameters cannot be interpreted."""

    kind = ErrorKind.BAD_REQUEST


class ValidationException(DomainException):
    """Raised when request data violates a business rule.

    Example: creating a song without a song name, or a filter whose
    from_date lies after its to_date.
    """

    kind = ErrorKind.VALIDATION


class DuplicateEntityException(DomainException):
    """Raised when trying to create a duplicate entity."""

    # Listen, this covers BOTH the existence pre-check and the unique constraint violation on
    # flush. Callers never need to know which of the two caught the conflict.
    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, entity_type: str, key: Any) -> None:
        super().__init__(f"{entity_type} '{key}' already exists")
        self.entity_type = entity_type
        self.key = key


class PersistenceError(DomainException):
    """Storage operation failed.

    Wraps driver and SQLAlchemy errors so the transport layer can answer
    with a generic 500 while the original exception stays chained for logs.
    """

    kind = ErrorKind.INTERNAL

    def __init__(self, operation: str, message: str | None = None) -> None:
        super().__init__(message or f"failed to {operation}")
        self.operation = operation


class ConfigurationError(DomainException):
    """Application misconfiguration (raised during startup)."""

    kind = ErrorKind.INTERNAL


__all__ = [
    "ErrorKind",
    "DomainException",
    "EntityNotFoundException",
    "PageNotFoundException",
    "LyricsNotFoundException",
    "BadRequestException",
    "ValidationException",
    "DuplicateEntityException",
    "PersistenceError",
    "ConfigurationError",
]
