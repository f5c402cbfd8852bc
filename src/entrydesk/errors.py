from abc import ABC
from enum import StrEnum


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class RenderingError(UserError):
    """Raised when the application form could not be rendered (failure or timeout)."""

    def __init__(self, message: str = "Failed to generate application form") -> None:
        super().__init__(message)


class IdentifierCollisionExhaustedError(UserError):
    """Raised when every allocated entry ID collided with an existing entry.

    Signals a systemic condition (usually heavy concurrent load), the client may retry later.
    """

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Could not allocate a unique entry ID after {attempts} attempts, please retry")
        self.attempts = attempts


class ConstraintKind(StrEnum):
    """Which uniqueness constraint an insert violated."""

    ENTRY_ID = "entry_id"
    EXTERNAL_ID = "external_id"


class ConstraintViolationError(Exception):
    """Raised by record stores when an insert hits a unique index."""

    def __init__(self, kind: ConstraintKind, message: str = "") -> None:
        super().__init__(message or f"Duplicate {kind}")
        self.kind = kind
