from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication or authorization fails.

    The message stays generic so callers cannot tell which check failed.
    """

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class DuplicateCredentialError(ValidationError):
    """Raised when a passcode with the same code already exists."""

    def __init__(self, message: str = "This passcode already exists") -> None:
        super().__init__(message)


class LastAdminProtectedError(ValidationError):
    """Raised when deleting a passcode would leave the board without an admin."""

    def __init__(self, message: str = "Cannot delete the last admin passcode") -> None:
        super().__init__(message)


class ConflictError(UserError):
    """Raised when a write collides with a unique constraint; the client may retry."""
