"""Explicit success/failure values returned by the auth services.

Callers pattern-match on ``Ok``/``Err`` instead of catching exceptions;
``unwrap`` converts a failure into the matching ``UserError`` at the API edge.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import NoReturn

from kanban.errors import (
    AuthenticationError,
    ConflictError,
    DuplicateCredentialError,
    LastAdminProtectedError,
    NotFoundError,
    UserError,
    ValidationError,
)


class ErrorKind(StrEnum):
    INVALID_CREDENTIAL = "invalid_credential"
    MALFORMED_INPUT = "malformed_input"
    DUPLICATE_CREDENTIAL = "duplicate_credential"
    LAST_ADMIN_PROTECTED = "last_admin_protected"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    SESSION_CONFLICT = "session_conflict"


@dataclass(frozen=True)
class Ok[T]:
    value: T


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str


type Result[T] = Ok[T] | Err


_ERROR_TYPES: dict[ErrorKind, type[UserError]] = {
    ErrorKind.INVALID_CREDENTIAL: AuthenticationError,
    ErrorKind.MALFORMED_INPUT: ValidationError,
    ErrorKind.DUPLICATE_CREDENTIAL: DuplicateCredentialError,
    ErrorKind.LAST_ADMIN_PROTECTED: LastAdminProtectedError,
    ErrorKind.UNAUTHORIZED: AuthenticationError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.SESSION_CONFLICT: ConflictError,
}


def raise_error(err: Err) -> NoReturn:
    """Raise the user-facing exception that corresponds to ``err``."""
    raise _ERROR_TYPES[err.kind](err.message)


def unwrap[T](result: Result[T]) -> T:
    match result:
        case Ok(value):
            return value
        case Err() as err:
            raise_error(err)
