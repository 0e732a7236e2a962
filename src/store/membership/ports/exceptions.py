"""Error vocabulary of the membership store.

Every error leaving the store is a ``StoreError``: it carries a message that
is safe to show to external callers, a ``kind`` for dispatch, and an
optional underlying cause reachable only through ``unwrap()``. Backend
errors never leak their own text through ``str()``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar

# Messages that originate from the store itself and contain no backend detail
RESOURCE_DOES_NOT_EXIST = "resource does not exist"
EMPTY_FIELD_MASK = "field mask is empty"
NOTHING_TO_UPDATE = "no values supplied for masked fields"
ALREADY_MEMBER = "user is already member of tenant"
INVALID_RECORD = "record failed validation"

# Fallthrough for backend errors without a known safe translation
UNSPECIFIED_DATABASE_ERROR = "unspecified database error"


class ErrorKind(StrEnum):
    """Discriminates the categories of store errors."""

    VALIDATION = "validation"
    EMPTY_FIELD_MASK = "empty_field_mask"
    NOTHING_TO_UPDATE = "nothing_to_update"
    NOT_FOUND = "not_found"
    ALREADY_MEMBER = "already_member"
    DATABASE = "database"


class StoreError(Exception):
    """Base class for errors surfaced by the membership store.

    Attributes:
        message: Text safe for external consumption
        kind: Category of the error
    """

    kind: ClassVar[ErrorKind] = ErrorKind.DATABASE
    default_message: ClassVar[str] = UNSPECIFIED_DATABASE_ERROR

    def __init__(
        self, message: str | None = None, cause: BaseException | None = None
    ) -> None:
        self.message = message or self.default_message
        self._cause = cause
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return the safe message only."""
        return self.message

    @property
    def cause(self) -> BaseException | None:
        """The underlying error, if any."""
        return self._cause

    def unwrap(self) -> BaseException | None:
        """Return the underlying error for internal diagnostics."""
        return self._cause


class ResourceNotFoundError(StoreError):
    """Raised when an update or delete targets an id that matches no row."""

    kind = ErrorKind.NOT_FOUND
    default_message = RESOURCE_DOES_NOT_EXIST


class EmptyFieldMaskError(StoreError):
    """Raised when an update names no fields to change."""

    kind = ErrorKind.EMPTY_FIELD_MASK
    default_message = EMPTY_FIELD_MASK


class NothingToUpdateError(StoreError):
    """Raised when none of the masked fields has a supplied value."""

    kind = ErrorKind.NOTHING_TO_UPDATE
    default_message = NOTHING_TO_UPDATE


class AlreadyMemberError(StoreError):
    """Raised when inviting a user who already belongs to the tenant."""

    kind = ErrorKind.ALREADY_MEMBER
    default_message = ALREADY_MEMBER


class DatabaseError(StoreError):
    """A backend error translated to a safe message.

    The raw backend error is kept as the cause.
    """

    kind = ErrorKind.DATABASE
    default_message = UNSPECIFIED_DATABASE_ERROR


class RecordValidationError(StoreError):
    """Raised when a record violates its structural constraints.

    Detected before any backend call.

    Attributes:
        entity: Name of the entity type that failed validation
        errors: One entry per violation, each with ``loc``, ``msg`` and ``type``
    """

    kind = ErrorKind.VALIDATION
    default_message = INVALID_RECORD

    def __init__(
        self,
        entity: str,
        errors: list[dict[str, Any]],
        cause: BaseException | None = None,
    ) -> None:
        self.entity = entity
        self.errors = errors
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) for error in errors
        )
        super().__init__(f"invalid {entity.lower()} record: {fields}", cause=cause)
