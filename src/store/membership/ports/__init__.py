"""Ports for the membership bounded context: error vocabulary and repository protocols."""

from membership.ports.exceptions import (
    AlreadyMemberError,
    DatabaseError,
    EmptyFieldMaskError,
    ErrorKind,
    NothingToUpdateError,
    RecordValidationError,
    ResourceNotFoundError,
    StoreError,
)
from membership.ports.repositories import (
    IEntityRepository,
    IJoinRequestRepository,
    IMemberRepository,
    ITenantRepository,
    IUserRepository,
    Record,
)

__all__ = [
    "AlreadyMemberError",
    "DatabaseError",
    "EmptyFieldMaskError",
    "ErrorKind",
    "IEntityRepository",
    "IJoinRequestRepository",
    "IMemberRepository",
    "ITenantRepository",
    "IUserRepository",
    "NothingToUpdateError",
    "Record",
    "RecordValidationError",
    "ResourceNotFoundError",
    "StoreError",
]
