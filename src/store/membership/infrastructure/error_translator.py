"""Translation of backend errors into the store's safe vocabulary.

Backend error text can embed constraint names, table internals or
driver-specific phrasing. This module is the single point where that text
is replaced by a stable message before an error leaves the store. The raw
error stays reachable through ``StoreError.unwrap()``.

Both lookup tables are built once at import and never mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from sqlalchemy.exc import DBAPIError

from membership.ports.exceptions import (
    ALREADY_MEMBER,
    EMPTY_FIELD_MASK,
    NOTHING_TO_UPDATE,
    RESOURCE_DOES_NOT_EXIST,
    UNSPECIFIED_DATABASE_ERROR,
    DatabaseError,
)

# Messages raised by the store itself; they pass through unchanged
STORE_MESSAGES: frozenset[str] = frozenset(
    {
        EMPTY_FIELD_MASK,
        NOTHING_TO_UPDATE,
        RESOURCE_DOES_NOT_EXIST,
    }
)

# PostgreSQL messages for the constraints declared by the ORM models
DB_ERR_MEMBER_ALREADY_LINKED = (
    'duplicate key value violates unique constraint "uq_member_tenant_id_user_id"'
)
DB_ERR_USER_AUTH_ID_TAKEN = (
    'duplicate key value violates unique constraint "uq_user_auth_id"'
)
DB_ERR_USER_EMAIL_TAKEN = 'duplicate key value violates unique constraint "uq_user_email"'
DB_ERR_MEMBER_TENANT_DNE = (
    'insert or update on table "member" violates foreign key constraint '
    '"fk_member_tenant_id_tenant"'
)
DB_ERR_MEMBER_USER_DNE = (
    'insert or update on table "member" violates foreign key constraint '
    '"fk_member_user_id_user"'
)
DB_ERR_JOIN_REQUEST_TENANT_DNE = (
    'insert or update on table "joinrequest" violates foreign key constraint '
    '"fk_joinrequest_tenant_id_tenant"'
)
DB_ERR_JOIN_REQUEST_USER_DNE = (
    'insert or update on table "joinrequest" violates foreign key constraint '
    '"fk_joinrequest_user_id_user"'
)
DB_ERR_TENANT_OWNER_DNE = (
    'insert or update on table "tenant" violates foreign key constraint '
    '"fk_tenant_owner_id_user"'
)
DB_ERR_USER_OWNS_TENANT = (
    'update or delete on table "user" violates foreign key constraint '
    '"fk_tenant_owner_id_user" on table "tenant"'
)

ERR_USER_ALREADY_EXISTS = "user already exists"
ERR_TENANT_OR_USER_DNE = "tenant or user does not exist"
ERR_TENANT_DNE = "tenant does not exist"
ERR_USER_DNE = "user does not exist"
ERR_OWNER_DNE = "owner does not exist"
ERR_USER_OWNS_TENANT = "user still owns a tenant"

DB_MESSAGES: Mapping[str, str] = MappingProxyType(
    {
        RESOURCE_DOES_NOT_EXIST: RESOURCE_DOES_NOT_EXIST,
        DB_ERR_MEMBER_ALREADY_LINKED: ALREADY_MEMBER,
        DB_ERR_USER_AUTH_ID_TAKEN: ERR_USER_ALREADY_EXISTS,
        DB_ERR_USER_EMAIL_TAKEN: ERR_USER_ALREADY_EXISTS,
        DB_ERR_MEMBER_TENANT_DNE: ERR_TENANT_OR_USER_DNE,
        DB_ERR_MEMBER_USER_DNE: ERR_TENANT_OR_USER_DNE,
        DB_ERR_JOIN_REQUEST_TENANT_DNE: ERR_TENANT_DNE,
        DB_ERR_JOIN_REQUEST_USER_DNE: ERR_USER_DNE,
        DB_ERR_TENANT_OWNER_DNE: ERR_OWNER_DNE,
        DB_ERR_USER_OWNS_TENANT: ERR_USER_OWNS_TENANT,
    }
)


def backend_message(error: BaseException) -> str:
    """Extract the driver-level message text of an error.

    SQLAlchemy wraps driver errors and decorates their text with the failed
    statement; the lookup needs the driver's primary message only. psycopg
    exposes it as ``diag.message_primary``. The asyncpg adapter chains the
    original asyncpg error as ``__cause__`` of the adapted one.

    Args:
        error: Any error raised while talking to the backend

    Returns:
        The message to match against the lookup tables
    """
    if isinstance(error, DBAPIError) and error.orig is not None:
        driver_error: BaseException = error.orig.__cause__ or error.orig
        diag = getattr(driver_error, "diag", None)
        primary = getattr(diag, "message_primary", None)
        if primary:
            return primary
        return str(driver_error)
    return str(error)


def translate_error(error: BaseException | None) -> BaseException | None:
    """Translate a raw error into one safe for external consumption.

    Args:
        error: The raw error, or None

    Returns:
        None for None; the error itself when its message is allow-listed;
        otherwise a DatabaseError carrying the safe message (or the generic
        fallback) with the raw error as its cause.
    """
    if error is None:
        return None

    message = backend_message(error)

    if message in STORE_MESSAGES:
        return error

    safe_message = DB_MESSAGES.get(message, UNSPECIFIED_DATABASE_ERROR)
    return DatabaseError(safe_message, cause=error)
