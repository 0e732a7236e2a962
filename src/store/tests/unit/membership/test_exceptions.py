"""Unit tests for the store error vocabulary."""

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


class TestStoreError:
    """Tests for the StoreError base behavior."""

    def test_default_messages(self):
        """Each error type carries its fixed message."""
        assert str(ResourceNotFoundError()) == "resource does not exist"
        assert str(EmptyFieldMaskError()) == "field mask is empty"
        assert str(NothingToUpdateError()) == "no values supplied for masked fields"
        assert str(AlreadyMemberError()) == "user is already member of tenant"
        assert str(DatabaseError()) == "unspecified database error"

    def test_kinds(self):
        """Each error type reports its kind."""
        assert ResourceNotFoundError.kind is ErrorKind.NOT_FOUND
        assert EmptyFieldMaskError.kind is ErrorKind.EMPTY_FIELD_MASK
        assert NothingToUpdateError.kind is ErrorKind.NOTHING_TO_UPDATE
        assert AlreadyMemberError.kind is ErrorKind.ALREADY_MEMBER
        assert DatabaseError.kind is ErrorKind.DATABASE
        assert RecordValidationError.kind is ErrorKind.VALIDATION

    def test_all_errors_are_store_errors(self):
        """Callers can catch every store error with one clause."""
        for cls in (
            ResourceNotFoundError,
            EmptyFieldMaskError,
            NothingToUpdateError,
            AlreadyMemberError,
            DatabaseError,
        ):
            assert issubclass(cls, StoreError)

    def test_cause_is_kept_out_of_message(self):
        """The raw cause is reachable but not rendered."""
        raw = RuntimeError('duplicate key value violates unique constraint "x"')
        error = DatabaseError("user already exists", cause=raw)

        assert str(error) == "user already exists"
        assert error.unwrap() is raw
        assert error.cause is raw

    def test_unwrap_without_cause(self):
        """Errors raised by the store itself have no cause."""
        assert ResourceNotFoundError().unwrap() is None


class TestRecordValidationError:
    """Tests for RecordValidationError."""

    def test_message_lists_fields(self):
        """The message names the entity and the offending fields."""
        error = RecordValidationError(
            "User",
            [
                {"loc": ("email",), "msg": "bad", "type": "value_error"},
                {"loc": ("first_name",), "msg": "short", "type": "string_too_short"},
            ],
        )

        assert str(error) == "invalid user record: email, first_name"
        assert error.entity == "User"
        assert len(error.errors) == 2
