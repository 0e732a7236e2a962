"""Integration tests for the membership store.

These tests require PostgreSQL to be running.
They verify persistence, field-masked updates and error translation
against the real backend.
"""

from uuid import uuid4

import pytest

from membership.ports.exceptions import (
    AlreadyMemberError,
    DatabaseError,
    EmptyFieldMaskError,
    ResourceNotFoundError,
)
from membership.store import MembershipStore

pytestmark = pytest.mark.integration


def user_record(email: str = "zed@acme.io") -> dict:
    return {
        "auth_id": str(uuid4()),
        "email": email,
        "first_name": "foo",
        "last_name": "bar",
    }


class TestUserRoundTrip:
    """Tests for create, get, update and delete of users."""

    @pytest.mark.asyncio
    async def test_create_then_get(self, store: MembershipStore):
        """A created user reads back unchanged."""
        created = await store.users.create(user_record())

        retrieved = await store.users.get(created.id)

        assert retrieved == created

    @pytest.mark.asyncio
    async def test_masked_update_changes_only_masked_field(
        self, store: MembershipStore
    ):
        """Unmasked values are ignored even when supplied."""
        created = await store.users.create(user_record())

        await store.users.update(
            created.id,
            {"first_name": "Elliot", "last_name": "ignored"},
            ["first_name"],
        )

        retrieved = await store.users.get(created.id)
        assert retrieved is not None
        assert retrieved.first_name == "Elliot"
        assert retrieved.last_name == "bar"

    @pytest.mark.asyncio
    async def test_update_without_mask_fails(self, store: MembershipStore):
        """An update without a mask changes nothing."""
        created = await store.users.create(user_record())

        with pytest.raises(EmptyFieldMaskError) as exc_info:
            await store.users.update(created.id, {"first_name": "Elliot"})

        assert str(exc_info.value) == "field mask is empty"
        assert await store.users.get(created.id) == created

    @pytest.mark.asyncio
    async def test_update_missing_user(self, store: MembershipStore):
        """Updating a missing user is not found with no underlying cause."""
        with pytest.raises(ResourceNotFoundError) as exc_info:
            await store.users.update(
                str(uuid4()), {"first_name": "Elliot"}, ["first_name"]
            )

        assert exc_info.value.unwrap() is None

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, store: MembershipStore):
        """Deleting a missing user is not found with no underlying cause."""
        with pytest.raises(ResourceNotFoundError) as exc_info:
            await store.users.delete(str(uuid4()))

        assert str(exc_info.value) == "resource does not exist"
        assert exc_info.value.unwrap() is None

    @pytest.mark.asyncio
    async def test_get_missing_user_is_none(self, store: MembershipStore):
        """Reading a missing user is not an error."""
        assert await store.users.get(str(uuid4())) is None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, store: MembershipStore):
        """A second user with the same email is rejected safely."""
        await store.users.create(user_record())

        with pytest.raises(DatabaseError) as exc_info:
            await store.users.create(user_record())

        assert str(exc_info.value) == "user already exists"
        assert exc_info.value.unwrap() is not None


class TestTenantsAndMembers:
    """Tests for relationships between users, tenants and members."""

    @pytest.mark.asyncio
    async def test_tenant_requires_existing_owner(self, store: MembershipStore):
        """A tenant owned by nobody is rejected."""
        with pytest.raises(DatabaseError) as exc_info:
            await store.tenants.create({"name": "Acme", "owner_id": str(uuid4())})

        assert str(exc_info.value) == "owner does not exist"

    @pytest.mark.asyncio
    async def test_membership_lookups(self, store: MembershipStore):
        """Memberships link users and tenants both ways."""
        owner = await store.users.create(user_record())
        tenant = await store.tenants.create({"name": "Acme", "owner_id": owner.id})
        await store.members.create({"tenant_id": tenant.id, "user_id": owner.id})

        assert await store.members.is_member(tenant.id, owner.id)
        assert [t.id for t in await store.tenants.list_for_user(owner.id)] == [
            tenant.id
        ]
        assert [u.id for u in await store.users.list_for_tenant(tenant.id)] == [
            owner.id
        ]

    @pytest.mark.asyncio
    async def test_duplicate_membership(self, store: MembershipStore):
        """A user can only be a member once."""
        owner = await store.users.create(user_record())
        tenant = await store.tenants.create({"name": "Acme", "owner_id": owner.id})
        record = {"tenant_id": tenant.id, "user_id": owner.id}
        await store.members.create(record)

        with pytest.raises(DatabaseError) as exc_info:
            await store.members.create(record)

        assert str(exc_info.value) == "user is already member of tenant"


class TestInvitations:
    """Tests for the invitation workflow."""

    @pytest.mark.asyncio
    async def test_invites_unknown_email_anonymously(self, store: MembershipStore):
        """An unknown email gets an anonymous, undecided request."""
        owner = await store.users.create(user_record())
        tenant = await store.tenants.create({"name": "Acme", "owner_id": owner.id})

        request = await store.invitations.invite_by_email(tenant.id, "new@acme.io")

        stored = await store.join_requests.get(request.id)
        assert stored is not None
        assert stored.anon_email == "new@acme.io"
        assert stored.is_accepted is None
        assert [r.id for r in await store.join_requests.list_by_anon_email("new@acme.io")] == [
            request.id
        ]

    @pytest.mark.asyncio
    async def test_rejects_existing_member(self, store: MembershipStore):
        """A member cannot be invited again."""
        owner = await store.users.create(user_record())
        tenant = await store.tenants.create({"name": "Acme", "owner_id": owner.id})
        await store.members.create({"tenant_id": tenant.id, "user_id": owner.id})

        with pytest.raises(AlreadyMemberError):
            await store.invitations.invite_by_email(tenant.id, owner.email)

        assert await store.join_requests.list_by_tenant(tenant.id) == []

    @pytest.mark.asyncio
    async def test_rejects_existing_member_by_differently_cased_domain(
        self, store: MembershipStore
    ):
        """The domain's case does not hide an existing member."""
        owner = await store.users.create(user_record("Zed@Acme.IO"))
        tenant = await store.tenants.create({"name": "Acme", "owner_id": owner.id})
        await store.members.create({"tenant_id": tenant.id, "user_id": owner.id})

        with pytest.raises(AlreadyMemberError):
            await store.invitations.invite_by_email(tenant.id, "Zed@ACME.io")

        assert owner.email == "Zed@acme.io"
        assert await store.users.get_by_email("Zed@acme.io") == owner
