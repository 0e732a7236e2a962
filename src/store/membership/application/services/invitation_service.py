"""Invitation application service for the membership bounded context.

Invites people to a tenant by email address, whether or not they already
have an account.
"""

from __future__ import annotations

from membership.application.observability import (
    DefaultInvitationServiceProbe,
    InvitationServiceProbe,
)
from membership.domain.entities import JoinRequest
from membership.ports.exceptions import AlreadyMemberError
from membership.ports.repositories import (
    IJoinRequestRepository,
    IMemberRepository,
    IUserRepository,
)


class InvitationService:
    """Application service for tenant invitations.

    The membership check and the join request insert are separate units of
    work, so two concurrent invitations of the same person can both pass
    the check.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        member_repository: IMemberRepository,
        join_request_repository: IJoinRequestRepository,
        probe: InvitationServiceProbe | None = None,
    ):
        """Initialize InvitationService with dependencies.

        Args:
            user_repository: Repository used to resolve the invited email
            member_repository: Repository used to detect existing members
            join_request_repository: Repository the invitation is written to
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._member_repository = member_repository
        self._join_request_repository = join_request_repository
        self._probe = probe or DefaultInvitationServiceProbe()

    async def invite_by_email(self, tenant_id: str, email: str) -> JoinRequest:
        """Invite the owner of ``email`` to join a tenant.

        An email without an account gets an anonymous join request. A
        registered user gets a join request addressed to their user id.

        Args:
            tenant_id: The tenant to invite into
            email: Address of the person to invite

        Returns:
            The created join request

        Raises:
            AlreadyMemberError: If the user already belongs to the tenant
            RecordValidationError: If the tenant id or email is malformed
            DatabaseError: If the tenant does not exist or the backend fails
        """
        user = await self._user_repository.get_by_email(email)

        if user is None:
            request = await self._join_request_repository.create(
                {"tenant_id": tenant_id, "anon_email": email}
            )
            self._probe.anonymous_invitation_created(tenant_id, request.id)
            return request

        if await self._member_repository.is_member(tenant_id, user.id):
            self._probe.already_member(tenant_id, user.id)
            raise AlreadyMemberError()

        request = await self._join_request_repository.create(
            {"tenant_id": tenant_id, "user_id": user.id}
        )
        self._probe.user_invitation_created(tenant_id, user.id, request.id)
        return request
