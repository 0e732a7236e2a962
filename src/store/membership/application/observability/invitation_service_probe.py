"""Protocol for invitation service observability.

Defines the interface for domain probes that capture application-level
domain events of the tenant invitation workflow.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class InvitationServiceProbe(Protocol):
    """Domain probe for invitation service operations."""

    def anonymous_invitation_created(self, tenant_id: str, request_id: str) -> None:
        """Record that an email without an account was invited."""
        ...

    def user_invitation_created(
        self, tenant_id: str, user_id: str, request_id: str
    ) -> None:
        """Record that a registered user was invited."""
        ...

    def already_member(self, tenant_id: str, user_id: str) -> None:
        """Record that an invitation targeted an existing member."""
        ...

    def with_context(self, context: ObservationContext) -> InvitationServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultInvitationServiceProbe:
    """Default implementation of InvitationServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _event_kwargs(self, **fields: Any) -> dict[str, Any]:
        """Merge context metadata with the event's fields; the fields win.

        Invitations name the tenant they target, which may differ from the
        tenant a bound context is scoped to.
        """
        if self._context is None:
            return fields
        return {**self._context.as_dict(), **fields}

    def with_context(
        self, context: ObservationContext
    ) -> DefaultInvitationServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultInvitationServiceProbe(logger=self._logger, context=context)

    def anonymous_invitation_created(self, tenant_id: str, request_id: str) -> None:
        """Record that an email without an account was invited."""
        self._logger.info(
            "anonymous_invitation_created",
            **self._event_kwargs(tenant_id=tenant_id, join_request_id=request_id),
        )

    def user_invitation_created(
        self, tenant_id: str, user_id: str, request_id: str
    ) -> None:
        """Record that a registered user was invited."""
        self._logger.info(
            "user_invitation_created",
            **self._event_kwargs(
                tenant_id=tenant_id,
                invited_user_id=user_id,
                join_request_id=request_id,
            ),
        )

    def already_member(self, tenant_id: str, user_id: str) -> None:
        """Record that an invitation targeted an existing member."""
        self._logger.info(
            "invitation_rejected_already_member",
            **self._event_kwargs(tenant_id=tenant_id, invited_user_id=user_id),
        )
