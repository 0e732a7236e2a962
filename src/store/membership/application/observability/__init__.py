"""Domain-Oriented Observability for the membership application layer."""

from membership.application.observability.invitation_service_probe import (
    DefaultInvitationServiceProbe,
    InvitationServiceProbe,
)

__all__ = [
    "DefaultInvitationServiceProbe",
    "InvitationServiceProbe",
]
