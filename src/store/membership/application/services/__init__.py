"""Application services for the membership bounded context.

Application services orchestrate repositories to fulfill workflows that
span more than one entity type.
"""

from membership.application.services.invitation_service import InvitationService

__all__ = [
    "InvitationService",
]
