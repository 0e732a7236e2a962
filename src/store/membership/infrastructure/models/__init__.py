"""SQLAlchemy ORM models for the membership bounded context.

These models define the four tables and their constraint names. Repository
operations run SQLAlchemy Core statements against their tables.
"""

from membership.infrastructure.models.join_request import JoinRequestModel
from membership.infrastructure.models.member import MemberModel
from membership.infrastructure.models.tenant import TenantModel
from membership.infrastructure.models.user import UserModel

__all__ = [
    "JoinRequestModel",
    "MemberModel",
    "TenantModel",
    "UserModel",
]
