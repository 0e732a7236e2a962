"""SQLAlchemy ORM model for the member table."""

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class MemberModel(Base):
    """ORM model for the member table.

    Foreign Key Constraints:
    - tenant_id references tenant.id with CASCADE delete
    - user_id references user.id with CASCADE delete

    Unique Constraint:
    - uq_member_tenant_id_user_id: one membership per user per tenant
    """

    __tablename__ = "member"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("tenant.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    alias: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_inactive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("tenant_id", "user_id", name="uq_member_tenant_id_user_id"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<MemberModel(id={self.id}, tenant_id={self.tenant_id}, "
            f"user_id={self.user_id})>"
        )
