"""SQLAlchemy ORM model for the joinrequest table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, utc_now


class JoinRequestModel(Base):
    """ORM model for the joinrequest table.

    Foreign Key Constraints:
    - tenant_id references tenant.id with CASCADE delete
    - user_id references user.id with CASCADE delete (nullable for
      invitations addressed to an email without an account)
    """

    __tablename__ = "joinrequest"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("tenant.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    anon_email: Mapped[str | None] = mapped_column(
        String(320), nullable=True, index=True
    )
    is_accepted: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    is_from_user: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=utc_now,  # Evaluated at INSERT time
        nullable=False,
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<JoinRequestModel(id={self.id}, tenant_id={self.tenant_id})>"
