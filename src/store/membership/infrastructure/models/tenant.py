"""SQLAlchemy ORM model for the tenant table."""

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class TenantModel(Base):
    """ORM model for the tenant table.

    Foreign Key Constraints:
    - owner_id references user.id with RESTRICT delete
      A user cannot be deleted while owning a tenant
    """

    __tablename__ = "tenant"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("user.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TenantModel(id={self.id}, name={self.name})>"
