"""SQLAlchemy ORM model for the user table.

Stores users provisioned from an external auth provider. The table name is
a reserved word in PostgreSQL; SQLAlchemy quotes it in emitted statements.
"""

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class UserModel(Base):
    """ORM model for the user table.

    Unique constraints:
    - uq_user_auth_id: one row per external auth identity
    - uq_user_email: email addresses identify users for invitations
    """

    __tablename__ = "user"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True)
    auth_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), nullable=False, unique=True
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, email={self.email})>"
