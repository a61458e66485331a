"""SQLAlchemy models.

Models inherit from Base so Alembic's autogenerate can detect them.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from plexrbac.db.session import Base


class Realm(Base):
    """A named security domain. Rows are written once and never changed."""

    __tablename__ = "realms"
    __table_args__ = (CheckConstraint("length(realm_name) > 0", name="realm_name_not_empty"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    realm_name: Mapped[str] = mapped_column(String(100), unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __str__(self) -> str:
        return f"({self.realm_name})"
