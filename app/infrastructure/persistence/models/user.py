"""User ORM model backing the directory listing (read-only from the app)."""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IntegerIdMixin, TimestampMixin


class User(IntegerIdMixin, TimestampMixin, Base):
    """User model. Table: users. Unique email; name and email indexed for search."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False, server_default="")

    __table_args__ = (Index("ix_users_name", "name"),)
