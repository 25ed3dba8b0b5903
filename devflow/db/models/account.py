"""SQLAlchemy model for provider accounts linked to users."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey
from sqlalchemy import Index
from sqlalchemy import PrimaryKeyConstraint
from sqlalchemy import String
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column
from sqlalchemy.orm import relationship

from devflow.db.models.user import Base
from devflow.db.models.user import OBJECT_ID_LENGTH
from devflow.db.models.user import TimestampMixin

if TYPE_CHECKING:
    from devflow.db.models.user import User


class Account(TimestampMixin, Base):
    """Credential or OAuth identity owned by a user."""

    __tablename__ = "accounts"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="pk_accounts"),
        Index("ix_accounts_provider_account", "provider", "provider_account_id"),
    )

    user_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("users.id", name="fk_accounts_user_id_users", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    provider: Mapped[str] = mapped_column(String(64), nullable=False)
    provider_account_id: Mapped[str] = mapped_column(String(255), nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="accounts")
