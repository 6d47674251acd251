"""SQLAlchemy model for the password history of a user."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from wms_identity.domain.shared.time import utc_now
from wms_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase


class UserPasswordModel(IdentityBase):
    """One entry of the append-only password history."""

    __tablename__ = "user_passwords"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<UserPasswordModel(id={self.id}, username={self.username})>"
