"""SQLAlchemy model for User aggregate."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wms_identity.infrastructure.persistence.sqlalchemy.base import (
    IdentityBase,
    TimestampMixin,
)
from wms_identity.infrastructure.persistence.sqlalchemy.models.role_model import (
    RoleModel,
    user_roles,
)
from wms_identity.infrastructure.persistence.sqlalchemy.models.user_password_model import (  # noqa: E501
    UserPasswordModel,
)
from wms_identity.infrastructure.persistence.sqlalchemy.models.user_preference_model import (  # noqa: E501
    UserPreferenceModel,
)


class UserModel(IdentityBase, TimestampMixin):
    """SQLAlchemy model for persisting User aggregates.

    The embedded user details are flattened into this table. The image
    column is deferred and only read on request.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    kind: Mapped[str] = mapped_column(String(20), default="regular", nullable=False)
    fullname: Mapped[str | None] = mapped_column(String(255), nullable=True)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    external_user: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    last_password_change: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # User details
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone_no: Mapped[str | None] = mapped_column(String(50), nullable=True)
    im_handle: Mapped[str | None] = mapped_column(String(100), nullable=True)
    office: Mapped[str | None] = mapped_column(String(100), nullable=True)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)
    sex: Mapped[str | None] = mapped_column(String(10), nullable=True)
    image: Mapped[bytes | None] = mapped_column(
        LargeBinary,
        nullable=True,
        deferred=True,
    )

    roles: Mapped[list[RoleModel]] = relationship(
        secondary=user_roles,
        lazy="selectin",
    )
    preferences: Mapped[list[UserPreferenceModel]] = relationship(
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    passwords: Mapped[list[UserPasswordModel]] = relationship(
        cascade="all, delete-orphan",
        order_by=[UserPasswordModel.created_at, UserPasswordModel.id],
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username={self.username}, kind={self.kind})>"
