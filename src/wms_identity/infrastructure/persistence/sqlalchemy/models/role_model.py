"""SQLAlchemy model for roles and the user/role association table."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column

from wms_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase

user_roles = Table(
    "user_roles",
    IdentityBase.metadata,
    Column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class RoleModel(IdentityBase):
    """SQLAlchemy model for roles. Roles outlive the users assigned to them."""

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<RoleModel(id={self.id}, name={self.name})>"
