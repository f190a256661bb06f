"""ORM models for the users domain."""

from __future__ import annotations

from sqlalchemy import Boolean, Enum, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database import Base
from src.shared.enums import UserRole, enum_values
from src.shared.models import TimestampMixin, ulid_primary_key


class User(Base, TimestampMixin):
    """Students, staff, nurses and administrators.

    Only nurses take part in scheduling; the other roles appear as patients,
    whose details are copied onto each appointment at booking time.
    """

    __tablename__ = "users"
    __table_args__ = (Index("ix_users_role_name", "role", "name"),)

    user_id: Mapped[str] = ulid_primary_key()
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            values_callable=enum_values,
            validate_strings=True,
            name="userrole",
        ),
        nullable=False,
        default=UserRole.STUDENT,
    )
    student_id: Mapped[str | None] = mapped_column(String(32))
    phone_number: Mapped[str | None] = mapped_column(String(32))
    shift: Mapped[str | None] = mapped_column(String(32))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
