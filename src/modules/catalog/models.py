"""Catalog ORM models (appointment types)."""

from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database import Base
from src.shared.models import TimestampMixin


class AppointmentType(Base, TimestampMixin):
    """A bookable visit category; appointments reference it by ``value``."""

    __tablename__ = "appointment_types"
    __table_args__ = (CheckConstraint("duration_minutes > 0", name="ck_appointment_types_duration_positive"),)

    value: Mapped[str] = mapped_column(String(64), primary_key=True)
    label: Mapped[str] = mapped_column(String(120), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(default=30, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
