"""Appointment ORM model."""

from __future__ import annotations

import datetime as dt

from sqlalchemy import CheckConstraint, Date, Enum, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database import Base
from src.shared.enums import AppointmentStatus, Priority, enum_values
from src.shared.models import ULID_LENGTH, TimestampMixin, ulid_primary_key

SLOT_CONSTRAINT_NAME = "uq_appointments_nurse_slot"


class Appointment(Base, TimestampMixin):
    __tablename__ = "appointments"
    __table_args__ = (
        UniqueConstraint("nurse_id", "date", "time", name=SLOT_CONSTRAINT_NAME),
        Index("ix_appointments_slot", "date", "time"),
        Index("ix_appointments_patient", "patient_id"),
        CheckConstraint("end_time > time", name="ck_appointments_time_order"),
    )

    appointment_id: Mapped[str] = ulid_primary_key()
    patient_id: Mapped[str] = mapped_column(String(64), nullable=False)
    patient_name: Mapped[str] = mapped_column(String(120), nullable=False)
    patient_email: Mapped[str] = mapped_column(String(255), nullable=False)
    nurse_id: Mapped[str] = mapped_column(
        String(ULID_LENGTH),
        ForeignKey("users.user_id", ondelete="RESTRICT"),
        nullable=False,
    )
    nurse_name: Mapped[str] = mapped_column(String(120), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    status: Mapped[AppointmentStatus] = mapped_column(
        Enum(
            AppointmentStatus,
            values_callable=enum_values,
            validate_strings=True,
            name="appointmentstatus",
        ),
        nullable=False,
        default=AppointmentStatus.PENDING,
    )
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    symptoms: Mapped[str | None] = mapped_column(Text)
    priority: Mapped[Priority] = mapped_column(
        Enum(
            Priority,
            values_callable=enum_values,
            validate_strings=True,
            name="appointmentpriority",
        ),
        nullable=False,
        default=Priority.NORMAL,
    )
