"""Appointments schemas."""

import datetime as dt

from pydantic import ConfigDict, Field, model_validator

from src.shared.enums import AppointmentStatus, Priority
from src.shared.schemas import CamelModel

AUTO_ASSIGN = "auto"
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
INITIAL_STATUSES = frozenset({AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED})


class AppointmentPublic(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    appointment_id: str = Field(alias="id")
    patient_id: str
    patient_name: str
    patient_email: str
    nurse_id: str
    nurse_name: str
    date: dt.date
    time: str
    end_time: str
    status: AppointmentStatus
    type: str
    notes: str | None = None
    symptoms: str | None = None
    priority: Priority
    created_at: dt.datetime
    updated_at: dt.datetime


class AppointmentCreate(CamelModel):
    """A booking request. A missing, empty or "auto" nurse_id asks for auto-assignment."""

    date: dt.date
    time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    nurse_id: str | None = None
    patient_id: str = Field(min_length=1, max_length=64)
    patient_name: str = Field(min_length=1, max_length=120)
    patient_email: str = Field(min_length=3, max_length=255)
    type: str = Field(min_length=1, max_length=64)
    notes: str | None = None
    symptoms: str | None = None
    priority: Priority = Priority.NORMAL
    status: AppointmentStatus = AppointmentStatus.PENDING

    @model_validator(mode="after")
    def validate_booking(self) -> "AppointmentCreate":
        if self.end_time <= self.time:
            raise ValueError("endTime must be after time")
        if self.status not in INITIAL_STATUSES:
            raise ValueError("New appointments must be pending or confirmed")
        return self


class AppointmentUpdate(CamelModel):
    date: dt.date | None = None
    time: str | None = Field(default=None, pattern=TIME_PATTERN)
    end_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    nurse_id: str | None = None
    status: AppointmentStatus | None = None
    type: str | None = Field(default=None, min_length=1, max_length=64)
    notes: str | None = None
    symptoms: str | None = None
    priority: Priority | None = None
