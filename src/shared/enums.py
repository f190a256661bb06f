"""Shared enumerations used across modules."""

from __future__ import annotations

from enum import StrEnum
from typing import Iterable, TypeVar

EnumType = TypeVar("EnumType", bound=StrEnum)


def enum_values(enum_cls: Iterable[EnumType]) -> list[str]:
    """Return the .value for each enum member (used by SQLAlchemy)."""
    return [member.value for member in enum_cls]


class UserRole(StrEnum):
    STUDENT = "student"
    STAFF = "staff"
    NURSE = "nurse"
    ADMIN = "admin"


class AppointmentStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class Priority(StrEnum):
    NORMAL = "normal"
    HIGH = "high"


class NurseSelectionPolicy(StrEnum):
    RANDOM = "random"
    LEAST_LOADED = "least_loaded"
    FIRST_AVAILABLE = "first_available"
