"""Per-nurse patient roster built from appointment history."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

from src.modules.appointments.models import Appointment
from src.modules.appointments.schemas import AppointmentPublic
from src.shared.enums import AppointmentStatus
from src.shared.schemas import CamelModel

UPCOMING_STATUSES = frozenset({AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED})


class RosterEntry(CamelModel):
    patient_id: str
    patient_name: str
    patient_email: str
    total_visits: int = 0
    last_visit: dt.date | None = None
    next_appointment: AppointmentPublic | None = None


def build_patient_roster(appointments: Iterable[Appointment], today: dt.date) -> list[RosterEntry]:
    """Group a nurse's appointments by patient.

    The patient snapshot comes from the most recent appointment, so a renamed
    patient shows under their latest name.
    """
    grouped: dict[str, list[Appointment]] = {}
    for appointment in appointments:
        grouped.setdefault(appointment.patient_id, []).append(appointment)

    roster: list[RosterEntry] = []
    for patient_id, items in grouped.items():
        items.sort(key=lambda item: (item.date, item.time))
        latest = items[-1]
        completed = [item for item in items if item.status == AppointmentStatus.COMPLETED]
        upcoming = [item for item in items if item.status in UPCOMING_STATUSES and item.date >= today]
        roster.append(
            RosterEntry(
                patient_id=patient_id,
                patient_name=latest.patient_name,
                patient_email=latest.patient_email,
                total_visits=len(completed),
                last_visit=completed[-1].date if completed else None,
                next_appointment=AppointmentPublic.model_validate(upcoming[0]) if upcoming else None,
            )
        )
    roster.sort(key=lambda entry: (entry.patient_name.lower(), entry.patient_id))
    return roster
