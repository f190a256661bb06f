"""Persistence of appointment rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import run_query
from src.core.exceptions import SlotConflict, StoreUnavailable
from src.modules.appointments.models import Appointment
from src.shared.enums import AppointmentStatus, UserRole

logger = logging.getLogger(__name__)

PATIENT_ROLES = frozenset({UserRole.STUDENT, UserRole.STAFF})


@dataclass
class AppointmentQuery:
    user_id: str | None = None
    role: UserRole | None = None
    status: AppointmentStatus | None = None
    type: str | None = None
    date: date | None = None


class AppointmentStore:
    """Reads and writes appointments through a single async session.

    Writes commit immediately. A write that breaks the one-appointment-per-
    nurse-per-slot constraint is rolled back and raised as SlotConflict, so a
    booking that lost a race never leaves a row behind.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_booked_nurses(
        self,
        slot_date: date,
        slot_time: str,
        exclude_id: str | None = None,
    ) -> set[str]:
        stmt = select(Appointment.nurse_id).where(
            Appointment.date == slot_date,
            Appointment.time == slot_time,
        )
        if exclude_id:
            stmt = stmt.where(Appointment.appointment_id != exclude_id)
        result = await run_query(self.db, stmt)
        return set(result.scalars().all())

    async def find_appointment(
        self,
        nurse_id: str,
        slot_date: date,
        slot_time: str,
        exclude_id: str | None = None,
    ) -> Appointment | None:
        stmt = select(Appointment).where(
            Appointment.nurse_id == nurse_id,
            Appointment.date == slot_date,
            Appointment.time == slot_time,
        )
        if exclude_id:
            stmt = stmt.where(Appointment.appointment_id != exclude_id)
        result = await run_query(self.db, stmt.limit(1))
        return result.scalar_one_or_none()

    async def count_by_nurse(self, slot_date: date) -> dict[str, int]:
        stmt = (
            select(Appointment.nurse_id, func.count(Appointment.appointment_id))
            .where(Appointment.date == slot_date)
            .group_by(Appointment.nurse_id)
        )
        result = await run_query(self.db, stmt)
        return {nurse_id: count for nurse_id, count in result.all()}

    async def get(self, appointment_id: str) -> Appointment | None:
        stmt = select(Appointment).where(Appointment.appointment_id == appointment_id)
        result = await run_query(self.db, stmt)
        return result.scalar_one_or_none()

    async def search(self, query: AppointmentQuery) -> list[Appointment]:
        stmt = select(Appointment)
        if query.user_id and query.role:
            if query.role in PATIENT_ROLES:
                stmt = stmt.where(Appointment.patient_id == query.user_id)
            elif query.role == UserRole.NURSE:
                stmt = stmt.where(Appointment.nurse_id == query.user_id)
        if query.status:
            stmt = stmt.where(Appointment.status == query.status)
        if query.type:
            stmt = stmt.where(Appointment.type == query.type)
        if query.date:
            stmt = stmt.where(Appointment.date == query.date)
        stmt = stmt.order_by(Appointment.date.desc(), Appointment.time.desc())
        result = await run_query(self.db, stmt)
        return list(result.scalars().all())

    async def list_for_nurse(self, nurse_id: str) -> list[Appointment]:
        stmt = (
            select(Appointment)
            .where(Appointment.nurse_id == nurse_id)
            .order_by(Appointment.date, Appointment.time)
        )
        result = await run_query(self.db, stmt)
        return list(result.scalars().all())

    async def insert_appointment(self, fields: dict[str, Any]) -> Appointment:
        appointment = Appointment(**fields)
        self.db.add(appointment)
        await self._commit()
        await self._refresh(appointment)
        return appointment

    async def update_appointment(self, appointment: Appointment, fields: dict[str, Any]) -> Appointment:
        for key, value in fields.items():
            setattr(appointment, key, value)
        await self._commit()
        await self._refresh(appointment)
        return appointment

    async def delete(self, appointment: Appointment) -> None:
        try:
            await self.db.delete(appointment)
        except (OperationalError, InterfaceError) as exc:
            logger.exception("Failed to delete appointment %s", appointment.appointment_id)
            raise StoreUnavailable("Appointment store is unavailable") from exc
        await self._commit()

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            logger.warning("Slot constraint rejected write: %s", exc.orig)
            raise SlotConflict("Selected nurse is not available at this time") from exc
        except (OperationalError, InterfaceError) as exc:
            await self.db.rollback()
            logger.exception("Failed to commit appointment changes")
            raise StoreUnavailable("Appointment store is unavailable") from exc

    async def _refresh(self, appointment: Appointment) -> None:
        # The write is already committed; only the server-side timestamps are reloaded.
        try:
            await self.db.refresh(appointment)
        except (OperationalError, InterfaceError) as exc:
            logger.exception("Committed appointment %s but could not reload it", appointment.appointment_id)
            raise StoreUnavailable("Appointment store is unavailable") from exc
