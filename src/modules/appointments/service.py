"""Appointment scheduling: nurse resolution, conflict checks and persistence."""

from __future__ import annotations

import logging
import random
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.exceptions import (
    AppointmentNotFound,
    NoAvailableProvider,
    SlotConflict,
    ValidationError,
)
from src.modules.appointments.assignment import SlotLocks, select_nurse, slot_locks
from src.modules.appointments.models import Appointment
from src.modules.appointments.schemas import AUTO_ASSIGN, AppointmentCreate, AppointmentUpdate
from src.modules.appointments.status import ensure_transition
from src.modules.appointments.store import AppointmentQuery, AppointmentStore
from src.modules.users.models import User
from src.modules.users.service import DirectoryService
from src.shared.enums import NurseSelectionPolicy

logger = logging.getLogger(__name__)

SLOT_FIELDS = ("nurse_id", "date", "time")


def is_auto_assign(nurse_id: str | None) -> bool:
    return nurse_id is None or not nurse_id.strip() or nurse_id.strip().lower() == AUTO_ASSIGN


class AppointmentService:
    """Books and reschedules appointments without double-booking a nurse.

    The conflict check and the write for a slot run under that slot's lock, so
    requests in this process never interleave between check and insert. The
    unique constraint on (nurse_id, date, time) covers other processes.
    """

    def __init__(
        self,
        db: AsyncSession,
        locks: SlotLocks | None = None,
        policy: NurseSelectionPolicy | None = None,
        rng: random.Random | None = None,
    ):
        self.store = AppointmentStore(db)
        self.directory = DirectoryService(db)
        self.locks = locks if locks is not None else slot_locks
        self.policy = policy or settings.nurse_selection_policy
        self.rng = rng

    async def book_appointment(self, payload: AppointmentCreate) -> Appointment:
        async with self.locks.for_slot(payload.date, payload.time):
            if is_auto_assign(payload.nurse_id):
                nurse = await self._auto_assign(payload.date, payload.time)
            else:
                nurse = await self._require_nurse(payload.nurse_id)
                await self._ensure_slot_free(nurse.user_id, payload.date, payload.time)

            fields = payload.model_dump(exclude={"nurse_id"})
            fields.update(nurse_id=nurse.user_id, nurse_name=nurse.name)
            nurse_id = nurse.user_id
            appointment = await self.store.insert_appointment(fields)

        logger.info(
            "Booked appointment %s with nurse %s on %s at %s",
            appointment.appointment_id,
            nurse_id,
            payload.date,
            payload.time,
        )
        return appointment

    async def reschedule(self, appointment_id: str, changes: AppointmentUpdate) -> Appointment:
        appointment = await self.get(appointment_id)
        update_data = changes.model_dump(exclude_unset=True)
        if not update_data:
            return appointment

        for key in ("date", "time", "end_time", "type", "status", "priority"):
            if key in update_data and update_data[key] is None:
                raise ValidationError(f"{key} cannot be cleared")

        if "status" in update_data:
            ensure_transition(appointment.status, update_data["status"])

        new_time = update_data.get("time", appointment.time)
        new_end_time = update_data.get("end_time", appointment.end_time)
        if new_end_time <= new_time:
            raise ValidationError("endTime must be after time")

        if not any(key in update_data for key in SLOT_FIELDS):
            return await self.store.update_appointment(appointment, update_data)

        new_date = update_data.get("date", appointment.date)
        async with self.locks.for_slot(new_date, new_time):
            if "nurse_id" in update_data and is_auto_assign(update_data["nurse_id"]):
                nurse = await self._auto_assign(new_date, new_time, exclude_id=appointment_id)
                update_data.update(nurse_id=nurse.user_id, nurse_name=nurse.name)
            else:
                if "nurse_id" in update_data and update_data["nurse_id"] != appointment.nurse_id:
                    nurse = await self._require_nurse(update_data["nurse_id"])
                    update_data["nurse_name"] = nurse.name
                nurse_id = update_data.get("nurse_id", appointment.nurse_id)
                await self._ensure_slot_free(nurse_id, new_date, new_time, exclude_id=appointment_id)
            updated = await self.store.update_appointment(appointment, update_data)

        logger.info("Rescheduled appointment %s to %s at %s", appointment_id, new_date, new_time)
        return updated

    async def available_nurses(self, slot_date: date, slot_time: str) -> list[User]:
        busy = await self.store.find_booked_nurses(slot_date, slot_time)
        nurses = await self.directory.list_nurses()
        return [nurse for nurse in nurses if nurse.user_id not in busy]

    async def get(self, appointment_id: str) -> Appointment:
        appointment = await self.store.get(appointment_id)
        if appointment is None:
            raise AppointmentNotFound(appointment_id)
        return appointment

    async def search(self, query: AppointmentQuery) -> list[Appointment]:
        return await self.store.search(query)

    async def delete(self, appointment_id: str) -> Appointment:
        appointment = await self.get(appointment_id)
        await self.store.delete(appointment)
        logger.info("Deleted appointment %s", appointment_id)
        return appointment

    async def _auto_assign(self, slot_date: date, slot_time: str, exclude_id: str | None = None) -> User:
        busy = await self.store.find_booked_nurses(slot_date, slot_time, exclude_id=exclude_id)
        nurses = await self.directory.list_nurses()
        available = [nurse for nurse in nurses if nurse.user_id not in busy]
        if not available:
            logger.warning("No available nurses on %s at %s", slot_date, slot_time)
            raise NoAvailableProvider("No available nurses at this time")

        loads = None
        if self.policy == NurseSelectionPolicy.LEAST_LOADED:
            loads = await self.store.count_by_nurse(slot_date)
        return select_nurse(available, self.policy, loads=loads, rng=self.rng)

    async def _require_nurse(self, nurse_id: str) -> User:
        nurse = await self.directory.get_nurse(nurse_id)
        if nurse is None:
            raise ValidationError(f"Unknown nurse '{nurse_id}'")
        return nurse

    async def _ensure_slot_free(
        self,
        nurse_id: str,
        slot_date: date,
        slot_time: str,
        exclude_id: str | None = None,
    ) -> None:
        existing = await self.store.find_appointment(nurse_id, slot_date, slot_time, exclude_id=exclude_id)
        if existing is not None:
            logger.warning("Nurse %s already booked on %s at %s", nurse_id, slot_date, slot_time)
            raise SlotConflict("Selected nurse is not available at this time")
