"""Nurse directory, availability and roster routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.core.exceptions import NotFoundError
from src.modules.appointments.roster import RosterEntry, build_patient_roster
from src.modules.appointments.schemas import TIME_PATTERN
from src.modules.appointments.service import AppointmentService
from src.modules.appointments.store import AppointmentStore
from src.modules.users.models import User
from src.modules.users.schemas import NursePublic
from src.modules.users.service import DirectoryService

router = APIRouter(prefix="/api/v1/nurses", tags=["nurses"])


@router.get("", response_model=list[NursePublic])
async def list_nurses(db: AsyncSession = Depends(get_db)) -> list[User]:
    return await DirectoryService(db).list_nurses()


@router.get("/available", response_model=list[NursePublic])
async def available_nurses(
    date_value: date = Query(..., alias="date"),
    time_value: str = Query(..., alias="time", pattern=TIME_PATTERN),
    db: AsyncSession = Depends(get_db),
) -> list[User]:
    return await AppointmentService(db).available_nurses(date_value, time_value)


@router.get("/{nurse_id}/patients", response_model=list[RosterEntry])
async def nurse_patients(
    nurse_id: str,
    today: date | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
) -> list[RosterEntry]:
    nurse = await DirectoryService(db).get_nurse(nurse_id)
    if nurse is None:
        raise NotFoundError("Nurse not found")
    appointments = await AppointmentStore(db).list_for_nurse(nurse_id)
    return build_patient_roster(appointments, today or date.today())
