"""Appointment-type catalog routes."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db, run_query
from src.core.exceptions import DuplicateEntry, NotFoundError, StoreUnavailable
from src.modules.catalog.models import AppointmentType
from src.modules.catalog.schemas import AppointmentTypeCreate, AppointmentTypePublic, AppointmentTypeUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/appointment-types", tags=["catalog"])


async def _find_type(db: AsyncSession, value: str) -> AppointmentType | None:
    result = await run_query(db, select(AppointmentType).where(AppointmentType.value == value))
    return result.scalar_one_or_none()


async def _get_type(db: AsyncSession, value: str) -> AppointmentType:
    appointment_type = await _find_type(db, value)
    if appointment_type is None:
        raise NotFoundError("Type not found")
    return appointment_type


async def _commit(db: AsyncSession, value: str) -> None:
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise DuplicateEntry(f"Appointment type '{value}' already exists") from exc
    except (OperationalError, InterfaceError) as exc:
        await db.rollback()
        logger.exception("Failed to save appointment type %s", value)
        raise StoreUnavailable("Appointment store is unavailable") from exc


async def _refresh(db: AsyncSession, appointment_type: AppointmentType) -> None:
    try:
        await db.refresh(appointment_type)
    except (OperationalError, InterfaceError) as exc:
        logger.exception("Saved appointment type %s but could not reload it", appointment_type.value)
        raise StoreUnavailable("Appointment store is unavailable") from exc


@router.get("", response_model=list[AppointmentTypePublic])
async def list_appointment_types(
    include_inactive: bool = Query(default=False, alias="includeInactive"),
    db: AsyncSession = Depends(get_db),
) -> list[AppointmentType]:
    stmt = select(AppointmentType).order_by(AppointmentType.label)
    if not include_inactive:
        stmt = stmt.where(AppointmentType.is_active.is_(True))
    result = await run_query(db, stmt)
    return list(result.scalars().all())


@router.post("", response_model=AppointmentTypePublic, status_code=status.HTTP_201_CREATED)
async def create_appointment_type(
    payload: AppointmentTypeCreate,
    db: AsyncSession = Depends(get_db),
) -> AppointmentType:
    if await _find_type(db, payload.value) is not None:
        raise DuplicateEntry(f"Appointment type '{payload.value}' already exists")
    appointment_type = AppointmentType(
        value=payload.value,
        label=payload.label,
        duration_minutes=payload.duration,
        is_active=payload.is_active,
    )
    db.add(appointment_type)
    # A concurrent create of the same value fails here on the primary key.
    await _commit(db, payload.value)
    await _refresh(db, appointment_type)
    return appointment_type


@router.patch("/{value}", response_model=AppointmentTypePublic)
async def update_appointment_type(
    value: str,
    payload: AppointmentTypeUpdate,
    db: AsyncSession = Depends(get_db),
) -> AppointmentType:
    appointment_type = await _get_type(db, value)
    update_data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "duration" in update_data:
        update_data["duration_minutes"] = update_data.pop("duration")
    for field, field_value in update_data.items():
        setattr(appointment_type, field, field_value)
    await _commit(db, value)
    await _refresh(db, appointment_type)
    return appointment_type


@router.delete("/{value}", response_model=AppointmentTypePublic)
async def delete_appointment_type(
    value: str,
    db: AsyncSession = Depends(get_db),
) -> AppointmentType:
    appointment_type = await _get_type(db, value)
    await db.delete(appointment_type)
    await _commit(db, value)
    return appointment_type
