"""Appointments API routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.modules.appointments.models import Appointment
from src.modules.appointments.schemas import AppointmentCreate, AppointmentPublic, AppointmentUpdate
from src.modules.appointments.service import AppointmentService
from src.modules.appointments.store import AppointmentQuery
from src.shared.enums import AppointmentStatus, UserRole
from src.shared.schemas import ErrorResponse

router = APIRouter(prefix="/api/v1/appointments", tags=["appointments"])

BOOKING_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def get_service(db: AsyncSession = Depends(get_db)) -> AppointmentService:
    return AppointmentService(db)


@router.get("", response_model=list[AppointmentPublic])
async def list_appointments(
    user_id: str | None = Query(default=None, alias="userId"),
    role: UserRole | None = Query(default=None),
    status_value: AppointmentStatus | None = Query(default=None, alias="status"),
    type_value: str | None = Query(default=None, alias="type"),
    date_value: date | None = Query(default=None, alias="date"),
    service: AppointmentService = Depends(get_service),
) -> list[Appointment]:
    query = AppointmentQuery(
        user_id=user_id,
        role=role,
        status=status_value,
        type=type_value,
        date=date_value,
    )
    return await service.search(query)


@router.get("/{appointment_id}", response_model=AppointmentPublic, responses={404: {"model": ErrorResponse}})
async def get_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_service),
) -> Appointment:
    return await service.get(appointment_id)


@router.post(
    "",
    response_model=AppointmentPublic,
    status_code=status.HTTP_201_CREATED,
    responses=BOOKING_ERRORS,
)
async def create_appointment(
    payload: AppointmentCreate,
    service: AppointmentService = Depends(get_service),
) -> Appointment:
    return await service.book_appointment(payload)


@router.api_route(
    "/{appointment_id}",
    methods=["PUT", "PATCH"],
    response_model=AppointmentPublic,
    responses={**BOOKING_ERRORS, 404: {"model": ErrorResponse}},
)
async def update_appointment(
    appointment_id: str,
    payload: AppointmentUpdate,
    service: AppointmentService = Depends(get_service),
) -> Appointment:
    return await service.reschedule(appointment_id, payload)


@router.delete("/{appointment_id}", response_model=AppointmentPublic, responses={404: {"model": ErrorResponse}})
async def delete_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_service),
) -> Appointment:
    return await service.delete(appointment_id)
