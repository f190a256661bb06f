"""Domain exception classes and their HTTP handlers."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ClinicError(Exception):
    """Base class for errors surfaced to API callers as a typed failure."""

    kind = "clinic_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str, status_code: int | None = None):
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(detail)


class ValidationError(ClinicError):
    """Malformed or missing request fields."""

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class NoAvailableProvider(ClinicError):
    """Auto-assignment found no free nurse for the requested slot."""

    kind = "no_available_provider"
    status_code = status.HTTP_409_CONFLICT


class SlotConflict(ClinicError):
    """The chosen nurse already has an appointment in the requested slot."""

    kind = "slot_conflict"
    status_code = status.HTTP_409_CONFLICT


class InvalidStatusTransition(ClinicError):
    kind = "invalid_status_transition"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ClinicError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class AppointmentNotFound(NotFoundError):
    def __init__(self, appointment_id: str):
        self.appointment_id = appointment_id
        super().__init__("Appointment not found")


class DuplicateEntry(ClinicError):
    kind = "duplicate_entry"
    status_code = status.HTTP_409_CONFLICT


class StoreUnavailable(ClinicError):
    """The appointment store could not be reached. Never retried here."""

    kind = "store_unavailable"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(kind: str, message: str) -> dict:
    return {"success": False, "error": kind, "message": message}


def register_exception_handlers(app: FastAPI) -> None:
    """Attach shared exception handlers to the FastAPI app."""

    @app.exception_handler(ClinicError)
    async def _clinic_error_handler(_: Request, exc: ClinicError):
        return JSONResponse(error_body(exc.kind, exc.detail), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(_: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        else:
            message = "Invalid request"
        logger.info("Rejected request payload: %s", message)
        return JSONResponse(
            error_body(ValidationError.kind, message),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
