"""Catalog schemas."""

from pydantic import ConfigDict, Field

from src.shared.schemas import CamelModel


class AppointmentTypeCreate(CamelModel):
    value: str = Field(min_length=1, max_length=64, pattern=r"^[a-z0-9][a-z0-9-]*$")
    label: str = Field(min_length=1, max_length=120)
    duration: int = Field(30, gt=0)
    is_active: bool = True


class AppointmentTypeUpdate(CamelModel):
    label: str | None = Field(default=None, min_length=1, max_length=120)
    duration: int | None = Field(default=None, gt=0)
    is_active: bool | None = None


class AppointmentTypePublic(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    value: str
    label: str
    duration_minutes: int = Field(alias="duration")
    is_active: bool
