"""Pydantic schemas for directory lookups."""

from pydantic import ConfigDict, Field

from src.shared.schemas import CamelModel


class NursePublic(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str = Field(alias="id")
    name: str
    shift: str | None = None
