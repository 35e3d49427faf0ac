# backend/drivedesk/schemas/profile.py
from typing import Optional

from pydantic import Field, field_validator
import pytz

from ._strict_base import StrictRequestModel
from .base import Money, StandardizedModel


class ProfileUpdate(StrictRequestModel):
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    hourly_rate: Optional[Money] = None
    timezone: Optional[str] = None

    @field_validator("hourly_rate")
    @classmethod
    def _non_negative_rate(cls, v: Optional[Money]) -> Optional[Money]:
        if v is not None and v < 0:
            raise ValueError("hourly_rate cannot be negative")
        return v

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in pytz.all_timezones_set:
            raise ValueError(f"Unknown time zone: {v}")
        return v


class ProfileResponse(StandardizedModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: str
    hourly_rate: Optional[Money] = None
    timezone: str
    is_admin: bool
