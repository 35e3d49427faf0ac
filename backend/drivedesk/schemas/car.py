# backend/drivedesk/schemas/car.py
"""Car, mileage log and service-status schemas."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from ._strict_base import StrictRequestModel
from .base import StandardizedModel


def _max_car_year() -> int:
    return date.today().year + 1


class CarCreate(StrictRequestModel):
    make: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    year: int = Field(..., ge=1900)
    acquisition_date: date
    initial_mileage: float = Field(0, ge=0)
    service_interval_miles: Optional[float] = Field(None, ge=1)
    car_image_url: Optional[str] = None

    @field_validator("year")
    @classmethod
    def _not_from_the_future(cls, v: int) -> int:
        if v > _max_car_year():
            raise ValueError(f"year cannot be later than {_max_car_year()}")
        return v


class CarUpdate(StrictRequestModel):
    make: Optional[str] = Field(None, min_length=1, max_length=100)
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    year: Optional[int] = Field(None, ge=1900)
    acquisition_date: Optional[date] = None
    initial_mileage: Optional[float] = Field(None, ge=0)
    service_interval_miles: Optional[float] = Field(None, ge=1)
    car_image_url: Optional[str] = None

    @field_validator("year")
    @classmethod
    def _not_from_the_future(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v > _max_car_year():
            raise ValueError(f"year cannot be later than {_max_car_year()}")
        return v


class CarResponse(StandardizedModel):
    id: str
    make: str
    model: str
    year: int
    acquisition_date: date
    initial_mileage: float
    service_interval_miles: Optional[float] = None
    car_image_url: Optional[str] = None
    created_at: Optional[datetime] = None


class CarServiceStatusResponse(StandardizedModel):
    car_id: str
    car_name: str
    current_mileage: float
    service_interval_miles: Optional[float] = None
    miles_until_service: Optional[float] = None


class MileageEntryCreate(StrictRequestModel):
    car_id: Optional[str] = None
    entry_date: date
    start_mileage: float = Field(..., ge=0)
    end_mileage: float = Field(..., ge=0)
    notes: Optional[str] = Field(None, max_length=2000)

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "MileageEntryCreate":
        if self.end_mileage < self.start_mileage:
            raise ValueError("end_mileage must be greater than or equal to start_mileage")
        return self


class MileageEntryUpdate(StrictRequestModel):
    car_id: Optional[str] = None
    entry_date: Optional[date] = None
    start_mileage: Optional[float] = Field(None, ge=0)
    end_mileage: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=2000)


class MileageEntryResponse(StandardizedModel):
    id: str
    car_id: Optional[str] = None
    entry_date: date
    start_mileage: float
    end_mileage: float
    miles_driven: float
    notes: Optional[str] = None


class WeeklyMileageResponse(StandardizedModel):
    week_start: date
    week_end: date
    total_miles: float
    entries: List[MileageEntryResponse]
