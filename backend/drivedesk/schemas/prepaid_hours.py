# backend/drivedesk/schemas/prepaid_hours.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import Field, field_validator

from ._strict_base import StrictRequestModel
from .base import Money, StandardizedModel, UtcDatetime


class PrePaidHoursCreate(StrictRequestModel):
    student_id: str
    package_hours: float = Field(..., ge=0.5)
    amount_paid: Optional[Money] = None
    purchase_date: date
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("amount_paid")
    @classmethod
    def _non_negative_amount(cls, v: Optional[Money]) -> Optional[Money]:
        if v is not None and v < 0:
            raise ValueError("amount_paid cannot be negative")
        return v


class PrePaidHoursUpdate(StrictRequestModel):
    package_hours: Optional[float] = Field(None, ge=0.5)
    amount_paid: Optional[Money] = None
    purchase_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("amount_paid")
    @classmethod
    def _non_negative_amount(cls, v: Optional[Money]) -> Optional[Money]:
        if v is not None and v < 0:
            raise ValueError("amount_paid cannot be negative")
        return v


class PrePaidHoursResponse(StandardizedModel):
    id: str
    student_id: str
    student_name: str
    package_hours: float
    remaining_hours: float
    amount_paid: Optional[Money] = None
    purchase_date: date
    notes: Optional[str] = None


class PrePaidTransactionResponse(StandardizedModel):
    id: str
    booking_id: str
    hours_deducted: float
    transaction_date: UtcDatetime
    booking_title: Optional[str] = None
    booking_start: Optional[datetime] = None


class PrePaidHoursDetailResponse(PrePaidHoursResponse):
    transactions: List[PrePaidTransactionResponse]


class StudentPrePaidSummaryResponse(StandardizedModel):
    student_id: str
    student_name: str
    total_remaining_hours: float
    is_low: bool
    packages: List[PrePaidHoursResponse]
