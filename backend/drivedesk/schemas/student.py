# backend/drivedesk/schemas/student.py
from datetime import date, datetime
from typing import Optional

from pydantic import Field

from ..core.enums import StudentLevel
from ._strict_base import StrictRequestModel
from .base import StandardizedModel


class StudentBase(StrictRequestModel):
    name: str = Field(..., min_length=2, max_length=200)
    date_of_birth: Optional[date] = None
    driving_license_number: Optional[str] = Field(None, max_length=32)
    phone_number: Optional[str] = Field(None, max_length=32)
    full_address: Optional[str] = Field(None, max_length=1000)
    notes: Optional[str] = Field(None, max_length=5000)
    status: StudentLevel = StudentLevel.BEGINNER
    document_url: Optional[str] = None


class StudentCreate(StudentBase):
    pass


class StudentUpdate(StrictRequestModel):
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    date_of_birth: Optional[date] = None
    driving_license_number: Optional[str] = Field(None, max_length=32)
    phone_number: Optional[str] = Field(None, max_length=32)
    full_address: Optional[str] = Field(None, max_length=1000)
    notes: Optional[str] = Field(None, max_length=5000)
    status: Optional[StudentLevel] = None
    document_url: Optional[str] = None


class StudentResponse(StandardizedModel):
    id: str
    name: str
    date_of_birth: Optional[date] = None
    driving_license_number: Optional[str] = None
    phone_number: Optional[str] = None
    full_address: Optional[str] = None
    notes: Optional[str] = None
    status: str
    document_url: Optional[str] = None
    created_at: Optional[datetime] = None
