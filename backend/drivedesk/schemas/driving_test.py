# backend/drivedesk/schemas/driving_test.py
from datetime import date
from typing import List, Optional

from pydantic import Field

from ._strict_base import StrictRequestModel
from .base import StandardizedModel


class DrivingTestCreate(StrictRequestModel):
    student_id: str
    test_date: date
    passed: bool
    driving_faults: int = Field(0, ge=0)
    serious_faults: int = Field(0, ge=0)
    examiner_action: bool = False
    notes: Optional[str] = Field(None, max_length=5000)


class DrivingTestUpdate(StrictRequestModel):
    student_id: Optional[str] = None
    test_date: Optional[date] = None
    passed: Optional[bool] = None
    driving_faults: Optional[int] = Field(None, ge=0)
    serious_faults: Optional[int] = Field(None, ge=0)
    examiner_action: Optional[bool] = None
    notes: Optional[str] = Field(None, max_length=5000)


class DrivingTestResponse(StandardizedModel):
    id: str
    student_id: str
    student_name: str
    test_date: date
    passed: bool
    driving_faults: int
    serious_faults: int
    examiner_action: bool
    notes: Optional[str] = None


class StudentDrivingTestStatsResponse(StandardizedModel):
    student_id: str
    student_name: str
    total_tests: int
    pass_count: int
    avg_driving_faults: float
    avg_serious_faults: float


class DrivingTestStatisticsResponse(StandardizedModel):
    timeframe: str
    total: int
    pass_rate: float
    avg_driving_faults: float
    avg_serious_faults: float
    examiner_action_rate: float
    student_stats: List[StudentDrivingTestStatsResponse]
