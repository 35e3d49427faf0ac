# backend/drivedesk/schemas/dashboard.py
from datetime import date, datetime
from typing import List, Optional

from .base import StandardizedModel
from .booking import BookingResponse
from .driving_test import DrivingTestStatisticsResponse


class RevenueResponse(StandardizedModel):
    timeframe: str
    period_start: datetime
    period_end: datetime
    completed_hours: float
    hourly_rate: float
    revenue: float


class WeeklyHoursResponse(StandardizedModel):
    week_start: date
    week_end: date
    scheduled_hours: float
    completed_hours: float
    total_hours: float
    lesson_count: int


class LowHoursStudent(StandardizedModel):
    student_id: str
    student_name: str
    remaining_hours: float


class DashboardSummaryResponse(StandardizedModel):
    display_name: str
    student_count: int
    upcoming_lesson_count: int
    upcoming_test_count: int
    next_lessons: List[BookingResponse]
    next_driving_tests: List[BookingResponse]
    test_statistics: Optional[DrivingTestStatisticsResponse] = None
    revenue: RevenueResponse
    total_prepaid_hours_remaining: float
    low_prepaid_students: List[LowHoursStudent]
    weekly_hours: WeeklyHoursResponse
