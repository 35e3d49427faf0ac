# backend/drivedesk/services/dashboard_service.py
"""
Dashboard Service for DriveDesk

Builds the instructor's landing-page figures from the other services:
counts, next lessons, 12-month test statistics, revenue for the current
day/week/month, pre-paid balances and hours booked in a chosen week.

Periods are computed in the instructor's own time zone.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
import logging
from typing import List, Optional, Tuple

import pytz
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.enums import BookingStatus, LessonType, RevenueTimeframe, StatsTimeframe
from ..core.timezone_utils import get_profile_timezone, local_to_utc, to_local
from ..models.booking import Booking
from ..models.profile import Profile
from ..repositories.booking_repository import BookingRepository
from ..repositories.driving_test_repository import DrivingTestRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.prepaid_hours_repository import PrePaidHoursRepository
from ..repositories.profile_repository import ProfileRepository
from ..repositories.student_repository import StudentRepository
from .base import BaseService
from .calendar_viewport import end_of_day, month_bounds, start_of_day, week_bounds
from .driving_test_stats import DrivingTestStatistics, compute_test_statistics
from .prepaid_hours_service import summarize_packages_by_student

logger = logging.getLogger(__name__)

NEXT_LESSONS_LIMIT = 3
NEXT_DRIVING_TESTS_LIMIT = 2


@dataclass
class Revenue:
    timeframe: str
    period_start: datetime
    period_end: datetime
    completed_hours: float
    hourly_rate: float
    revenue: float


@dataclass
class WeeklyHours:
    week_start: date
    week_end: date
    scheduled_hours: float = 0.0
    completed_hours: float = 0.0
    lesson_count: int = 0

    @property
    def total_hours(self) -> float:
        return self.scheduled_hours + self.completed_hours


@dataclass
class LowHoursStudent:
    student_id: str
    student_name: str
    remaining_hours: float


@dataclass
class DashboardSummary:
    display_name: str
    student_count: int
    upcoming_lesson_count: int
    upcoming_test_count: int
    next_lessons: List[Booking]
    next_driving_tests: List[Booking]
    test_statistics: Optional[DrivingTestStatistics]
    revenue: Revenue
    total_prepaid_hours_remaining: float
    low_prepaid_students: List[LowHoursStudent] = field(default_factory=list)
    weekly_hours: Optional[WeeklyHours] = None


def revenue_period(timeframe: RevenueTimeframe, local_now: datetime) -> Tuple[datetime, datetime]:
    """Local start/end of the current day, Monday-start week or month."""
    today = local_now.date()
    if timeframe is RevenueTimeframe.DAILY:
        return start_of_day(today), end_of_day(today)
    if timeframe is RevenueTimeframe.WEEKLY:
        return week_bounds(today)
    return month_bounds(today)


class DashboardService(BaseService):
    def __init__(
        self,
        db: Session,
        booking_repository: Optional[BookingRepository] = None,
        student_repository: Optional[StudentRepository] = None,
        profile_repository: Optional[ProfileRepository] = None,
        driving_test_repository: Optional[DrivingTestRepository] = None,
        prepaid_repository: Optional[PrePaidHoursRepository] = None,
    ):
        super().__init__(db)
        self.booking_repository = (
            booking_repository or RepositoryFactory.create_booking_repository(db)
        )
        self.student_repository = (
            student_repository or RepositoryFactory.create_student_repository(db)
        )
        self.profile_repository = (
            profile_repository or RepositoryFactory.create_profile_repository(db)
        )
        self.driving_test_repository = (
            driving_test_repository or RepositoryFactory.create_driving_test_repository(db)
        )
        self.prepaid_repository = (
            prepaid_repository or RepositoryFactory.create_prepaid_hours_repository(db)
        )

    def _profile_and_tz(self, user_id: str) -> Tuple[Profile, pytz.BaseTzInfo]:
        profile = self.profile_repository.get_or_create(user_id, settings.default_timezone)
        return profile, get_profile_timezone(profile)

    @staticmethod
    def _now(now: Optional[datetime]) -> datetime:
        if now is None:
            return datetime.now(timezone.utc)
        return now if now.tzinfo else now.replace(tzinfo=timezone.utc)

    def get_revenue(
        self,
        user_id: str,
        timeframe: RevenueTimeframe = RevenueTimeframe.WEEKLY,
        now: Optional[datetime] = None,
    ) -> Revenue:
        """
        Completed lesson hours in the current period times the hourly rate.

        A booking counts when it lies entirely inside the period.
        """
        profile, tz = self._profile_and_tz(user_id)
        local_start, local_end = revenue_period(timeframe, to_local(self._now(now), tz))
        bookings = self.booking_repository.get_completed_in_period(
            user_id, local_to_utc(local_start, tz), local_to_utc(local_end, tz)
        )
        hours = sum(b.duration_hours for b in bookings)
        rate = float(profile.hourly_rate or Decimal("0"))
        return Revenue(
            timeframe=timeframe.value,
            period_start=local_start,
            period_end=local_end,
            completed_hours=hours,
            hourly_rate=rate,
            revenue=round(hours * rate, 2),
        )

    def get_weekly_hours(
        self, user_id: str, week_of: Optional[date] = None, now: Optional[datetime] = None
    ) -> WeeklyHours:
        """Scheduled and completed hours in the Monday-start week containing ``week_of``."""
        _, tz = self._profile_and_tz(user_id)
        day = week_of or to_local(self._now(now), tz).date()
        local_start, local_end = week_bounds(day)
        bookings = self.booking_repository.get_bookings_in_range(
            user_id,
            local_to_utc(local_start, tz),
            local_to_utc(local_end, tz),
            status_filter=[BookingStatus.SCHEDULED, BookingStatus.COMPLETED],
        )
        summary = WeeklyHours(week_start=local_start.date(), week_end=local_end.date())
        for booking in bookings:
            if booking.lesson_type == LessonType.PERSONAL.value:
                continue
            if booking.status == BookingStatus.COMPLETED.value:
                summary.completed_hours += booking.duration_hours
            else:
                summary.scheduled_hours += booking.duration_hours
            summary.lesson_count += 1
        return summary

    @BaseService.measure_operation("get_dashboard_summary")
    def get_summary(
        self,
        user_id: str,
        revenue_timeframe: RevenueTimeframe = RevenueTimeframe.WEEKLY,
        week_of: Optional[date] = None,
        show_all_lessons: bool = False,
        now: Optional[datetime] = None,
    ) -> DashboardSummary:
        current = self._now(now)
        profile, tz = self._profile_and_tz(user_id)
        local_today = to_local(current, tz).date()

        lessons = self.booking_repository.get_upcoming(
            user_id,
            current,
            lesson_type=LessonType.DRIVING_LESSON,
            limit=None if show_all_lessons else NEXT_LESSONS_LIMIT,
        )
        tests = self.booking_repository.get_upcoming(
            user_id, current, lesson_type=LessonType.DRIVING_TEST, limit=NEXT_DRIVING_TESTS_LIMIT
        )

        summaries = summarize_packages_by_student(
            self.prepaid_repository.list_for_user(user_id),
            status_filter="all",
            low_threshold=settings.low_prepaid_hours_threshold,
        )

        return DashboardSummary(
            display_name=profile.display_name,
            student_count=self.student_repository.count_for_user(user_id),
            upcoming_lesson_count=self.booking_repository.count_upcoming(
                user_id, current, LessonType.DRIVING_LESSON
            ),
            upcoming_test_count=self.booking_repository.count_upcoming(
                user_id, current, LessonType.DRIVING_TEST
            ),
            next_lessons=lessons,
            next_driving_tests=tests,
            test_statistics=compute_test_statistics(
                self.driving_test_repository.list_newest_first(user_id),
                StatsTimeframe.LAST_12_MONTHS,
                local_today,
            ),
            revenue=self.get_revenue(user_id, revenue_timeframe, current),
            total_prepaid_hours_remaining=sum(s.total_remaining_hours for s in summaries),
            low_prepaid_students=[
                LowHoursStudent(
                    student_id=s.student_id,
                    student_name=s.student_name,
                    remaining_hours=s.total_remaining_hours,
                )
                for s in summaries
                if s.is_low
            ],
            weekly_hours=self.get_weekly_hours(user_id, week_of or local_today, current),
        )
