"""Tests for DashboardService aggregates."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest
import pytz

from drivedesk.core.enums import BookingStatus, LessonType, RevenueTimeframe
from drivedesk.models.booking import Booking
from drivedesk.models.driving_test import DrivingTest
from drivedesk.models.prepaid_hours import PrePaidHours
from drivedesk.services.dashboard_service import DashboardService

# Wednesday, Europe/London on UTC
NOW = datetime(2025, 1, 15, 12, 0, tzinfo=pytz.UTC)


@pytest.fixture
def dashboard_service(db):
    return DashboardService(db)


def _booking(db, profile, student, start, minutes=60, status=BookingStatus.SCHEDULED, lesson_type=LessonType.DRIVING_LESSON):
    booking = Booking(
        user_id=profile.id,
        student_id=student.id if student is not None else None,
        title="Lesson",
        lesson_type=lesson_type.value,
        start_time=start,
        end_time=start + timedelta(minutes=minutes),
        status=status.value,
    )
    db.add(booking)
    db.commit()
    return booking


def test_weekly_revenue_counts_completed_hours(db, dashboard_service, test_profile, test_student):
    _booking(db, test_profile, test_student, datetime(2025, 1, 13, 10, 0, tzinfo=pytz.UTC), 90, BookingStatus.COMPLETED)
    _booking(db, test_profile, test_student, datetime(2025, 1, 14, 10, 0, tzinfo=pytz.UTC), 60, BookingStatus.COMPLETED)
    # Previous week and still-scheduled lessons do not count
    _booking(db, test_profile, test_student, datetime(2025, 1, 10, 10, 0, tzinfo=pytz.UTC), 60, BookingStatus.COMPLETED)
    _booking(db, test_profile, test_student, datetime(2025, 1, 16, 10, 0, tzinfo=pytz.UTC))

    revenue = dashboard_service.get_revenue(test_profile.id, RevenueTimeframe.WEEKLY, NOW)

    assert revenue.completed_hours == pytest.approx(2.5)
    assert revenue.hourly_rate == pytest.approx(40.0)
    assert revenue.revenue == pytest.approx(100.0)
    assert revenue.period_start == datetime(2025, 1, 13)


def test_daily_revenue_without_rate_is_zero(db, dashboard_service, test_profile, test_student):
    test_profile.hourly_rate = None
    db.commit()
    _booking(db, test_profile, test_student, datetime(2025, 1, 15, 9, 0, tzinfo=pytz.UTC), 60, BookingStatus.COMPLETED)

    revenue = dashboard_service.get_revenue(test_profile.id, RevenueTimeframe.DAILY, NOW)

    assert revenue.completed_hours == pytest.approx(1.0)
    assert revenue.revenue == 0


def test_weekly_hours_skip_personal_and_cancelled(db, dashboard_service, test_profile, test_student):
    _booking(db, test_profile, test_student, datetime(2025, 1, 13, 10, 0, tzinfo=pytz.UTC), 60, BookingStatus.COMPLETED)
    _booking(db, test_profile, test_student, datetime(2025, 1, 17, 10, 0, tzinfo=pytz.UTC), 120)
    _booking(db, test_profile, test_student, datetime(2025, 1, 17, 14, 0, tzinfo=pytz.UTC), 60, BookingStatus.CANCELLED)
    _booking(db, test_profile, None, datetime(2025, 1, 18, 14, 0, tzinfo=pytz.UTC), 60, lesson_type=LessonType.PERSONAL)

    hours = dashboard_service.get_weekly_hours(test_profile.id, date(2025, 1, 15), NOW)

    assert hours.week_start == date(2025, 1, 13)
    assert hours.completed_hours == pytest.approx(1.0)
    assert hours.scheduled_hours == pytest.approx(2.0)
    assert hours.total_hours == pytest.approx(3.0)
    assert hours.lesson_count == 2


def test_summary(db, dashboard_service, test_profile, test_student):
    for day in (16, 17, 20, 21):
        _booking(db, test_profile, test_student, datetime(2025, 1, day, 10, 0, tzinfo=pytz.UTC))
    _booking(
        db,
        test_profile,
        test_student,
        datetime(2025, 2, 3, 9, 0, tzinfo=pytz.UTC),
        lesson_type=LessonType.DRIVING_TEST,
    )
    db.add(
        PrePaidHours(
            user_id=test_profile.id,
            student_id=test_student.id,
            package_hours=10,
            remaining_hours=1.5,
            amount_paid=Decimal("350.00"),
            purchase_date=date(2024, 12, 1),
        )
    )
    db.add(
        DrivingTest(
            user_id=test_profile.id,
            student_id=test_student.id,
            test_date=date(2024, 11, 20),
            passed=True,
            driving_faults=3,
        )
    )
    db.commit()

    summary = dashboard_service.get_summary(test_profile.id, now=NOW)

    assert summary.display_name == "Sam Instructor"
    assert summary.student_count == 1
    assert summary.upcoming_lesson_count == 4
    assert len(summary.next_lessons) == 3
    assert summary.upcoming_test_count == 1
    assert len(summary.next_driving_tests) == 1
    assert summary.total_prepaid_hours_remaining == pytest.approx(1.5)
    assert [s.student_name for s in summary.low_prepaid_students] == ["Alex Learner"]
    assert summary.test_statistics.total == 1
    assert summary.weekly_hours.scheduled_hours == pytest.approx(2.0)


def test_summary_can_show_all_lessons(db, dashboard_service, test_profile, test_student):
    for day in (16, 17, 20, 21):
        _booking(db, test_profile, test_student, datetime(2025, 1, day, 10, 0, tzinfo=pytz.UTC))

    summary = dashboard_service.get_summary(test_profile.id, show_all_lessons=True, now=NOW)

    assert len(summary.next_lessons) == 4
    assert summary.test_statistics is None
