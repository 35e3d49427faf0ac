"""
Service operations and booking activity reach the Prometheus registry.

Counters are process-wide, so every assertion compares against the value read
before the call.
"""

from datetime import date, datetime, timedelta
from unittest.mock import Mock

import pytest
import pytz

from drivedesk.core.enums import BookingStatus, RepeatFrequency
from drivedesk.core.exceptions import NotFoundException
from drivedesk.models.booking import Booking
from drivedesk.models.prepaid_hours import PrePaidHours
from drivedesk.monitoring.prometheus_metrics import REGISTRY
from drivedesk.schemas.booking import BookingCreate
from drivedesk.services.base import BaseService
from drivedesk.services.booking_service import BookingService


def _sample(name, **labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


class LessonLookupService(BaseService):
    @BaseService.measure_operation("find_lesson")
    def find_lesson(self, lesson_id):
        if lesson_id == "missing":
            raise NotFoundException("Booking not found")
        return {"id": lesson_id}


class TestMeasureOperation:
    def test_success_is_counted_and_timed(self):
        labels = {"service": "LessonLookupService", "operation": "find_lesson"}
        count_before = _sample("drivedesk_service_operations_total", status="success", **labels)
        timed_before = _sample("drivedesk_service_operation_duration_seconds_count", **labels)

        result = LessonLookupService(Mock()).find_lesson("01J00000000000000000000000")

        assert result == {"id": "01J00000000000000000000000"}
        assert (
            _sample("drivedesk_service_operations_total", status="success", **labels)
            == count_before + 1
        )
        assert (
            _sample("drivedesk_service_operation_duration_seconds_count", **labels)
            == timed_before + 1
        )

    def test_failure_is_counted_by_exception_type_and_reraised(self):
        labels = {"service": "LessonLookupService", "operation": "find_lesson"}
        errors_before = _sample(
            "drivedesk_errors_total", error_type="NotFoundException", **labels
        )
        failed_before = _sample("drivedesk_service_operations_total", status="error", **labels)

        with pytest.raises(NotFoundException):
            LessonLookupService(Mock()).find_lesson("missing")

        assert (
            _sample("drivedesk_errors_total", error_type="NotFoundException", **labels)
            == errors_before + 1
        )
        assert (
            _sample("drivedesk_service_operations_total", status="error", **labels)
            == failed_before + 1
        )


class TestBookingCounters:
    def test_series_counts_every_lesson(self, db, test_profile, test_student):
        labels = {"lesson_type": "Driving lesson", "repeat": "weekly"}
        before = _sample("drivedesk_bookings_created_total", **labels)

        BookingService(db).create_bookings(
            test_profile.id,
            BookingCreate(
                student_id=test_student.id,
                start_time=datetime(2025, 2, 4, 10, 0),
                repeat=RepeatFrequency.WEEKLY,
                repeat_count=3,
            ),
        )

        assert _sample("drivedesk_bookings_created_total", **labels) == before + 3

    def test_completion_and_reopening_track_prepaid_hours(self, db, test_profile, test_student):
        db.add(
            PrePaidHours(
                user_id=test_profile.id,
                student_id=test_student.id,
                package_hours=10,
                remaining_hours=10,
                purchase_date=date(2025, 1, 2),
            )
        )
        start = datetime(2025, 1, 14, 10, 0, tzinfo=pytz.UTC)
        booking = Booking(
            user_id=test_profile.id,
            student_id=test_student.id,
            title="Lesson",
            start_time=start,
            end_time=start + timedelta(minutes=90),
        )
        db.add(booking)
        db.commit()
        service = BookingService(db)
        deducted_before = _sample("drivedesk_prepaid_hours_deducted_total")
        refunded_before = _sample("drivedesk_prepaid_hours_refunded_total")

        service.change_status(test_profile.id, booking.id, BookingStatus.COMPLETED)
        service.change_status(test_profile.id, booking.id, BookingStatus.SCHEDULED)

        assert _sample("drivedesk_prepaid_hours_deducted_total") == pytest.approx(
            deducted_before + 1.5
        )
        assert _sample("drivedesk_prepaid_hours_refunded_total") == pytest.approx(
            refunded_before + 1.5
        )
