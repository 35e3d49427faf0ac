# backend/drivedesk/services/booking_service.py
"""
Booking Service for DriveDesk

Handles all booking-related business logic including:
- Creating single bookings and weekly/fortnightly series
- Updating times, details and status
- Drawing pre-paid hours down when a lesson is completed
- Listing views used by the lessons, notes and driving-test screens

Start times without an offset are read as the instructor's wall-clock time.
Everything is stored in UTC.
"""

from datetime import date, datetime, timedelta, timezone
import logging
from typing import Any, Dict, List, Optional, Union

import pytz
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.enums import BookingStatus, LessonType, RepeatFrequency, ViewMode
from ..core.exceptions import ValidationException
from ..core.timezone_utils import ensure_utc, get_profile_timezone, local_to_utc, to_local
from ..models.booking import Booking
from ..models.prepaid_hours import PrePaidHours
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.booking_repository import BookingRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.prepaid_hours_repository import (
    PrePaidHoursRepository,
    PrePaidHoursTransactionRepository,
)
from ..repositories.profile_repository import ProfileRepository
from ..repositories.student_repository import StudentRepository
from ..schemas.booking import BookingCreate, BookingUpdate
from .base import BaseService
from .calendar_viewport import FetchWindow, compute_fetch_window

logger = logging.getLogger(__name__)

# Floating point leftovers below this are treated as fully deducted.
_HOURS_EPSILON = 1e-9


class BookingService(BaseService):
    """
    Service layer for booking operations.

    Centralizes booking business logic and coordinates with the student and
    pre-paid hours repositories.
    """

    def __init__(
        self,
        db: Session,
        repository: Optional[BookingRepository] = None,
        student_repository: Optional[StudentRepository] = None,
        profile_repository: Optional[ProfileRepository] = None,
        prepaid_repository: Optional[PrePaidHoursRepository] = None,
        transaction_repository: Optional[PrePaidHoursTransactionRepository] = None,
    ):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_booking_repository(db)
        self.student_repository = (
            student_repository or RepositoryFactory.create_student_repository(db)
        )
        self.profile_repository = (
            profile_repository or RepositoryFactory.create_profile_repository(db)
        )
        self.prepaid_repository = (
            prepaid_repository or RepositoryFactory.create_prepaid_hours_repository(db)
        )
        self.transaction_repository = (
            transaction_repository or RepositoryFactory.create_prepaid_transaction_repository(db)
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _user_timezone(self, user_id: str) -> pytz.BaseTzInfo:
        profile = self.profile_repository.get_or_create(user_id, settings.default_timezone)
        return get_profile_timezone(profile)

    @staticmethod
    def _to_utc(value: datetime, tz: pytz.BaseTzInfo) -> datetime:
        """Aware values are normalised; naive values are the instructor's wall-clock time."""
        if value.tzinfo is None:
            return local_to_utc(value, tz)
        return ensure_utc(value)

    @staticmethod
    def build_title(student_name: Optional[str], lesson_type: LessonType) -> str:
        if student_name:
            return f"{student_name} - {lesson_type.value}"
        return lesson_type.value

    @staticmethod
    def series_start_times(
        first_start_local: datetime, repeat: RepeatFrequency, repeat_count: int
    ) -> List[datetime]:
        """
        Local start times for a booking series.

        Stepping is done in wall-clock time so a 10:00 lesson stays at 10:00
        across a daylight-saving change.
        """
        if repeat is RepeatFrequency.NONE:
            return [first_start_local]
        step = timedelta(weeks=repeat.interval_weeks)
        return [first_start_local + step * i for i in range(repeat_count)]

    def fetch_window_after_mutation(
        self, anchor_date: Optional[date], view_mode: Optional[Union[ViewMode, str]]
    ) -> Optional[FetchWindow]:
        """Window the caller should reload, when it told us what it is showing."""
        if anchor_date is None or view_mode is None:
            return None
        return compute_fetch_window(
            anchor_date, view_mode, agenda_lookahead_months=settings.agenda_lookahead_months
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_booking(self, user_id: str, booking_id: str) -> Booking:
        return self._require_owned(self.repository, booking_id, user_id, "Booking")

    @BaseService.measure_operation("get_bookings_in_range")
    def get_bookings_in_range(
        self, user_id: str, range_start: datetime, range_end: datetime
    ) -> List[Booking]:
        """Bookings overlapping the range; naive bounds are instructor wall-clock times."""
        tz = self._user_timezone(user_id)
        start_utc = self._to_utc(range_start, tz)
        end_utc = self._to_utc(range_end, tz)
        if start_utc > end_utc:
            raise ValidationException("Range start must not be after range end")
        return self.repository.get_bookings_in_range(user_id, start_utc, end_utc)

    def get_upcoming_lessons(
        self, user_id: str, limit: Optional[int] = None, now: Optional[datetime] = None
    ) -> List[Booking]:
        current = ensure_utc(now) if now else datetime.now(timezone.utc)
        return self.repository.get_upcoming(user_id, current, limit=limit)

    def get_driving_test_bookings(
        self,
        user_id: str,
        student_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        return self.repository.get_by_lesson_type(
            user_id, LessonType.DRIVING_TEST, student_id=student_id, status=status
        )

    def get_completed_lessons(self, user_id: str, student_id: Optional[str] = None) -> List[Booking]:
        return self.repository.get_completed(user_id, student_id=student_id)

    def get_lesson_notes(
        self, user_id: str, student_id: Optional[str] = None, search: Optional[str] = None
    ) -> List[Booking]:
        return self.repository.get_with_notes(user_id, student_id=student_id, search=search)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @BaseService.measure_operation("create_bookings")
    def create_bookings(self, user_id: str, data: BookingCreate) -> List[Booking]:
        """
        Create a booking or a repeating series.

        Args:
            user_id: Instructor creating the bookings
            data: Validated booking payload

        Returns:
            Created bookings in start order

        Raises:
            NotFoundException: If the student does not belong to the instructor
            ValidationException: If the series is longer than allowed
        """
        self.log_operation(
            "create_bookings",
            user_id=user_id,
            student_id=data.student_id,
            repeat=data.repeat.value,
            repeat_count=data.repeat_count,
        )

        repeat_count = 1 if data.repeat is RepeatFrequency.NONE else data.repeat_count
        if repeat_count > settings.max_repeat_bookings:
            raise ValidationException(
                f"A series can contain at most {settings.max_repeat_bookings} bookings",
                details={"repeat_count": repeat_count},
            )

        student = None
        if data.student_id:
            student = self._require_owned(
                self.student_repository, data.student_id, user_id, "Student"
            )

        tz = self._user_timezone(user_id)
        first_start_local = (
            data.start_time if data.start_time.tzinfo is None else to_local(data.start_time, tz)
        )
        lesson_minutes = timedelta(minutes=int(data.lesson_length))
        title = data.title or self.build_title(
            student.name if student is not None else None, data.lesson_type
        )

        rows: List[Dict[str, Any]] = []
        for start_local in self.series_start_times(first_start_local, data.repeat, repeat_count):
            start_utc = local_to_utc(start_local, tz)
            rows.append(
                {
                    "user_id": user_id,
                    "student_id": student.id if student is not None else None,
                    "title": title,
                    "description": data.description,
                    "lesson_type": data.lesson_type.value,
                    "targets_for_next_session": data.targets_for_next_session,
                    "start_time": start_utc,
                    "end_time": start_utc + lesson_minutes,
                    "status": BookingStatus.SCHEDULED.value,
                }
            )

        with self.transaction():
            bookings = self.repository.bulk_create(rows)

        prometheus_metrics.inc_bookings_created(
            data.lesson_type.value, data.repeat.value, len(bookings)
        )
        self.logger.info(f"Created {len(bookings)} booking(s) for user {user_id}")
        return bookings

    @BaseService.measure_operation("update_booking")
    def update_booking(self, user_id: str, booking_id: str, data: BookingUpdate) -> Booking:
        """
        Apply a partial update to a booking.

        A new start keeps the current length unless ``end_time`` or
        ``lesson_length`` is sent as well. A status change goes through
        :meth:`change_status` so pre-paid hours stay consistent.
        """
        booking = self.get_booking(user_id, booking_id)
        changes = data.model_dump(exclude_unset=True)
        self.log_operation("update_booking", booking_id=booking_id, fields=sorted(changes))

        new_status = changes.pop("status", None)
        lesson_length = changes.pop("lesson_length", None)
        tz = self._user_timezone(user_id)

        current_start = ensure_utc(booking.start_time)
        current_end = ensure_utc(booking.end_time)
        start = current_start
        end = current_end

        if changes.get("start_time") is not None:
            start = self._to_utc(changes.pop("start_time"), tz)
            end = start + (current_end - current_start)
        else:
            changes.pop("start_time", None)
        if changes.get("end_time") is not None:
            end = self._to_utc(changes.pop("end_time"), tz)
        else:
            changes.pop("end_time", None)
        if lesson_length is not None:
            end = start + timedelta(minutes=int(lesson_length))

        if start >= end:
            raise ValidationException(
                "Booking must end after it starts",
                details={"start_time": start.isoformat(), "end_time": end.isoformat()},
            )

        if "student_id" in changes and changes["student_id"]:
            self._require_owned(self.student_repository, changes["student_id"], user_id, "Student")
        if "lesson_type" in changes and changes["lesson_type"] is not None:
            changes["lesson_type"] = LessonType(changes["lesson_type"]).value
        if "title" in changes and changes["title"] is None:
            changes.pop("title")

        with self.transaction():
            self.repository.update_entity(booking, start_time=start, end_time=end, **changes)
            if new_status is not None:
                self._apply_status(user_id, booking, BookingStatus(new_status))

        return booking

    @BaseService.measure_operation("change_status")
    def change_status(self, user_id: str, booking_id: str, status: BookingStatus) -> Booking:
        """
        Move a booking between scheduled, completed and cancelled.

        Completing a lesson draws its length down from the student's pre-paid
        packages; leaving completed puts the hours back.
        """
        booking = self.get_booking(user_id, booking_id)
        self.log_operation(
            "change_status", booking_id=booking_id, old=booking.status, new=status.value
        )
        with self.transaction():
            self._apply_status(user_id, booking, status)
        return booking

    @BaseService.measure_operation("delete_booking")
    def delete_booking(self, user_id: str, booking_id: str) -> None:
        booking = self.get_booking(user_id, booking_id)
        self.log_operation("delete_booking", booking_id=booking_id)
        with self.transaction():
            self.repository.delete_entity(booking)

    # ------------------------------------------------------------------
    # Pre-paid hours
    # ------------------------------------------------------------------

    def _apply_status(self, user_id: str, booking: Booking, status: BookingStatus) -> None:
        old_status = BookingStatus(booking.status)
        if old_status is status:
            return
        if status is BookingStatus.COMPLETED:
            self._deduct_prepaid_hours(user_id, booking)
        elif old_status is BookingStatus.COMPLETED:
            self._refund_prepaid_hours(booking)
        self.repository.update_entity(booking, status=status.value)

    def _deduct_prepaid_hours(self, user_id: str, booking: Booking) -> float:
        """
        Draw the booking's length from the student's packages, oldest first.

        Never takes a package below zero. Returns the hours actually deducted.
        """
        if not booking.student_id:
            return 0.0

        hours_needed = (
            ensure_utc(booking.end_time) - ensure_utc(booking.start_time)
        ).total_seconds() / 3600.0
        packages: List[PrePaidHours] = self.prepaid_repository.for_student_oldest_first(
            user_id, booking.student_id
        )
        now = datetime.now(timezone.utc)
        deducted = 0.0

        for package in packages:
            if hours_needed - deducted <= _HOURS_EPSILON:
                break
            available = package.remaining_hours or 0.0
            if available <= 0:
                continue
            take = min(available, hours_needed - deducted)
            self.prepaid_repository.update_entity(package, remaining_hours=available - take)
            self.transaction_repository.create(
                user_id=user_id,
                pre_paid_hours_id=package.id,
                booking_id=booking.id,
                hours_deducted=take,
                transaction_date=now,
            )
            deducted += take

        if hours_needed - deducted > _HOURS_EPSILON:
            self.logger.info(
                "Booking %s needed %.2fh but only %.2fh of pre-paid hours were available",
                booking.id,
                hours_needed,
                deducted,
            )
        prometheus_metrics.add_prepaid_hours_deducted(deducted)
        return deducted

    def _refund_prepaid_hours(self, booking: Booking) -> float:
        """Reverse every deduction made for the booking."""
        refunded = 0.0
        for txn in self.transaction_repository.for_booking(booking.id):
            package = txn.package
            if package is not None:
                self.prepaid_repository.update_entity(
                    package, remaining_hours=(package.remaining_hours or 0.0) + txn.hours_deducted
                )
            refunded += txn.hours_deducted
            self.transaction_repository.delete_entity(txn)
        if refunded:
            self.logger.info("Refunded %.2fh of pre-paid hours for booking %s", refunded, booking.id)
        prometheus_metrics.add_prepaid_hours_refunded(refunded)
        return refunded
