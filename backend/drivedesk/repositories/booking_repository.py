# backend/drivedesk/repositories/booking_repository.py
"""
Booking Repository for DriveDesk

Implements all data access operations for booking management:
- Range queries feeding the calendar fetch window
- Upcoming / completed / driving-test listings
- Lesson-note lookups
- Period queries for revenue figures

All instants passed in must be UTC; they are compared against stored UTC values.
"""

from datetime import datetime
import logging
from typing import List, Optional, Sequence, cast

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session, joinedload

from ..core.enums import BookingStatus, LessonType
from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from ..models.student import Student
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    """Repository for booking data access."""

    def __init__(self, db: Session):
        super().__init__(db, Booking)
        self.logger = logging.getLogger(__name__)

    def get_bookings_in_range(
        self,
        user_id: str,
        range_start: datetime,
        range_end: datetime,
        status_filter: Optional[Sequence[BookingStatus]] = None,
    ) -> List[Booking]:
        """
        Get bookings whose [start, end] interval touches [range_start, range_end].

        Args:
            user_id: Owning instructor
            range_start: Inclusive window start (UTC)
            range_end: Inclusive window end (UTC)
            status_filter: Optional statuses to keep

        Returns:
            Bookings ordered by start time
        """
        try:
            query = self._apply_eager_loading(self._build_query()).filter(
                Booking.user_id == user_id,
                Booking.start_time <= range_end,
                Booking.end_time >= range_start,
            )
            if status_filter:
                query = query.filter(Booking.status.in_([s.value for s in status_filter]))
            return cast(List[Booking], query.order_by(Booking.start_time).all())
        except Exception as e:
            self.logger.error(f"Error getting bookings in range: {str(e)}")
            raise RepositoryException(f"Failed to get bookings in range: {str(e)}")

    def get_upcoming(
        self,
        user_id: str,
        now: datetime,
        lesson_type: Optional[LessonType] = None,
        limit: Optional[int] = None,
    ) -> List[Booking]:
        """Scheduled bookings starting at or after ``now``, soonest first."""
        query = self._apply_eager_loading(self._build_query()).filter(
            Booking.user_id == user_id,
            Booking.status == BookingStatus.SCHEDULED.value,
            Booking.start_time >= now,
        )
        if lesson_type is not None:
            query = query.filter(Booking.lesson_type == lesson_type.value)
        query = query.order_by(Booking.start_time)
        if limit is not None:
            query = query.limit(limit)
        return self._execute_query(query)

    def count_upcoming(
        self, user_id: str, now: datetime, lesson_type: Optional[LessonType] = None
    ) -> int:
        query = self.db.query(func.count(Booking.id)).filter(
            Booking.user_id == user_id,
            Booking.status == BookingStatus.SCHEDULED.value,
            Booking.start_time >= now,
        )
        if lesson_type is not None:
            query = query.filter(Booking.lesson_type == lesson_type.value)
        return int(self._execute_scalar(query) or 0)

    def get_by_lesson_type(
        self,
        user_id: str,
        lesson_type: LessonType,
        student_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        """Bookings of one lesson type (e.g. driving tests), soonest first."""
        query = self._apply_eager_loading(self._build_query()).filter(
            Booking.user_id == user_id,
            Booking.lesson_type == lesson_type.value,
        )
        if student_id:
            query = query.filter(Booking.student_id == student_id)
        if status is not None:
            query = query.filter(Booking.status == status.value)
        return self._execute_query(query.order_by(Booking.start_time))

    def get_completed(self, user_id: str, student_id: Optional[str] = None) -> List[Booking]:
        """Completed lessons, most recent first."""
        query = self._apply_eager_loading(self._build_query()).filter(
            Booking.user_id == user_id,
            Booking.status == BookingStatus.COMPLETED.value,
        )
        if student_id:
            query = query.filter(Booking.student_id == student_id)
        return self._execute_query(query.order_by(Booking.start_time.desc()))

    def get_with_notes(
        self,
        user_id: str,
        student_id: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Booking]:
        """
        Bookings carrying a description or next-session targets.

        Args:
            user_id: Owning instructor
            student_id: Optional student filter
            search: Case-insensitive substring over title, notes, targets and student name

        Returns:
            Bookings with notes, most recent first
        """
        query = (
            self._build_query()
            .outerjoin(Student, Booking.student_id == Student.id)
            .options(joinedload(Booking.student))
            .filter(
                Booking.user_id == user_id,
                or_(
                    func.length(func.trim(func.coalesce(Booking.description, ""))) > 0,
                    func.length(func.trim(func.coalesce(Booking.targets_for_next_session, "")))
                    > 0,
                ),
            )
        )
        if student_id:
            query = query.filter(Booking.student_id == student_id)
        if search:
            pattern = f"%{search.strip().lower()}%"
            query = query.filter(
                or_(
                    func.lower(Booking.title).like(pattern),
                    func.lower(func.coalesce(Booking.description, "")).like(pattern),
                    func.lower(func.coalesce(Booking.targets_for_next_session, "")).like(pattern),
                    func.lower(func.coalesce(Student.name, "")).like(pattern),
                )
            )
        return self._execute_query(query.order_by(Booking.start_time.desc()))

    def get_completed_in_period(
        self, user_id: str, period_start: datetime, period_end: datetime
    ) -> List[Booking]:
        """Completed bookings lying entirely inside the period."""
        query = self._build_query().filter(
            Booking.user_id == user_id,
            Booking.status == BookingStatus.COMPLETED.value,
            Booking.start_time >= period_start,
            Booking.end_time <= period_end,
        )
        return self._execute_query(query)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Booking.student))
